# optimization/strategies/middle_slot.py
"""
Colocación de pilas especiales en la cara del medio.

Cada medio se evalúa junto a la cara con la que comparte carga (ver
PARES_MEDIO en la configuración). Se elige el medio cuyo par lleva menos
piezas; si la pila no cabe de ancho, se apila sobre el tope del medio.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from models.domain import Pila
from models.enums import Cara, Estrategia
from optimization.preferences import RestriccionColocacion
from optimization.strategies.base import EstrategiaColocacion
from optimization.strategies.stacking import puede_apilar


class ColocacionMedio(EstrategiaColocacion):

    ESTRATEGIA = Estrategia.MEDIO

    def carga_par(self, par: Tuple[str, str, str, str]) -> int:
        """Piezas en el medio + piezas en su cara pareja"""
        medio_comp, medio_cara, par_comp, par_cara = par
        carga = self.layout.piezas_cara(medio_comp, Cara(medio_cara))
        comp_par = self.layout.compartimiento(par_comp)
        if Cara(par_cara) in comp_par.lados:
            carga += self.layout.piezas_cara(par_comp, Cara(par_cara))
        return carga

    def _pares_validos(self, compartimientos: Optional[List[str]]) -> List[Tuple[str, str, str, str]]:
        ids = {c.id for c in self.layout.compartimientos}
        pares = []
        for par in getattr(self.config, "PARES_MEDIO", []):
            medio_comp = par[0]
            if medio_comp not in ids or par[2] not in ids:
                continue
            if compartimientos is not None and medio_comp not in compartimientos:
                continue
            if not self.layout.compartimiento(medio_comp).tiene_medio:
                continue
            pares.append(par)
        return pares

    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        if not pila.especial or pila.ancho > self.config.ANCHO_MAXIMO_MEDIO:
            return False

        if restriccion is not None and restriccion.compartimientos:
            permitidos = [c for c in restriccion.compartimientos
                          if compartimientos is None or c in compartimientos]
            compartimientos = permitidos

        pares = self._pares_validos(compartimientos)
        if not pares:
            return False

        # Menor carga; en empate gana el primero declarado
        par = min(pares, key=self.carga_par)
        carga = self.carga_par(par)
        if carga + pila.num_piezas > self.config.TECHO_FLEXIBILIDAD_MEDIO:
            return False

        comp = self.layout.compartimiento(par[0])
        lado = comp.lados[Cara.MEDIO]

        if pila.num_piezas <= self.config.TECHO_MEDIO and lado.ocupado + pila.ancho <= lado.capacidad:
            if restriccion is None or restriccion.permite_lado(
                self.layout.lado_geometrico(comp.id, Cara.MEDIO, pila.ancho)
            ):
                self._colocar(comp.id, Cara.MEDIO, pila)
                return True

        techo = self.contexto.techo(comp, Cara.MEDIO)
        for base in self.layout.pilas_de(comp.id, Cara.MEDIO):
            if restriccion is not None and not restriccion.permite_lado(base.lado):
                continue
            if puede_apilar(self.contexto, pila, base, comp, Cara.MEDIO, techo):
                self._colocar(comp.id, Cara.MEDIO, pila, base=base)
                return True

        return False

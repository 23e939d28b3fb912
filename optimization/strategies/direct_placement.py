# optimization/strategies/direct_placement.py
"""
Colocación directa de una pila como base (ocupa ancho en una cara).

Elección de cara entre frente y atrás:
- Regla de peso: el frente si está vacío y la pila lo deja bajo el 60 % del
  peso normal del grupo; si no, la cara más liviana.
- Caballete vertical con pila acostada: desbalance de cantidad, luego peso,
  luego espacio (umbral 20 %); sin desbalance, alternancia estricta.
"""

from __future__ import annotations

from typing import List, Optional

from models.domain import Pila
from models.enums import Cara, Estrategia
from models.layout import Compartimiento
from optimization.preferences import RestriccionColocacion
from optimization.strategies.base import EstrategiaColocacion


class ColocacionDirecta(EstrategiaColocacion):
    """
    Coloca pilas normales directamente en la primera cara con espacio,
    recorriendo los compartimientos en orden de prioridad.
    """

    ESTRATEGIA = Estrategia.BASE

    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        if pila.especial:
            return False

        for comp in self._compartimientos(restriccion, compartimientos):
            caras = [
                c for c in self._caras(comp, pila, restriccion, incluir_medio=False)
                if self.layout.cabe(comp.id, c, pila)
            ]
            if not caras:
                continue

            for cara in self.ordenar_caras(comp, caras, pila):
                if restriccion is not None:
                    lado = self.layout.lado_geometrico(comp.id, cara, pila.ancho)
                    if not restriccion.permite_lado(lado):
                        continue
                self._colocar(comp.id, cara, pila)
                return True

        return False

    def intentar_por_espacio(self, pila: Pila, estrategia: Estrategia = Estrategia.RESCATE) -> bool:
        """
        Primera cara de cualquier compartimiento donde la pila cabe, sin
        balance. El medio solo recibe pilas especiales.
        """
        for comp in self.layout.compartimientos:
            for cara, lado in comp.lados.items():
                if cara == Cara.MEDIO and not pila.especial:
                    continue
                if cara == Cara.MEDIO and pila.num_piezas > self.config.TECHO_MEDIO:
                    continue
                if lado.ocupado + pila.ancho <= lado.capacidad:
                    self._colocar(comp.id, cara, pila, estrategia=estrategia)
                    return True
        return False

    # ============ BALANCE DE CARAS ============

    def ordenar_caras(self, comp: Compartimiento, caras: List[Cara], pila: Pila) -> List[Cara]:
        """Caras donde cabe la pila, en orden de preferencia"""
        if Cara.FRENTE not in caras or Cara.ATRAS not in caras:
            return caras

        if comp.es_vertical and pila.acostada:
            return self._balance_acostadas(comp)

        return self._balance_por_peso(comp, pila)

    def _balance_por_peso(self, comp: Compartimiento, pila: Pila) -> List[Cara]:
        peso_frente = self.layout.peso_cara(comp.id, Cara.FRENTE)
        peso_atras = self.layout.peso_cara(comp.id, Cara.ATRAS)
        limite = self.config.UMBRAL_PESO_CARA * self.contexto.peso_grupo_normal

        frente_vacio = comp.lados[Cara.FRENTE].esta_vacio
        if frente_vacio and peso_frente + pila.peso < limite:
            return [Cara.FRENTE, Cara.ATRAS]

        if peso_frente <= peso_atras:
            return [Cara.FRENTE, Cara.ATRAS]
        return [Cara.ATRAS, Cara.FRENTE]

    def _balance_acostadas(self, comp: Compartimiento) -> List[Cara]:
        umbral = self.config.UMBRAL_DESBALANCE
        metricas = (
            lambda cara: self.layout.piezas_cara(comp.id, cara),
            lambda cara: self.layout.peso_cara(comp.id, cara),
            lambda cara: comp.lados[cara].ocupado,
        )

        for metrica in metricas:
            frente, atras = metrica(Cara.FRENTE), metrica(Cara.ATRAS)
            mayor = max(frente, atras)
            if mayor > 0 and abs(frente - atras) / mayor > umbral:
                return [Cara.FRENTE, Cara.ATRAS] if frente < atras else [Cara.ATRAS, Cara.FRENTE]

        # Alternancia estricta entre caras según pilas acostadas ya colocadas
        acostadas_frente = sum(1 for p in self.layout.pilas_base(comp.id, Cara.FRENTE) if p.acostada)
        acostadas_atras = sum(1 for p in self.layout.pilas_base(comp.id, Cara.ATRAS) if p.acostada)
        if acostadas_frente <= acostadas_atras:
            return [Cara.FRENTE, Cara.ATRAS]
        return [Cara.ATRAS, Cara.FRENTE]

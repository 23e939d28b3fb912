# optimization/salvage.py
"""
Rescate final de las pilas que ninguna estrategia pudo colocar.

1. Por peso ascendente, reintenta apilar (techo de rescate) prefiriendo
   topes de cadenas con al menos dos niveles sobre bases simples.
2. Si no, separa la pila por dimensión en sub-pila acostada / de pie y cada
   una prueba: tope de cadena activa → apilamiento simple → cadena múltiple
   → colocación directa por espacio.
3. La pila original separada nunca se reporta; solo sus sub-pilas.
"""

from __future__ import annotations

from typing import List, Tuple

from models.domain import Pila
from models.enums import Estrategia
from optimization.pile_builder import separar_por_dimension
from optimization.strategies.base import ContextoDistribucion
from optimization.strategies.direct_placement import ColocacionDirecta
from optimization.strategies.stacking import ApilamientoSimple, CadenaMultiple, puede_apilar
from services.constants import DEBUG_DISTRIBUCION


class Rescate:
    """
    Pasada de rescate sobre las pilas no asignadas de toda la corrida.
    """

    def __init__(self, contexto: ContextoDistribucion):
        self.contexto = contexto
        self.layout = contexto.layout
        self.config = contexto.client_config
        self.simple = ApilamientoSimple(contexto, rescate=True)
        self.multiple = CadenaMultiple(contexto, rescate=True)
        self.directa = ColocacionDirecta(contexto)

    def ejecutar(self, pilas: List[Pila]) -> Tuple[List[Pila], List[Pila]]:
        """
        Args:
            pilas: Pilas no asignadas

        Returns:
            Tupla (pilas_asignadas_en_rescate, pilas_no_asignadas_final)
        """
        asignadas: List[Pila] = []
        no_asignadas: List[Pila] = []

        fase_previa = self.contexto.fase
        self.contexto.fase = "rescate"
        try:
            for pila in sorted(pilas, key=lambda p: p.peso):
                if self.apilar_preferente(pila):
                    asignadas.append(pila)
                    continue

                for sub in separar_por_dimension(pila, self.config):
                    if self.colocar_subpila(sub):
                        asignadas.append(sub)
                    else:
                        no_asignadas.append(sub)

                if DEBUG_DISTRIBUCION:
                    print(f"[RESCATE] Pila {pila.id} separada ({pila.num_piezas} piezas)")
        finally:
            self.contexto.fase = fase_previa

        return asignadas, no_asignadas

    def apilar_preferente(self, pila: Pila) -> bool:
        """Apila primero sobre cadenas profundas (>= 2 niveles), luego sobre el resto"""
        candidatos = list(self.simple.candidatos(pila))
        if not candidatos:
            return False

        profundos = [c for c in candidatos if self.layout.profundidad(c[2].id) >= 2]
        comp, cara, base = (profundos or candidatos)[0]
        self.simple._colocar(comp.id, cara, pila, base=base, estrategia=Estrategia.RESCATE)
        return True

    def apilar_en_ancla(self, pila: Pila) -> bool:
        """Sobre el tope de alguna cadena múltiple activa"""
        for comp in self.layout.compartimientos:
            for cara, lado in comp.lados.items():
                if not lado.tiene_cadena:
                    continue
                tope = self.layout.tope(lado.cadena_ancla_id)
                techo = self.contexto.techo(comp, cara, rescate=True)
                if puede_apilar(self.contexto, pila, tope, comp, cara, techo):
                    self.simple._colocar(comp.id, cara, pila, base=tope, estrategia=Estrategia.RESCATE)
                    return True
        return False

    def colocar_subpila(self, sub: Pila) -> bool:
        return (
            self.apilar_en_ancla(sub)
            or self.simple.intentar(sub)
            or self.multiple.intentar(sub)
            or self.directa.intentar_por_espacio(sub)
        )

# optimization/strategies/preference_placement.py
"""
Colocación según la preferencia del cliente.

Recorre solo los compartimientos y caras preferidos (en orden de prioridad)
y exige que la posición geométrica de la pila caiga en el lado del camión
pedido antes de colocarla.
"""

from __future__ import annotations

from typing import List, Optional

from models.domain import Pila
from models.enums import Estrategia
from optimization.preferences import RestriccionColocacion
from optimization.strategies.base import EstrategiaColocacion


class ColocacionPreferencia(EstrategiaColocacion):

    ESTRATEGIA = Estrategia.PREFERENCIA

    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        if restriccion is None or pila.especial:
            return False

        for comp in self._compartimientos(restriccion, compartimientos):
            for cara in self._caras(comp, pila, restriccion, incluir_medio=False):
                if not self.layout.cabe(comp.id, cara, pila):
                    continue
                lado = self.layout.lado_geometrico(comp.id, cara, pila.ancho)
                if not restriccion.permite_lado(lado):
                    continue
                self._colocar(comp.id, cara, pila)
                return True

        return False

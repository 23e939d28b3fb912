# optimization/preferences.py
"""
Preferencias de colocación por cliente.

El resolvedor solo consulta la tabla de la configuración; la restricción que
produce es la que respetan los pasos de agrupación y preferencia de la cascada.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, List

from models.domain import PreferenciaCliente
from models.enums import Cara, LadoCamion, PosicionPreferida


@dataclass(frozen=True)
class RestriccionColocacion:
    """
    Restricción de compartimientos, caras y lado del camión.
    Un campo vacío no restringe.
    """
    compartimientos: Tuple[str, ...] = ()
    posiciones: Tuple[PosicionPreferida, ...] = ()
    lado: Optional[LadoCamion] = None

    @classmethod
    def desde_preferencia(cls, pref: PreferenciaCliente) -> RestriccionColocacion:
        return cls(
            compartimientos=pref.compartimientos,
            posiciones=pref.posiciones,
            lado=pref.lado,
        )

    @property
    def vacia(self) -> bool:
        return not self.compartimientos and not self.posiciones and self.lado is None

    def ordenar_compartimientos(self, ids: List[str]) -> List[str]:
        """Solo los preferidos, en el orden de preferencia; todos si no hay"""
        if not self.compartimientos:
            return list(ids)
        return [c for c in self.compartimientos if c in ids]

    def caras_para(self, caras_disponibles: List[Cara]) -> List[Cara]:
        """
        Caras permitidas de un compartimiento (frente/atrás).
        FINAL es la última cara del compartimiento.
        """
        if not self.posiciones:
            return list(caras_disponibles)

        resultado: List[Cara] = []
        for posicion in self.posiciones:
            if posicion == PosicionPreferida.FRENTE:
                cara = Cara.FRENTE
            elif posicion == PosicionPreferida.ATRAS:
                cara = Cara.ATRAS
            else:
                cara = caras_disponibles[-1] if caras_disponibles else None

            if cara is not None and cara in caras_disponibles and cara not in resultado:
                resultado.append(cara)
        return resultado

    def permite_lado(self, lado: Optional[LadoCamion]) -> bool:
        return self.lado is None or lado == self.lado


class ResolvedorPreferencias:
    """
    Tabla de preferencias indexada por id numérico de cliente.
    """

    def __init__(self, client_config, caballetes: Tuple[str, ...] = ()):
        tabla = getattr(client_config, "PREFERENCIAS_CLIENTES", {}) or {}
        if not caballetes:
            caballetes = tuple(
                c["id"] for c in client_config.COMPARTIMIENTOS
                if c.get("tipo", "caballete") == "caballete"
            )
        self._preferencias: Dict[str, PreferenciaCliente] = {
            self._normalizar(cliente_id): PreferenciaCliente.from_config(valores, caballetes)
            for cliente_id, valores in tabla.items()
        }

    @staticmethod
    def _normalizar(cliente_id) -> str:
        valor = str(cliente_id).strip()
        return str(int(valor)) if valor.isdigit() else valor

    def obtener(self, cliente_id) -> Optional[PreferenciaCliente]:
        return self._preferencias.get(self._normalizar(cliente_id))

    def restriccion_para(self, cliente_id) -> Optional[RestriccionColocacion]:
        pref = self.obtener(cliente_id)
        if pref is None:
            return None
        restriccion = RestriccionColocacion.desde_preferencia(pref)
        return None if restriccion.vacia else restriccion

    def forzar_acostar(self, cliente_id) -> bool:
        pref = self.obtener(cliente_id)
        return bool(pref and pref.acostar)

    def __contains__(self, cliente_id) -> bool:
        return self.obtener(cliente_id) is not None

    def __len__(self) -> int:
        return len(self._preferencias)

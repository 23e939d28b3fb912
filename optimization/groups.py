# optimization/groups.py
"""
Generación de grupos de carga.
Particiona las piezas en grupos disjuntos por cliente (o por secuencia de
entrega) y define el orden en que se cargan.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any

from models.domain import Pieza


@dataclass
class GrupoCarga:
    """Piezas de un cliente (o de una secuencia) que se distribuyen juntas"""
    clave: str
    cliente_id: str
    cliente_nombre: str
    piezas: List[Pieza] = field(default_factory=list)

    @property
    def total_piezas(self) -> int:
        return len(self.piezas)


def ordenar_por_secuencia(items: List[Any]) -> List[Any]:
    """Orden estable por secuencia de entrega ascendente"""
    return sorted(items, key=lambda x: x.secuencia)


def agrupar_por_cliente(piezas: List[Pieza], por_secuencia: bool = False) -> List[GrupoCarga]:
    """
    Agrupa piezas por cliente (o por secuencia).

    Los grupos mantienen el orden de primera aparición en la entrada (que
    viene ordenada por secuencia) y luego se invierten: la última entrega
    se carga primero.

    Args:
        piezas: Piezas ordenadas por secuencia
        por_secuencia: Agrupar por número de secuencia en vez de cliente

    Returns:
        Lista de GrupoCarga en orden de carga
    """
    grupos: Dict[str, GrupoCarga] = {}

    for pieza in piezas:
        clave = str(pieza.secuencia) if por_secuencia else pieza.cliente_id
        if clave not in grupos:
            grupos[clave] = GrupoCarga(
                clave=clave,
                cliente_id=pieza.cliente_id,
                cliente_nombre=pieza.cliente_nombre,
            )
        grupos[clave].piezas.append(pieza)

    resultado = list(grupos.values())
    resultado.reverse()
    return resultado

# optimization/orientation.py
"""
Reglas de orientación de piezas.

Una pieza va "de pie" (ancho = lado menor, alto = lado mayor) salvo que
supere la altura del caballete, que su lado menor sea demasiado ancho para
ir parada, o que su tipo de vidrio exija ir acostada (familia TM).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from models.domain import Pieza
from models.enums import TipoVidrio


ALTURA_MAXIMA = 2450
LADO_MENOR_MAXIMO = 1200

TIPOS_ESPECIALES_DEFAULT = frozenset({
    TipoVidrio.PVB.value,
    TipoVidrio.LAMINADO_COMUN.value,
    TipoVidrio.LAMINADO_TEMPERADO.value,
    TipoVidrio.MOLDE.value,
    TipoVidrio.ECO_GLASS.value,
})

# Nombres más largos primero: "Laminado Temperado" antes que "Temperado",
# "TM1REF" antes que "TM1" y "TM"
_TIPOS_POR_LONGITUD = sorted(TipoVidrio, key=lambda t: len(t.value), reverse=True)


def detectar_tipo_vidrio(texto: str) -> TipoVidrio:
    """
    Detecta el tipo de vidrio a partir del código + descripción del producto.

    Returns:
        TipoVidrio encontrado; Temperado si no coincide ninguno
    """
    nombre = (texto or "").lower()
    for tipo in _TIPOS_POR_LONGITUD:
        if tipo.value.lower() in nombre:
            return tipo
    return TipoVidrio.TEMPERADO


def requiere_acostar_por_dimension(
    ancho: float,
    alto: float,
    altura_maxima: float = ALTURA_MAXIMA,
    lado_menor_maximo: float = LADO_MENOR_MAXIMO
) -> bool:
    return max(ancho, alto) > altura_maxima or min(ancho, alto) > lado_menor_maximo


def requiere_acostar(
    alto: float,
    ancho: float,
    tipo: TipoVidrio,
    altura_maxima: float = ALTURA_MAXIMA,
    lado_menor_maximo: float = LADO_MENOR_MAXIMO
) -> bool:
    """
    Indica si la pieza debe ir acostada.

    Args:
        alto, ancho: dimensiones en mm (en cualquier orden)
        tipo: tipo de vidrio; la familia TM siempre va acostada
    """
    if requiere_acostar_por_dimension(ancho, alto, altura_maxima, lado_menor_maximo):
        return True
    return tipo.es_familia_tm


def orientar_dimensiones(ancho: float, alto: float, acostada: bool) -> Tuple[float, float]:
    """Retorna (ancho, alto) orientados: acostada usa el lado mayor como ancho"""
    mayor, menor = max(ancho, alto), min(ancho, alto)
    if acostada:
        return mayor, menor
    return menor, mayor


def orientar(pieza: Pieza, acostada: bool) -> Pieza:
    """Copia de la pieza con la orientación pedida (idempotente)"""
    ancho, alto = orientar_dimensiones(pieza.ancho, pieza.alto, acostada)
    if acostada == pieza.acostada and ancho == pieza.ancho and alto == pieza.alto:
        return pieza
    return replace(
        pieza,
        ancho=ancho,
        alto=alto,
        acostada=acostada,
        requiere_acostar=pieza.requiere_acostar or acostada,
    )


def acostar_todas(piezas: Iterable[Pieza]) -> list:
    return [orientar(p, True) for p in piezas]


def es_especial(tipo: TipoVidrio, tipos_especiales=TIPOS_ESPECIALES_DEFAULT) -> bool:
    valor = tipo.value if isinstance(tipo, TipoVidrio) else str(tipo)
    return valor in tipos_especiales

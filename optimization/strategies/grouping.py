# optimization/strategies/grouping.py
"""
Estrategias de grupo: colocan varias pilas de un cliente de una vez.

- Grupo completo: prueba cada compartimiento dentro de una transacción y
  confirma solo si TODAS las pilas del grupo quedaron en él.
- Misma cara: todas las pilas normales de pie del grupo juntas en una cara.
"""

from __future__ import annotations

from typing import List, Optional

from models.domain import Pila
from models.enums import Cara, Estrategia, LadoCamion
from models.layout import Compartimiento
from optimization.preferences import RestriccionColocacion
from optimization.strategies.base import ContextoDistribucion
from optimization.strategies.direct_placement import ColocacionDirecta
from optimization.strategies.stacking import ApilamientoSimple, CadenaMultiple
from optimization.strategies.middle_slot import ColocacionMedio


def _lados_simulados(comp: Compartimiento, cara: Cara, pilas: List[Pila]) -> List[LadoCamion]:
    """Lado geométrico que tendría cada pila si se colocan en orden"""
    lado = comp.lados[cara]
    ocupado = lado.ocupado
    resultado = []
    for pila in pilas:
        medio = ocupado + pila.ancho / 2
        resultado.append(LadoCamion.CONDUCTOR if medio < lado.capacidad / 2 else LadoCamion.AYUDANTE)
        ocupado += pila.ancho
    return resultado


def colocar_misma_cara(
    contexto: ContextoDistribucion,
    pilas: List[Pila],
    restriccion: Optional[RestriccionColocacion] = None,
    compartimientos: Optional[List[str]] = None
) -> bool:
    """
    Coloca todas las pilas normales de pie (al menos dos) sin asignar en una
    misma cara frente/atrás si su ancho total cabe.

    Returns:
        True si se colocaron todas juntas
    """
    layout = contexto.layout
    de_pie = [p for p in pilas if not p.asignada and not p.especial and p.de_pie]
    if len(de_pie) < 2:
        return False

    ancho_total = sum(p.ancho for p in de_pie)
    colocador = ColocacionDirecta(contexto)

    for comp in colocador._compartimientos(restriccion, compartimientos):
        laterales = comp.caras_laterales()
        caras = restriccion.caras_para(laterales) if restriccion else laterales

        for cara in caras:
            lado = comp.lados[cara]
            if lado.ocupado + ancho_total > lado.capacidad:
                continue
            if restriccion is not None and not all(
                restriccion.permite_lado(l) for l in _lados_simulados(comp, cara, de_pie)
            ):
                continue

            for pila in de_pie:
                colocador._colocar(comp.id, cara, pila, estrategia=Estrategia.MISMA_CARA)
            return True

    return False


def _colocar_grupo_en(
    contexto: ContextoDistribucion,
    pilas: List[Pila],
    compartimiento_id: str,
    restriccion: Optional[RestriccionColocacion]
) -> bool:
    permitidos = [compartimiento_id]
    directa = ColocacionDirecta(contexto)
    simple = ApilamientoSimple(contexto)
    multiple = CadenaMultiple(contexto)
    medio = ColocacionMedio(contexto)

    colocar_misma_cara(contexto, pilas, restriccion, permitidos)

    for pila in pilas:
        if pila.asignada:
            continue

        if pila.especial:
            estrategias = (simple, multiple, medio)
        else:
            estrategias = (directa, simple, multiple)

        if not any(e.intentar(pila, restriccion, permitidos) for e in estrategias):
            return False

    return True


def intentar_grupo_completo(
    contexto: ContextoDistribucion,
    pilas: List[Pila],
    restriccion: Optional[RestriccionColocacion] = None
) -> bool:
    """
    Intenta colocar el grupo completo en un solo compartimiento.

    Cada compartimiento se prueba en una transacción; si alguna pila queda
    fuera, el layout (y la historia) vuelven exactamente al estado previo.

    Returns:
        True si el grupo completo quedó en un compartimiento
    """
    layout = contexto.layout
    ids = [c.id for c in layout.compartimientos]
    if restriccion is not None:
        ids = restriccion.ordenar_compartimientos(ids)

    fase_previa = contexto.fase
    contexto.fase = "grupo_completo"
    try:
        for compartimiento_id in ids:
            snapshot = layout.begin()
            largo_historia = len(contexto.historia_colocacion)

            if _colocar_grupo_en(contexto, pilas, compartimiento_id, restriccion):
                layout.commit(snapshot)
                return True

            layout.rollback(snapshot)
            del contexto.historia_colocacion[largo_historia:]
    finally:
        contexto.fase = fase_previa

    return False

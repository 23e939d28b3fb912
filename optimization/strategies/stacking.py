# optimization/strategies/stacking.py
"""
Apilamiento de pilas: simple (sobre el tope de una cadena) y múltiple
(una cadena que se apoya en varias pilas base a la vez).

REGLAS (en orden):
1. La base no tiene otra pila encima (cadenas lineales)
2. La base no está protegida
3. Una pila de pie nunca va sobre una acostada
4. Ancho de la pila <= ancho de la base, salvo que el lado tenga cadena activa
5. Piezas de la cadena + piezas de la pila <= techo del contexto
6. Especial solo sobre especial; normal nunca sobre especial
7. Especial sobre especial con PVB: techo reducido

Con una cadena múltiple activa en un lado, todo apilamiento de ese lado va
sobre el tope de esa cadena.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Tuple, Iterator

from models.domain import Pila
from models.enums import Cara, Estrategia, TipoVidrio
from models.layout import Compartimiento
from optimization.preferences import RestriccionColocacion
from optimization.strategies.base import EstrategiaColocacion, ContextoDistribucion


# ============================================================================
# REGLAS
# ============================================================================

def tipos_compatibles(pila: Pila, base: Pila) -> bool:
    if pila.especial:
        return base.especial
    return not base.especial


def puede_apilar(
    contexto: ContextoDistribucion,
    pila: Pila,
    base: Pila,
    compartimiento: Compartimiento,
    cara: Cara,
    techo: int
) -> bool:
    """
    Verifica si `pila` puede ir sobre `base` en la cara indicada.
    """
    layout = contexto.layout
    lado = compartimiento.lados[cara]

    if layout.tiene_encima(base.id):
        return False

    if base.protegida:
        return False

    if pila.de_pie and base.acostada:
        return False

    if pila.ancho > base.ancho and not lado.tiene_cadena:
        return False

    total = layout.piezas_en_cadena(base.id) + pila.num_piezas
    if total > techo:
        return False

    if not tipos_compatibles(pila, base):
        return False

    if pila.especial and base.contiene_tipo(TipoVidrio.PVB):
        if total > contexto.client_config.TECHO_PVB_ESPECIAL:
            return False

    return True


def puede_apilar_multiple(
    contexto: ContextoDistribucion,
    pila: Pila,
    miembros: Tuple[Pila, ...],
    compartimiento: Compartimiento,
    cara: Cara,
    techo: int
) -> Optional[Pila]:
    """
    Verifica si `pila` puede apoyarse sobre la combinación `miembros`.

    Returns:
        La raíz elegida para la cadena (el miembro con más piezas
        alcanzables) o None si la combinación no sirve
    """
    layout = contexto.layout

    if sum(m.ancho for m in miembros) < pila.ancho:
        return None

    total = sum(layout.piezas_en_cadena(m.id) for m in miembros) + pila.num_piezas
    if total > techo:
        return None

    if pila.especial and not all(m.especial for m in miembros):
        return None
    if not pila.especial and any(m.especial for m in miembros):
        return None

    if pila.de_pie and any(m.acostada for m in miembros):
        return None

    if pila.especial and any(m.contiene_tipo(TipoVidrio.PVB) for m in miembros):
        if total > contexto.client_config.TECHO_PVB_ESPECIAL:
            return None

    raiz = max(miembros, key=lambda m: layout.piezas_en_cadena(m.id))
    tope = layout.tope(raiz.id)

    if tope.protegida or (pila.de_pie and tope.acostada) or not tipos_compatibles(pila, tope):
        return None

    # Una sola cadena por lado: lo ya apilado debe colgar de la misma raíz
    for existente in layout.pilas_de(compartimiento.id, cara):
        if existente.es_apilada and layout.raiz(existente.id).id != raiz.id:
            return None

    return raiz


# ============================================================================
# ESTRATEGIAS
# ============================================================================

class ApilamientoSimple(EstrategiaColocacion):
    """
    Apila la pila sobre el tope de una cadena existente (o una pila base libre).
    """

    ESTRATEGIA = Estrategia.APILAMIENTO

    def __init__(self, contexto: ContextoDistribucion, rescate: bool = False):
        super().__init__(contexto)
        self.rescate = rescate

    def objetivos(self, comp: Compartimiento, cara: Cara) -> List[Pila]:
        """Topes libres de la cara; solo el de la cadena activa si la hay"""
        lado = comp.lados[cara]
        if lado.tiene_cadena:
            return [self.layout.tope(lado.cadena_ancla_id)]
        return [
            p for p in self.layout.pilas_de(comp.id, cara)
            if not self.layout.tiene_encima(p.id)
        ]

    def candidatos(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> Iterator[Tuple[Compartimiento, Cara, Pila]]:
        """Genera (compartimiento, cara, base) válidos en orden de prioridad"""
        for comp in self._compartimientos(restriccion, compartimientos):
            for cara in self._caras(comp, pila, restriccion):
                techo = self.contexto.techo(comp, cara, self.rescate)
                for base in self.objetivos(comp, cara):
                    if restriccion is not None and not restriccion.permite_lado(base.lado):
                        continue
                    if puede_apilar(self.contexto, pila, base, comp, cara, techo):
                        yield comp, cara, base

    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        for comp, cara, base in self.candidatos(pila, restriccion, compartimientos):
            self._colocar(comp.id, cara, pila, base=base)
            return True
        return False


class CadenaMultiple(EstrategiaColocacion):
    """
    Forma una cadena sobre una combinación de 2..N pilas base de una cara
    (por ancho descendente) cuando ninguna base sola puede recibir la pila.
    """

    ESTRATEGIA = Estrategia.CADENA_MULTIPLE

    def __init__(self, contexto: ContextoDistribucion, rescate: bool = False):
        super().__init__(contexto)
        self.rescate = rescate

    def buscar_combinacion(
        self,
        pila: Pila,
        comp: Compartimiento,
        cara: Cara
    ) -> Optional[Tuple[Tuple[Pila, ...], Pila]]:
        """
        Returns:
            (miembros, raiz) de la primera combinación válida, o None
        """
        lado = comp.lados[cara]
        if lado.tiene_cadena:
            return None

        bases = [
            p for p in self.layout.pilas_base(comp.id, cara)
            if not p.protegida
        ]
        if len(bases) < 2:
            return None

        bases.sort(key=lambda p: p.ancho, reverse=True)
        techo = self.contexto.techo_cadena(comp, self.rescate)
        max_tamano = min(self.config.MAX_COMBINACION_MULTIPLE, len(bases))

        for tamano in range(2, max_tamano + 1):
            for miembros in combinations(bases, tamano):
                raiz = puede_apilar_multiple(self.contexto, pila, miembros, comp, cara, techo)
                if raiz is not None:
                    return miembros, raiz
        return None

    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        for comp in self._compartimientos(restriccion, compartimientos):
            for cara in self._caras(comp, pila, restriccion, incluir_medio=False):
                encontrado = self.buscar_combinacion(pila, comp, cara)
                if encontrado is None:
                    continue

                _, raiz = encontrado
                tope = self.layout.tope(raiz.id)
                if restriccion is not None and not restriccion.permite_lado(tope.lado):
                    continue

                self.layout.fijar_ancla(comp.id, cara, raiz.id)
                self._colocar(comp.id, cara, pila, base=tope)
                return True
        return False

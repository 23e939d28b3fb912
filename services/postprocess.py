# services/postprocess.py
"""
Postprocesamiento de resultados de distribución.

- Resumen de conteos (clientes, piezas normales / especiales, asignadas)
- Vista apilada: cada cara lista solo sus pilas base, cada una con la
  secuencia de pilas apiladas encima

La vista apilada trabaja sobre dicts serializados para poder aplicarse
también a resultados compartidos.
"""

from __future__ import annotations
from typing import List, Dict, Any, Iterable

from models.domain import Pieza, Pila, Resumen


def compute_stats(
    piezas: Iterable[Pieza],
    asignadas: List[Pila],
    no_asignadas: List[Pila]
) -> Resumen:
    """
    Calcula el resumen de una distribución.

    Args:
        piezas: Todas las piezas de entrada
        asignadas: Pilas colocadas
        no_asignadas: Pilas sin colocar

    Returns:
        Resumen con los conteos
    """
    piezas = list(piezas)
    especiales = sum(1 for p in piezas if p.especial)

    return Resumen(
        numero_clientes=len({p.cliente_id for p in piezas}),
        total_piezas=len(piezas),
        piezas_normales=len(piezas) - especiales,
        piezas_especiales=especiales,
        piezas_asignadas=sum(p.num_piezas for p in asignadas),
        piezas_no_asignadas=sum(p.num_piezas for p in no_asignadas),
    )


def organizar_pilas_apiladas(compartimiento: Dict[str, Any]) -> Dict[str, Any]:
    """
    Vista derivada (no modifica la entrada) de un compartimiento serializado.

    Returns:
        Copia del compartimiento donde `lados[cara]['pilas']` contiene solo
        las pilas base y cada una trae `apiladas` en orden de abajo hacia arriba
    """
    lados_vista: Dict[str, Any] = {}

    for cara, lado in compartimiento.get("lados", {}).items():
        pilas = lado.get("pilas", [])
        hijo_de = {p["base_id"]: p for p in pilas if p.get("base_id")}

        bases = []
        for pila in pilas:
            if pila.get("base_id"):
                continue
            apiladas = []
            actual = hijo_de.get(pila["id"])
            while actual is not None:
                apiladas.append(dict(actual))
                actual = hijo_de.get(actual["id"])
            bases.append({**pila, "apiladas": apiladas})

        lados_vista[cara] = {**lado, "pilas": bases}

    return {**compartimiento, "lados": lados_vista}


def organizar_layout(compartimientos: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [organizar_pilas_apiladas(c) for c in compartimientos]


def _pilas_en_compartimientos(compartimientos: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        pila
        for comp in compartimientos
        for lado in comp.get("lados", {}).values()
        for pila in lado.get("pilas", [])
    ]


def resumen_desde_resultado(resultado: Dict[str, Any]) -> Dict[str, int]:
    """
    Recalcula los conteos a partir de un resultado serializado.

    Sin "pilas_asignadas" (resultado compartido) las asignadas se leen de las
    caras de cada compartimiento.
    """
    if "pilas_asignadas" in resultado:
        asignadas = resultado["pilas_asignadas"]
    else:
        asignadas = _pilas_en_compartimientos(resultado.get("compartimientos", []))
    no_asignadas = resultado.get("pilas_no_asignadas", [])

    piezas = [pz for pila in asignadas + no_asignadas for pz in pila.get("piezas", [])]
    especiales = sum(1 for pz in piezas if pz.get("especial"))

    return Resumen(
        numero_clientes=len({pz.get("cliente_id") for pz in piezas}),
        total_piezas=len(piezas),
        piezas_normales=len(piezas) - especiales,
        piezas_especiales=especiales,
        piezas_asignadas=sum(len(p.get("piezas", [])) for p in asignadas),
        piezas_no_asignadas=sum(len(p.get("piezas", [])) for p in no_asignadas),
    ).to_dict()

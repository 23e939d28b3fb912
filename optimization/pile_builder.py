# optimization/pile_builder.py
"""
Construcción de pilas a partir de las piezas de un grupo de cliente.

Flujo:
1. Productos → piezas individuales (una por unidad de cantidad), ya orientadas
2. Piezas del grupo → normales / especiales, por ancho descendente
3. Normales → lotes acostadas / de pie, cada lote en pilas de tamaño parejo
4. Especiales → pilas parejas de hasta UMBRAL_DIVISION_ESPECIAL piezas; si
   alguna pieza de una pila debe ir acostada, toda la pila va acostada
"""

from __future__ import annotations

import math
from typing import List, Callable

from models.domain import Producto, Pieza, Pila
from optimization.orientation import (
    requiere_acostar, requiere_acostar_por_dimension, orientar_dimensiones,
    orientar, acostar_todas, es_especial
)


def expandir_productos(productos: List[Producto], client_config) -> List[Pieza]:
    """
    Expande cada línea de producto en `cantidad` piezas orientadas.

    El orden de salida sigue el de `productos`; los ids son posicionales
    (línea-unidad) para que dos corridas con la misma entrada coincidan.
    """
    piezas: List[Pieza] = []

    for idx, producto in enumerate(productos):
        acostada = requiere_acostar(
            producto.alto, producto.ancho, producto.tipo,
            client_config.ALTURA_MAXIMA, client_config.LADO_MENOR_MAXIMO
        )
        ancho, alto = orientar_dimensiones(producto.ancho, producto.alto, acostada)
        especial = es_especial(producto.tipo, client_config.TIPOS_ESPECIALES)

        for unidad in range(producto.cantidad):
            piezas.append(Pieza(
                id=f"U{idx:04d}-{unidad:03d}",
                cliente_id=producto.cliente_id,
                cliente_nombre=producto.cliente_nombre,
                pedido=producto.pedido,
                producto=producto.producto,
                tipo=producto.tipo,
                ancho=ancho,
                alto=alto,
                peso=producto.peso,
                requiere_acostar=acostada,
                especial=especial,
                acostada=acostada,
                secuencia=producto.secuencia,
                ciudad=producto.ciudad,
            ))

    return piezas


def dividir_parejo(items: list, maximo: int) -> List[list]:
    """
    Divide en ceil(n / maximo) bloques de tamaño parejo: los primeros
    `n % bloques` bloques llevan una pieza más.
    """
    total = len(items)
    if total == 0:
        return []

    num_bloques = math.ceil(total / maximo)
    tamano_base = total // num_bloques
    restante = total % num_bloques

    bloques = []
    inicio = 0
    for i in range(num_bloques):
        tamano = tamano_base + (1 if i < restante else 0)
        bloques.append(items[inicio:inicio + tamano])
        inicio += tamano
    return bloques


def _por_ancho_desc(piezas: List[Pieza]) -> List[Pieza]:
    return sorted(piezas, key=lambda p: p.ancho, reverse=True)


def generar_pilas(
    piezas: List[Pieza],
    client_config,
    nuevo_id: Callable[[], str],
    forzar_acostar: bool = False
) -> List[Pila]:
    """
    Genera las pilas de un grupo.

    Args:
        piezas: Piezas de un solo grupo (cliente o secuencia)
        client_config: Configuración (MAX_PIEZAS_POR_PILA, UMBRAL_DIVISION_ESPECIAL)
        nuevo_id: Generador de ids de pila
        forzar_acostar: Preferencia del cliente de llevar todo acostado

    Returns:
        Pilas normales de pie, normales acostadas y especiales, en ese orden
    """
    if not piezas:
        return []

    cliente_id = piezas[0].cliente_id
    normales = [p for p in piezas if not p.especial]
    especiales = [p for p in piezas if p.especial]

    if forzar_acostar:
        normales = acostar_todas(normales)
        especiales = acostar_todas(especiales)

    normales = _por_ancho_desc(normales)
    especiales = _por_ancho_desc(especiales)

    pilas: List[Pila] = []

    # ========== Normales: un lote por orientación ==========
    de_pie = [p for p in normales if not p.acostada]
    acostadas = [p for p in normales if p.acostada]

    for lote in (de_pie, acostadas):
        for bloque in dividir_parejo(lote, client_config.MAX_PIEZAS_POR_PILA):
            pilas.append(Pila.desde_piezas(nuevo_id(), cliente_id, bloque, especial=False))

    # ========== Especiales ==========
    for bloque in dividir_parejo(especiales, client_config.UMBRAL_DIVISION_ESPECIAL):
        if any(p.requiere_acostar or p.acostada for p in bloque):
            bloque = _por_ancho_desc(acostar_todas(bloque))
        pilas.append(Pila.desde_piezas(nuevo_id(), cliente_id, bloque, especial=True))

    return pilas


def separar_por_dimension(pila: Pila, client_config) -> List[Pila]:
    """
    Separa una pila en sub-pila acostada (piezas que por dimensión no pueden
    ir de pie) y sub-pila de pie. Las piezas se re-orientan por dimensión.

    Returns:
        Hasta dos pilas nuevas con ids derivados (`{id}-A`, `{id}-P`) y
        `origen_id` apuntando a la pila original
    """
    acostadas: List[Pieza] = []
    de_pie: List[Pieza] = []

    for pieza in pila.piezas:
        if requiere_acostar_por_dimension(
            pieza.ancho, pieza.alto,
            client_config.ALTURA_MAXIMA, client_config.LADO_MENOR_MAXIMO
        ):
            acostadas.append(orientar(pieza, True))
        else:
            de_pie.append(orientar(pieza, False))

    resultado = []
    if acostadas:
        resultado.append(Pila.desde_piezas(
            f"{pila.id}-A", pila.cliente_id, _por_ancho_desc(acostadas),
            especial=pila.especial, origen_id=pila.id
        ))
    if de_pie:
        resultado.append(Pila.desde_piezas(
            f"{pila.id}-P", pila.cliente_id, _por_ancho_desc(de_pie),
            especial=pila.especial, origen_id=pila.id
        ))
    return resultado

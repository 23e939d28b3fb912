"""
Fixtures compartidas: configuración estándar, contexto de distribución y
fábricas de pilas / productos.
"""

import pytest

from core.config import get_client_config
from models.domain import Pieza, Pila, Producto
from models.enums import TipoVidrio
from optimization.strategies.base import ContextoDistribucion


@pytest.fixture
def config():
    return get_client_config("estandar")


@pytest.fixture
def contexto(config):
    """Contexto fresco (layout vacío) por test"""
    return ContextoDistribucion.crear(config)


@pytest.fixture
def layout(contexto):
    return contexto.layout


@pytest.fixture
def crear_pieza():
    def _crear(pieza_id, ancho=800, alto=2000, peso=10.0, especial=False,
               acostada=False, tipo=None, cliente_id="999"):
        if tipo is None:
            tipo = TipoVidrio.LAMINADO_COMUN if especial else TipoVidrio.TEMPERADO
        return Pieza(
            id=pieza_id,
            cliente_id=cliente_id,
            cliente_nombre=f"Cliente {cliente_id}",
            pedido="PED001",
            producto="VIDRO TESTE",
            tipo=tipo,
            ancho=ancho,
            alto=alto,
            peso=peso,
            requiere_acostar=acostada,
            especial=especial,
            acostada=acostada,
        )
    return _crear


@pytest.fixture
def crear_pila(crear_pieza):
    """
    Fábrica de pilas de piezas iguales. Los ids (T001, T002, ...) son únicos
    dentro de un test.
    """
    contador = {"n": 0}

    def _crear(ancho=800, alto=2000, num_piezas=1, peso=10.0, especial=False,
               acostada=False, tipo=None, cliente_id="999"):
        contador["n"] += 1
        pila_id = f"T{contador['n']:03d}"
        piezas = [
            crear_pieza(f"{pila_id}-{i}", ancho, alto, peso, especial, acostada, tipo, cliente_id)
            for i in range(num_piezas)
        ]
        return Pila.desde_piezas(pila_id, cliente_id, piezas, especial=especial)

    return _crear


@pytest.fixture
def crear_producto():
    def _crear(cliente_id="999", ancho=800, alto=2000, cantidad=1, peso=10.0,
               tipo=TipoVidrio.TEMPERADO, secuencia=0, pedido="PED001"):
        return Producto(
            cliente_id=cliente_id,
            cliente_nombre=f"Cliente {cliente_id}",
            pedido=pedido,
            producto=f"VIDRO {tipo.value}",
            ancho=ancho,
            alto=alto,
            peso=peso,
            cantidad=cantidad,
            tipo=tipo,
            secuencia=secuencia,
        )
    return _crear

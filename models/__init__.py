from .domain import Producto, Pieza, Pila, PreferenciaCliente, Resumen
from .enums import TipoVidrio, Orientacion, Cara, LadoCamion, PosicionPreferida, Estrategia
from .layout import LadoCompartimiento, Compartimiento, LayoutVehiculo, Snapshot
from .api import (
    ProductoEntrada, DistribucionRequest, DistribucionResponse,
    CompartirRequest, CompartirResponse, ApiladasRequest
)

__all__ = [
    "Producto", "Pieza", "Pila", "PreferenciaCliente", "Resumen",
    "TipoVidrio", "Orientacion", "Cara", "LadoCamion", "PosicionPreferida", "Estrategia",
    "LadoCompartimiento", "Compartimiento", "LayoutVehiculo", "Snapshot",
    "ProductoEntrada", "DistribucionRequest", "DistribucionResponse",
    "CompartirRequest", "CompartirResponse", "ApiladasRequest",
]

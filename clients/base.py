from abc import ABC
from typing import Dict, List, Any, FrozenSet, Tuple

class ClientConfig(ABC):
    """Clase base para configuraciones de operación (camión + reglas de carga)"""
    HEADER_ROW: int = 0
    AGRUPAR_POR_SECUENCIA: bool = False

    COLUMN_MAPPING: Dict[str, str]
    COMPARTIMIENTOS: List[Dict[str, Any]]
    PARES_MEDIO: List[Tuple[str, str, str, str]]

    # Límites de pilas
    MAX_PIEZAS_POR_PILA: int = 30
    UMBRAL_DIVISION_ESPECIAL: int = 12

    # Techos de piezas por contexto de apilamiento
    TECHO_GENERAL: int = 32
    TECHO_RESCATE: int = 34
    TECHO_MEDIO: int = 12
    TECHO_CADENA_HORIZONTAL: int = 32
    TECHO_CADENA_VERTICAL: int = 60
    TECHO_PVB_ESPECIAL: int = 25
    TECHO_FLEXIBILIDAD_MEDIO: int = 50

    MAX_COMBINACION_MULTIPLE: int = 4

    # Orientación
    ALTURA_MAXIMA: float = 2450
    LADO_MENOR_MAXIMO: float = 1200
    ANCHO_MAXIMO_MEDIO: float = 2200

    # Balance de caras
    UMBRAL_PESO_CARA: float = 0.6
    UMBRAL_DESBALANCE: float = 0.2

    TIPOS_ESPECIALES: FrozenSet[str]
    PREFERENCIAS_CLIENTES: Dict[str, Dict[str, Any]]

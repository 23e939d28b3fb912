# core/config.py
"""
Configuración central del sistema.
Registro y obtención de configuraciones de operación.
"""

from typing import Dict, Any

from clients.estandar import EstandarConfig

# Registro de configuraciones
_CLIENT_REGISTRY: Dict[str, Any] = {
    "estandar": EstandarConfig,
}


def get_client_config(client: str = "estandar"):
    """
    Obtiene la configuración registrada con ese nombre.

    Args:
        client: Nombre de la configuración (case-insensitive)

    Returns:
        Clase de configuración

    Raises:
        ValueError: Si la configuración no existe
    """
    client_lower = client.strip().lower()

    if client_lower not in _CLIENT_REGISTRY:
        available = ", ".join(_CLIENT_REGISTRY.keys())
        raise ValueError(
            f"Configuración desconocida: '{client}'. "
            f"Configuraciones disponibles: {available}"
        )

    return _CLIENT_REGISTRY[client_lower]


def register_client(name: str, config_class):
    """
    Registra una nueva configuración en el sistema.

    Args:
        name: Nombre de la configuración
        config_class: Clase de configuración
    """
    _CLIENT_REGISTRY[name.lower()] = config_class


def list_clients() -> list:
    """Retorna lista de configuraciones registradas"""
    return list(_CLIENT_REGISTRY.keys())

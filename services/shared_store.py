# services/shared_store.py
"""
Almacén en memoria de resultados compartidos.

Guarda el resultado serializado bajo un id opaco para recuperarlo después.
Acotado a MAX_COMPARTIDOS entradas: al llenarse se descarta la más antigua.
"""

from __future__ import annotations

import re
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from services.constants import MAX_COMPARTIDOS

_ID_VALIDO = re.compile(r"^[0-9a-f]{32}$")


class AlmacenCompartidos:

    def __init__(self, max_entradas: int = MAX_COMPARTIDOS):
        self.max_entradas = max(1, max_entradas)
        self._datos: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def id_valido(compartido_id: str) -> bool:
        return bool(_ID_VALIDO.match(compartido_id or ""))

    def guardar(self, contenido: Dict[str, Any]) -> str:
        compartido_id = uuid.uuid4().hex
        registro = {
            **contenido,
            "id": compartido_id,
            "creado_en": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            self._datos[compartido_id] = registro
            while len(self._datos) > self.max_entradas:
                self._datos.popitem(last=False)
        return compartido_id

    def obtener(self, compartido_id: str) -> Optional[Dict[str, Any]]:
        """
        Raises:
            ValueError: Si el id no tiene formato válido
        """
        if not self.id_valido(compartido_id):
            raise ValueError(f"ID inválido: '{compartido_id}'")
        with self._lock:
            return self._datos.get(compartido_id)

    def limpiar(self):
        with self._lock:
            self._datos.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._datos)


almacen = AlmacenCompartidos()

# services/constants.py
"""Constantes globales del distribuidor"""

import os

# ============ Debug ============
DEBUG_DISTRIBUCION = os.getenv("DEBUG_DISTRIBUCION", "false").lower() == "true"

# ============ Concurrencia (API) ============
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "60"))
MAX_CONCURRENT = max(int(os.getenv("MAX_CONCURRENT", str(os.cpu_count() or 4))), 1)
SEMAPHORE_TIMEOUT = float(os.getenv("SEMAPHORE_TIMEOUT", "3.0"))

# ============ HTTP ============
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
GZIP_MIN_SIZE = int(os.getenv("GZIP_MIN_SIZE", "512"))

# ============ Compartidos ============
MAX_COMPARTIDOS = int(os.getenv("MAX_COMPARTIDOS", "200"))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")

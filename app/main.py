# app/main.py
from __future__ import annotations

import asyncio
import os
from typing import List, Dict, Any

from fastapi import FastAPI, UploadFile, File, Path, HTTPException, Body, Form
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse

from core.config import list_clients
from models.api import (
    DistribucionRequest, DistribucionResponse, CompartirRequest, CompartirResponse, ApiladasRequest
)
from optimization.orchestrator import procesar, procesar_productos
from services.constants import (
    REQUEST_TIMEOUT, MAX_CONCURRENT, SEMAPHORE_TIMEOUT,
    FRONTEND_ORIGIN, GZIP_MIN_SIZE, PUBLIC_BASE_URL
)
from services.postprocess import organizar_layout, resumen_desde_resultado
from services.shared_store import almacen

# ----------------------------------------------------------------------------
# App & Middlewares
# ----------------------------------------------------------------------------
app = FastAPI(title="Glass Load Distributor API", version=os.getenv("APP_VERSION", "1.0"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_ORIGIN],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)
app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)

# ----------------------------------------------------------------------------
# Concurrencia
# ----------------------------------------------------------------------------
semaphore = asyncio.Semaphore(MAX_CONCURRENT)


async def _adquirir() -> None:
    try:
        await asyncio.wait_for(semaphore.acquire(), timeout=SEMAPHORE_TIMEOUT)
    except asyncio.TimeoutError:
        raise HTTPException(status_code=429, detail="Servicio ocupado: demasiadas distribuciones en curso. Intenta nuevamente.")


async def _ejecutar(func, *args) -> Dict[str, Any]:
    """Corre la distribución en un hilo con timeout y mapea errores a HTTP"""
    await _adquirir()
    try:
        result = await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=REQUEST_TIMEOUT)
        if isinstance(result, dict) and "error" in result:
            detail = result["error"] if isinstance(result["error"], str) else result["error"].get("message", "Error en distribución")
            raise HTTPException(status_code=400, detail=detail)
        return result
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Distribución excedió el límite de tiempo.")
    finally:
        semaphore.release()


@app.get("/", response_class=HTMLResponse)
def root() -> str:
    return "<h2>Backend de FastAPI funcionando</h2>"


@app.get("/ping")
async def ping() -> Dict[str, str]:
    return {"message": "pong"}


@app.get("/configuraciones")
async def configuraciones() -> Dict[str, List[str]]:
    return {"configuraciones": list_clients()}


# ----------------------------------------------------------------------------
# Distribución
# ----------------------------------------------------------------------------
@app.post("/distribuir", response_model=DistribucionResponse)
async def distribuir(
    file: UploadFile = File(...),
    configuracion: str = Form(default="estandar"),
) -> Dict[str, Any]:
    """Distribuye un archivo CSV/XLSX de productos en los compartimientos."""
    content = await file.read()
    await file.close()
    return await _ejecutar(procesar, content, file.filename, configuracion)


@app.post("/distribuir/json", response_model=DistribucionResponse)
async def distribuir_json(req: DistribucionRequest = Body(...)) -> Dict[str, Any]:
    """Distribuye productos ya tipados (sin archivo)."""
    registros = [p.model_dump() for p in req.productos]
    return await _ejecutar(procesar_productos, registros, req.configuracion)


@app.post("/postprocess/apiladas")
async def api_apiladas(req: ApiladasRequest = Body(...)) -> Dict[str, Any]:
    """Vista de cada cara con sus pilas base y lo apilado encima."""
    try:
        return {"compartimientos": organizar_layout(req.compartimientos)}
    except (KeyError, TypeError) as e:
        raise HTTPException(status_code=400, detail=f"Compartimientos mal formados: {e}")


# ----------------------------------------------------------------------------
# Compartir
# ----------------------------------------------------------------------------
@app.post("/compartir", response_model=CompartirResponse)
async def compartir(req: CompartirRequest = Body(...)) -> Dict[str, str]:
    contenido = req.model_dump()
    # el resumen guardado siempre corresponde a las pilas guardadas
    try:
        contenido["resumen"] = resumen_desde_resultado(contenido)
    except (AttributeError, TypeError) as e:
        raise HTTPException(status_code=400, detail=f"Resultado mal formado: {e}")
    compartido_id = almacen.guardar(contenido)
    return {
        "id": compartido_id,
        "url": f"{PUBLIC_BASE_URL.rstrip('/')}/compartido/{compartido_id}",
    }


@app.get("/compartido/{compartido_id}")
async def compartido(compartido_id: str = Path(...)) -> Dict[str, Any]:
    try:
        registro = almacen.obtener(compartido_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if registro is None:
        raise HTTPException(status_code=404, detail="Resumen no encontrado")
    return registro

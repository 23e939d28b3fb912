"""
API pública del distribuidor.
Orquesta el flujo completo: productos → grupos → pilas → cascada de
colocación → rescate → resultado.
"""

from __future__ import annotations

from typing import List, Dict, Any, Tuple

from models.domain import Producto, Pila
from optimization.groups import agrupar_por_cliente, ordenar_por_secuencia
from optimization.orientation import detectar_tipo_vidrio
from optimization.pile_builder import expandir_productos, generar_pilas
from optimization.salvage import Rescate
from optimization.strategies.base import ContextoDistribucion, ResultadoDistribucion
from optimization.strategies.direct_placement import ColocacionDirecta
from optimization.strategies.grouping import intentar_grupo_completo, colocar_misma_cara
from optimization.strategies.middle_slot import ColocacionMedio
from optimization.strategies.preference_placement import ColocacionPreferencia
from optimization.strategies.stacking import ApilamientoSimple, CadenaMultiple
from core.config import get_client_config
from services.constants import DEBUG_DISTRIBUCION
from services.file_processor import read_file, process_dataframe
from services.postprocess import compute_stats


def procesar(content: bytes, filename: str, client: str = "estandar") -> Dict[str, Any]:
    """
    API principal: distribuye el contenido de un archivo CSV/XLSX.

    Args:
        content: Contenido del archivo
        filename: Nombre del archivo (define el formato)
        client: Nombre de la configuración

    Returns:
        Dict con el resultado de la distribución o error
    """
    try:
        config = get_client_config(client)
        df = read_file(content, filename, config)
        productos = process_dataframe(df, config)
        resultado = distribuir_piezas(productos, config)
        return {**resultado.to_dict(), "archivo": filename}

    except Exception as e:
        import traceback as _tb
        return {
            "error": {
                "message": str(e),
                "traceback": _tb.format_exc()[:5000]
            }
        }


def procesar_productos(registros: List[Dict[str, Any]], client: str = "estandar") -> Dict[str, Any]:
    """
    Igual que `procesar`, pero con productos ya tipados (entrada JSON).
    """
    try:
        config = get_client_config(client)
        productos = registros_a_productos(registros)
        return distribuir_piezas(productos, config).to_dict()

    except Exception as e:
        import traceback as _tb
        return {
            "error": {
                "message": str(e),
                "traceback": _tb.format_exc()[:5000]
            }
        }


def registros_a_productos(registros: List[Dict[str, Any]]) -> List[Producto]:
    """Convierte dicts de entrada a Producto; detecta el tipo si no viene"""
    productos = []
    for r in registros:
        datos = dict(r)
        if not datos.get("tipo"):
            datos["tipo"] = detectar_tipo_vidrio(datos.get("producto", ""))
        if not datos.get("cliente_nombre"):
            datos["cliente_nombre"] = datos.get("cliente_id", "")
        productos.append(Producto(**datos))
    return productos


# ============================================================================
# DISTRIBUCIÓN
# ============================================================================

def distribuir_piezas(productos: List[Producto], client_config) -> ResultadoDistribucion:
    """
    Distribuye los productos en los compartimientos del camión.

    Args:
        productos: Productos normalizados
        client_config: Configuración (layout, límites, preferencias)

    Returns:
        ResultadoDistribucion con layout, pilas asignadas / no asignadas,
        resumen e historia de colocación
    """
    contexto = ContextoDistribucion.crear(client_config)

    productos = ordenar_por_secuencia(productos)
    piezas = expandir_productos(productos, client_config)
    grupos = agrupar_por_cliente(piezas, client_config.AGRUPAR_POR_SECUENCIA)

    asignadas: List[Pila] = []
    no_asignadas: List[Pila] = []

    for grupo in grupos:
        pilas = generar_pilas(
            grupo.piezas,
            client_config,
            contexto.nuevo_id_pila,
            forzar_acostar=contexto.preferencias.forzar_acostar(grupo.cliente_id),
        )
        ok, pendientes = distribuir_grupo(contexto, pilas, grupo.cliente_id)
        asignadas.extend(ok)
        no_asignadas.extend(pendientes)

        if DEBUG_DISTRIBUCION:
            print(
                f"[DISTRIBUCION] Grupo {grupo.clave}: {len(pilas)} pilas, "
                f"{len(pendientes)} sin asignar"
            )

    if no_asignadas:
        rescatadas, no_asignadas = Rescate(contexto).ejecutar(no_asignadas)
        asignadas.extend(rescatadas)

    if DEBUG_DISTRIBUCION:
        valido, errores = contexto.layout.validar_integridad()
        if not valido:
            print(f"[DISTRIBUCION] ⚠️ Layout inconsistente: {errores}")

    return ResultadoDistribucion(
        layout=contexto.layout,
        pilas_asignadas=asignadas,
        pilas_no_asignadas=no_asignadas,
        resumen=compute_stats(piezas, asignadas, no_asignadas),
        historia_colocacion=contexto.historia_colocacion,
    )


def distribuir_grupo(
    contexto: ContextoDistribucion,
    pilas: List[Pila],
    cliente_id: str
) -> Tuple[List[Pila], List[Pila]]:
    """
    Cascada de colocación para las pilas de un grupo.

    Orden:
    1. Grupo completo en un compartimiento (transaccional)
    2. Pilas normales de pie juntas en una cara
    3. Preferencia del cliente
    4. Colocación directa (normales)
    5. Apilamiento simple, luego cadena múltiple
    6. Medio (especiales)

    Returns:
        Tupla (pilas_asignadas, pilas_no_asignadas) del grupo
    """
    normales = sorted([p for p in pilas if not p.especial], key=lambda p: p.peso)
    especiales = [p for p in pilas if p.especial]
    ordenadas = normales + especiales

    contexto.peso_grupo_normal = sum(p.peso for p in normales)
    restriccion = contexto.preferencias.restriccion_para(cliente_id)

    if not intentar_grupo_completo(contexto, ordenadas, restriccion):
        colocar_misma_cara(contexto, ordenadas, restriccion)

        if restriccion is not None:
            preferencia = ColocacionPreferencia(contexto)
            for pila in ordenadas:
                if not pila.asignada:
                    preferencia.intentar(pila, restriccion)

        directa = ColocacionDirecta(contexto)
        simple = ApilamientoSimple(contexto)
        multiple = CadenaMultiple(contexto)
        medio = ColocacionMedio(contexto)

        for pila in ordenadas:
            if pila.asignada:
                continue
            if not pila.especial and directa.intentar(pila):
                continue
            if simple.intentar(pila) or multiple.intentar(pila):
                continue
            if pila.especial:
                medio.intentar(pila)

    asignadas = [p for p in ordenadas if p.asignada]
    pendientes = [p for p in ordenadas if not p.asignada]
    return asignadas, pendientes

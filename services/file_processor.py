# services/file_processor.py
from __future__ import annotations

import re
from io import BytesIO, StringIO
from typing import List, Dict, Tuple

import pandas as pd

from models.domain import Producto
from optimization.orientation import detectar_tipo_vidrio

_PATRON_CLIENTE = re.compile(r"^(\d+)\s*[–-]\s*(.+)")
_SEPARADORES = (";", ",", "\t")


# === Lectura de archivo ===

def detectar_separador(primera_linea: str) -> str:
    """Primer separador que divide la línea de encabezado; ';' por defecto"""
    for separador in _SEPARADORES:
        if len(primera_linea.split(separador)) > 1:
            return separador
    return ";"


def _decodificar(content: bytes) -> str:
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError("No se pudo decodificar el archivo CSV")


def read_file(content: bytes, filename: str, client_config) -> pd.DataFrame:
    """
    Lee un CSV (separador autodetectado) o un Excel en un DataFrame de texto.

    Raises:
        ValueError: Formato no soportado o archivo ilegible
    """
    nombre = (filename or "").lower()

    try:
        if nombre.endswith(".csv") or nombre.endswith(".txt"):
            texto = _decodificar(content)
            lineas = [l for l in texto.splitlines() if l.strip()]
            if not lineas:
                return pd.DataFrame()
            separador = detectar_separador(lineas[0])
            df = pd.read_csv(
                StringIO("\n".join(lineas)),
                sep=separador,
                dtype=str,
                header=client_config.HEADER_ROW,
                skipinitialspace=True,
            )
        elif nombre.endswith((".xlsx", ".xlsm")):
            df = pd.read_excel(
                BytesIO(content),
                engine="openpyxl",
                header=client_config.HEADER_ROW,
                dtype=str,
            )
        else:
            raise ValueError("Formato de archivo no soportado")

    except Exception as e:
        raise ValueError(f"[ERROR] Al leer el archivo: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    return df


# === Transformaciones ===

def extraer_cliente(valor: str) -> Tuple[str, str]:
    """'1234 - Nombre' → ('1234', 'Nombre'); si no coincide, (valor, valor)"""
    texto = str(valor or "").strip()
    match = _PATRON_CLIENTE.match(texto)
    if match:
        return match.group(1), match.group(2).strip()
    return texto, texto


def normalizar_peso(valor) -> float:
    """
    Peso en kg. Con separador decimal ('.' o ',') el valor ya está en kg;
    un entero viene en gramos.
    """
    texto = str(valor or "").strip()
    if not texto:
        return 0.0
    peso = float(texto.replace(",", "."))
    if "." in texto or "," in texto:
        return peso
    return peso / 1000


def warn_missing_columns(df: pd.DataFrame, mapping: Dict[str, str], requeridas: List[str]) -> List[str]:
    missing = [mapping[c] for c in requeridas if mapping[c] not in df.columns]
    if missing:
        raise ValueError(f"[ERROR] Columnas no encontradas en el archivo: {missing}")
    return missing


def process_dataframe(df_full: pd.DataFrame, client_config) -> List[Producto]:
    """
    Convierte las filas del archivo a Producto.

    - Cliente 'id - nombre' → cliente_id / cliente_nombre
    - Tipo de vidrio desde código + descripción del producto
    - Descarta filas sin cliente o con cantidad / dimensiones no positivas
    - Ordena por secuencia de entrega (estable)
    """
    if df_full.empty:
        return []

    mapping = client_config.COLUMN_MAPPING
    requeridas = ["CLIENTE", "CANTIDAD", "ANCHO", "ALTO"]
    warn_missing_columns(df_full, mapping, requeridas)

    rename_map = {excel: internal for internal, excel in mapping.items() if excel in df_full.columns}
    df = df_full[list(rename_map.keys())].rename(columns=rename_map).copy().fillna("")

    for col in mapping:
        if col not in df.columns:
            df[col] = ""

    # Numéricos
    df["CANTIDAD"] = pd.to_numeric(df["CANTIDAD"], errors="coerce").fillna(0).astype(int)
    df["ANCHO"] = pd.to_numeric(df["ANCHO"], errors="coerce").fillna(0)
    df["ALTO"] = pd.to_numeric(df["ALTO"], errors="coerce").fillna(0)
    df["SECUENCIA"] = pd.to_numeric(df["SECUENCIA"], errors="coerce").fillna(0).astype(int)

    # Filtros
    df = df[df["CLIENTE"].astype(str).str.strip() != ""]
    df = df[(df["CANTIDAD"] > 0) & (df["ANCHO"] > 0) & (df["ALTO"] > 0)]

    df = df.sort_values("SECUENCIA", kind="stable")

    productos = []
    for row in df.to_dict(orient="records"):
        cliente_id, cliente_nombre = extraer_cliente(row["CLIENTE"])
        descripcion = row["DESCRIPCION"] or row["TIPO_DESCRIPCION"]
        texto_producto = f"{row['PRODUCTO']} {descripcion}".strip()

        productos.append(Producto(
            cliente_id=cliente_id,
            cliente_nombre=cliente_nombre,
            pedido=str(row["PEDIDO"]),
            producto=texto_producto,
            ancho=float(row["ANCHO"]),
            alto=float(row["ALTO"]),
            peso=normalizar_peso(row["PESO"]),
            cantidad=int(row["CANTIDAD"]),
            tipo=detectar_tipo_vidrio(texto_producto),
            secuencia=int(row["SECUENCIA"]),
            ciudad=str(row["CIUDAD"]),
        ))

    return productos

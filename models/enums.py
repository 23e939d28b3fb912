from enum import Enum


class TipoVidrio(str, Enum):
    """Tipos de vidrio reconocidos en la descripción del producto"""
    PVB = "PVB"
    TEMPERADO = "Temperado"
    LAMINADO_COMUN = "Laminado Comum"
    MOLDE = "Molde"
    ECO_GLASS = "Eco Glass"
    LAMINADO_TEMPERADO = "Laminado Temperado"
    TM = "TM"
    TM1 = "TM1"
    TM2 = "TM2"
    TM3 = "TM3"
    TM4 = "TM4"
    TM1REF = "TM1REF"
    TM2REF = "TM2REF"
    TM3REF = "TM3REF"
    TM4REF = "TM4REF"
    TM5ESCD = "TM5ESCD"

    @property
    def es_familia_tm(self) -> bool:
        """Indica si el vidrio pertenece a la familia TM (siempre va acostado)"""
        return self.value.startswith("TM")


class Orientacion(str, Enum):
    """Orientación física del caballete sobre el camión"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Cara(str, Enum):
    """Caras de un compartimiento donde se apoyan pilas"""
    FRENTE = "frente"
    ATRAS = "atras"
    MEDIO = "medio"


class LadoCamion(str, Enum):
    """Lado del camión según la posición geométrica de la pila"""
    CONDUCTOR = "conductor"
    AYUDANTE = "ayudante"

    @classmethod
    def from_string(cls, valor: str) -> "LadoCamion":
        """Acepta los nombres usados en planilla (MOTORISTA / AJUDANTE)"""
        valor_norm = (valor or "").strip().upper()
        if valor_norm in ("MOTORISTA", "CONDUCTOR"):
            return cls.CONDUCTOR
        if valor_norm in ("AJUDANTE", "AYUDANTE"):
            return cls.AYUDANTE
        raise ValueError(f"Lado desconocido: '{valor}'")


class PosicionPreferida(str, Enum):
    """Posición pedida por el cliente dentro del compartimiento"""
    FRENTE = "FRENTE"
    ATRAS = "ATRAS"
    FINAL = "FINAL"

    @classmethod
    def from_string(cls, valor: str) -> "PosicionPreferida":
        return cls(valor.strip().upper())


class Estrategia(str, Enum):
    """Estrategias de la cascada de colocación (en orden de prioridad)"""
    MISMA_CARA = "misma_cara"
    PREFERENCIA = "preferencia"
    BASE = "base"
    APILAMIENTO = "apilamiento"
    CADENA_MULTIPLE = "cadena_multiple"
    MEDIO = "medio"
    RESCATE = "rescate"

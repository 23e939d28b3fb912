from __future__ import annotations
from dataclasses import dataclass, field
from .enums import TipoVidrio, LadoCamion, Cara, PosicionPreferida
from typing import List, Dict, Any, Optional, Tuple


@dataclass
class Producto:
    """
    Línea de producto normalizada (una fila del archivo de carga).
    Representa `cantidad` piezas iguales de un mismo pedido.
    """
    # ========== Identificadores ==========
    cliente_id: str
    cliente_nombre: str
    pedido: str
    producto: str

    # ========== Dimensiones físicas (mm / kg por pieza) ==========
    ancho: float
    alto: float
    peso: float
    cantidad: int

    # ========== Clasificación ==========
    tipo: TipoVidrio = TipoVidrio.TEMPERADO
    secuencia: int = 0
    ciudad: str = ""

    def __post_init__(self):
        if isinstance(self.tipo, str):
            self.tipo = TipoVidrio(self.tipo)

        if self.cantidad <= 0:
            raise ValueError(
                f"Cantidad debe ser positiva, got {self.cantidad} "
                f"para producto {self.producto} del pedido {self.pedido}"
            )

        if self.ancho <= 0 or self.alto <= 0:
            raise ValueError(
                f"Dimensiones deben ser positivas, got {self.ancho}x{self.alto} "
                f"para producto {self.producto} del pedido {self.pedido}"
            )


@dataclass(frozen=True)
class Pieza:
    """
    Una plancha física de vidrio.

    `ancho` es la huella horizontal que ocupa en el lado del compartimiento y
    `alto` la altura resultante, ambos ya orientados. Solo cambian cuando se
    fuerza la orientación (se crea una copia con ancho/alto intercambiados).
    """
    id: str
    cliente_id: str
    cliente_nombre: str
    pedido: str
    producto: str
    tipo: TipoVidrio
    ancho: float
    alto: float
    peso: float
    requiere_acostar: bool
    especial: bool
    acostada: bool
    secuencia: int = 0
    ciudad: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'cliente_id': self.cliente_id,
            'cliente': self.cliente_nombre,
            'pedido': self.pedido,
            'producto': self.producto,
            'tipo': self.tipo.value,
            'ancho': self.ancho,
            'alto': self.alto,
            'peso': round(self.peso, 3),
            'requiere_acostar': self.requiere_acostar,
            'especial': self.especial,
            'acostada': self.acostada,
            'secuencia': self.secuencia,
        }


@dataclass
class Pila:
    """
    Grupo de piezas que se mueve y se apila como una unidad.

    Una pila con `base_id` está apilada sobre otra pila (la referencia es solo
    un id dentro del layout, nunca un objeto). Sin `base_id` es una pila base
    que ocupa ancho en su lado.
    """
    id: str
    cliente_id: str
    piezas: List[Pieza]
    especial: bool
    ancho: float
    alto: float
    peso: float

    # ========== Asignación (None si no está asignada) ==========
    asignada: bool = False
    lado: Optional[LadoCamion] = None
    compartimiento_id: Optional[str] = None
    cara: Optional[Cara] = None
    base_id: Optional[str] = None
    protegida: bool = False

    # Pila original cuando fue creada al separar piezas en el rescate
    origen_id: Optional[str] = None

    @classmethod
    def desde_piezas(
        cls,
        id: str,
        cliente_id: str,
        piezas: List[Pieza],
        especial: bool,
        origen_id: Optional[str] = None
    ) -> Pila:
        """
        Construye una pila calculando sus dimensiones desde las piezas.

        - ancho: el de la pieza más ancha (las piezas vienen ordenadas
          por ancho descendente, así que coincide con la primera)
        - alto: máxima altura de las piezas
        - peso: suma de pesos
        """
        if not piezas:
            raise ValueError(f"Pila {id} debe tener al menos 1 pieza")

        return cls(
            id=id,
            cliente_id=cliente_id,
            piezas=list(piezas),
            especial=especial,
            ancho=max(p.ancho for p in piezas),
            alto=max(p.alto for p in piezas),
            peso=sum(p.peso for p in piezas),
            origen_id=origen_id,
        )

    @property
    def num_piezas(self) -> int:
        return len(self.piezas)

    @property
    def acostada(self) -> bool:
        """Una pila está acostada si alguna de sus piezas lo está"""
        return any(p.acostada for p in self.piezas)

    @property
    def de_pie(self) -> bool:
        return not self.acostada

    @property
    def es_apilada(self) -> bool:
        return self.base_id is not None

    def contiene_tipo(self, tipo: TipoVidrio) -> bool:
        return any(p.tipo == tipo for p in self.piezas)

    def marcar_colocada(
        self,
        compartimiento_id: str,
        cara: Cara,
        lado: LadoCamion,
        base_id: Optional[str] = None,
        protegida: bool = False
    ):
        """Registra la asignación de la pila a un lado de compartimiento"""
        self.asignada = True
        self.compartimiento_id = compartimiento_id
        self.cara = cara
        self.lado = lado
        self.base_id = base_id
        self.protegida = protegida

    def desmarcar(self):
        """Remueve la asignación (solo usado al revertir una transacción)"""
        self.asignada = False
        self.compartimiento_id = None
        self.cara = None
        self.lado = None
        self.base_id = None
        self.protegida = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'cliente_id': self.cliente_id,
            'ancho': self.ancho,
            'alto': self.alto,
            'peso': round(self.peso, 3),
            'especial': self.especial,
            'acostada': self.acostada,
            'asignada': self.asignada,
            'lado': self.lado.value if self.lado else None,
            'compartimiento': self.compartimiento_id,
            'cara': self.cara.value if self.cara else None,
            'base_id': self.base_id,
            'protegida': self.protegida,
            'origen_id': self.origen_id,
            'num_piezas': self.num_piezas,
            'piezas': [p.to_dict() for p in self.piezas],
        }


@dataclass(frozen=True)
class PreferenciaCliente:
    """
    Preferencias de colocación de un cliente puntual.
    Todos los campos son opcionales: solo restringen lo que declaran.
    """
    lado: Optional[LadoCamion] = None
    compartimientos: Tuple[str, ...] = ()
    posiciones: Tuple[PosicionPreferida, ...] = ()
    acostar: bool = False

    @classmethod
    def from_config(
        cls,
        config_dict: Dict[str, Any],
        caballetes: Tuple[str, ...] = ()
    ) -> PreferenciaCliente:
        """
        Constructor desde la tabla de preferencias de la configuración.

        `compartimiento` acepta un id, una lista priorizada de ids o True
        (cualquier caballete, en cuyo caso se usan `caballetes`).
        """
        lado = config_dict.get('lado')
        compartimiento = config_dict.get('compartimiento')
        posicion = config_dict.get('posicion')

        if compartimiento is True:
            compartimientos = tuple(caballetes)
        elif isinstance(compartimiento, str):
            compartimientos = (compartimiento,)
        elif compartimiento:
            compartimientos = tuple(compartimiento)
        else:
            compartimientos = ()

        if isinstance(posicion, str):
            posiciones = (PosicionPreferida.from_string(posicion),)
        elif posicion:
            posiciones = tuple(PosicionPreferida.from_string(p) for p in posicion)
        else:
            posiciones = ()

        return cls(
            lado=LadoCamion.from_string(lado) if lado else None,
            compartimientos=compartimientos,
            posiciones=posiciones,
            acostar=bool(config_dict.get('acostar', False)),
        )


@dataclass
class Resumen:
    """Conteos derivados de una distribución"""
    numero_clientes: int = 0
    total_piezas: int = 0
    piezas_normales: int = 0
    piezas_especiales: int = 0
    piezas_asignadas: int = 0
    piezas_no_asignadas: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'numero_clientes': self.numero_clientes,
            'total_piezas': self.total_piezas,
            'piezas_normales': self.piezas_normales,
            'piezas_especiales': self.piezas_especiales,
            'piezas_asignadas': self.piezas_asignadas,
            'piezas_no_asignadas': self.piezas_no_asignadas,
        }

# optimization/strategies/base.py
"""
Clases base para las estrategias de colocación.

Define el contexto compartido de una corrida y la interfaz común de las
estrategias de la cascada.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from models.domain import Pila, Resumen
from models.enums import Cara, Estrategia
from models.layout import LayoutVehiculo, Compartimiento
from optimization.preferences import ResolvedorPreferencias, RestriccionColocacion


@dataclass
class ContextoDistribucion:
    """
    Estado de una corrida de distribución.
    Se crea fresco por corrida y se pasa a todas las estrategias.
    """
    client_config: Any
    layout: LayoutVehiculo
    preferencias: ResolvedorPreferencias

    # Fase actual de la cascada ('grupo_completo', 'cascada', 'rescate')
    fase: str = "cascada"

    # Peso total de las pilas normales del grupo en curso (balance de caras)
    peso_grupo_normal: float = 0.0

    historia_colocacion: List[Dict[str, Any]] = field(default_factory=list)
    _contador_pilas: int = 0

    @classmethod
    def crear(cls, client_config) -> ContextoDistribucion:
        return cls(
            client_config=client_config,
            layout=LayoutVehiculo.from_config(client_config),
            preferencias=ResolvedorPreferencias(client_config),
        )

    def nuevo_id_pila(self) -> str:
        """Ids secuenciales: la misma entrada produce los mismos ids"""
        self._contador_pilas += 1
        return f"M{self._contador_pilas:04d}"

    def registrar(self, estrategia: Estrategia, pila: Pila):
        self.historia_colocacion.append({
            'fase': self.fase,
            'estrategia': estrategia.value,
            'pila_id': pila.id,
            'cliente_id': pila.cliente_id,
            'compartimiento': pila.compartimiento_id,
            'cara': pila.cara.value if pila.cara else None,
            'lado': pila.lado.value if pila.lado else None,
            'base_id': pila.base_id,
            'num_piezas': pila.num_piezas,
        })

    # ============ TECHOS DE APILAMIENTO ============

    def techo_cadena(self, compartimiento: Compartimiento, rescate: bool = False) -> int:
        """Techo de una cadena múltiple: mayor en el caballete vertical"""
        cfg = self.client_config
        techo = cfg.TECHO_CADENA_VERTICAL if compartimiento.es_vertical else cfg.TECHO_CADENA_HORIZONTAL
        if rescate:
            return max(techo, cfg.TECHO_RESCATE)
        return techo

    def techo(self, compartimiento: Compartimiento, cara: Cara, rescate: bool = False) -> int:
        """
        Máximo de piezas en una cadena según el contexto:
        medio < general < rescate; un lado con cadena activa usa el techo de cadena.
        """
        cfg = self.client_config
        if cara == Cara.MEDIO:
            return cfg.TECHO_MEDIO

        if compartimiento.lados[cara].tiene_cadena:
            return self.techo_cadena(compartimiento, rescate)

        return cfg.TECHO_RESCATE if rescate else cfg.TECHO_GENERAL


@dataclass
class ResultadoDistribucion:
    """
    Resultado completo de una distribución.
    """
    layout: LayoutVehiculo
    pilas_asignadas: List[Pila] = field(default_factory=list)
    pilas_no_asignadas: List[Pila] = field(default_factory=list)
    resumen: Resumen = field(default_factory=Resumen)
    historia_colocacion: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def piezas_asignadas(self) -> int:
        return sum(p.num_piezas for p in self.pilas_asignadas)

    @property
    def piezas_no_asignadas(self) -> int:
        return sum(p.num_piezas for p in self.pilas_no_asignadas)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'compartimientos': self.layout.to_dict(),
            'pilas_asignadas': [p.to_dict() for p in self.pilas_asignadas],
            'pilas_no_asignadas': [p.to_dict() for p in self.pilas_no_asignadas],
            'resumen': self.resumen.to_dict(),
            'historia_colocacion': list(self.historia_colocacion),
        }


class EstrategiaColocacion(ABC):
    """
    Clase base abstracta para las estrategias de colocación de una pila.

    Cada estrategia intenta colocar UNA pila y retorna si lo logró. Los
    parámetros opcionales acotan dónde puede hacerlo:
    - restriccion: preferencia del cliente (compartimientos, caras, lado)
    - compartimientos: ids permitidos (prueba de grupo en un compartimiento)
    """

    ESTRATEGIA: Estrategia

    def __init__(self, contexto: ContextoDistribucion):
        self.contexto = contexto
        self.layout = contexto.layout
        self.config = contexto.client_config

    @abstractmethod
    def intentar(
        self,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> bool:
        """
        Intenta colocar la pila.

        Returns:
            True si la pila quedó colocada
        """
        pass

    def _compartimientos(
        self,
        restriccion: Optional[RestriccionColocacion] = None,
        compartimientos: Optional[List[str]] = None
    ) -> List[Compartimiento]:
        ids = [c.id for c in self.layout.compartimientos]
        if compartimientos is not None:
            ids = [i for i in ids if i in compartimientos]
        if restriccion is not None:
            ids = restriccion.ordenar_compartimientos(ids)
        return [self.layout.compartimiento(i) for i in ids]

    def _caras(
        self,
        compartimiento: Compartimiento,
        pila: Pila,
        restriccion: Optional[RestriccionColocacion] = None,
        incluir_medio: bool = True
    ) -> List[Cara]:
        """Caras candidatas; el medio solo para pilas especiales"""
        laterales = compartimiento.caras_laterales()
        if restriccion is not None:
            caras = restriccion.caras_para(laterales)
        else:
            caras = list(laterales)

        sin_posicion = restriccion is None or not restriccion.posiciones
        if incluir_medio and pila.especial and compartimiento.tiene_medio and sin_posicion:
            caras.append(Cara.MEDIO)
        return caras

    def _colocar(
        self,
        compartimiento_id: str,
        cara: Cara,
        pila: Pila,
        base: Optional[Pila] = None,
        estrategia: Optional[Estrategia] = None
    ) -> Pila:
        """Coloca y registra; una base especial acostada queda protegida"""
        proteger = base is None and pila.especial and pila.acostada
        self.layout.colocar(compartimiento_id, cara, pila, base=base, proteger=proteger)
        self.contexto.registrar(estrategia or self.ESTRATEGIA, pila)
        return pila

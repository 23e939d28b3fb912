"""
Modelo físico de la carga: compartimientos, sus caras y las pilas colocadas.

REGLAS:
-------
- ocupado + restante == capacidad para cada lado, siempre
- solo una pila base consume ancho; una pila apilada no
- una pila recibe a lo sumo UNA pila encima (cadenas lineales)
- toda mutación pasa por `LayoutVehiculo.colocar` / `fijar_ancla`,
  que registran el estado previo en la transacción abierta
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Any

from models.domain import Pila
from models.enums import Cara, Orientacion, LadoCamion


@dataclass
class LadoCompartimiento:
    """
    Cara de un compartimiento con capacidad lineal fija.
    Mantiene el orden de colocación de sus pilas (ids).
    """
    nombre: Cara
    capacidad: float
    ocupado: float = 0.0
    pilas: List[str] = field(default_factory=list)

    # Raíz de la única cadena múltiple activa en este lado
    cadena_ancla_id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.nombre, str):
            self.nombre = Cara(self.nombre)
        if self.capacidad <= 0:
            raise ValueError(f"Capacidad debe ser > 0: {self.capacidad}")

    @property
    def restante(self) -> float:
        return self.capacidad - self.ocupado

    @property
    def tiene_cadena(self) -> bool:
        return self.cadena_ancla_id is not None

    @property
    def esta_vacio(self) -> bool:
        return len(self.pilas) == 0


@dataclass
class Compartimiento:
    """
    Caballete (o bastidor) del camión con sus caras nombradas.
    """
    id: str
    orientacion: Orientacion
    altura: float
    lados: Dict[Cara, LadoCompartimiento]
    tipo: str = "caballete"
    peso_total: float = 0.0

    def __post_init__(self):
        if isinstance(self.orientacion, str):
            self.orientacion = Orientacion(self.orientacion)

    @property
    def es_vertical(self) -> bool:
        return self.orientacion == Orientacion.VERTICAL

    @property
    def tiene_medio(self) -> bool:
        return Cara.MEDIO in self.lados

    def caras_laterales(self) -> List[Cara]:
        """Caras que reciben pilas normales (frente y atrás, en ese orden)"""
        return [c for c in (Cara.FRENTE, Cara.ATRAS) if c in self.lados]

    @classmethod
    def from_config(cls, config_dict: Dict[str, Any]) -> Compartimiento:
        """Constructor desde la definición de la configuración"""
        lados = {
            Cara(nombre): LadoCompartimiento(nombre=Cara(nombre), capacidad=float(capacidad))
            for nombre, capacidad in config_dict['lados'].items()
        }
        return cls(
            id=config_dict['id'],
            orientacion=Orientacion(config_dict.get('orientacion', 'horizontal')),
            altura=float(config_dict.get('altura', 2450)),
            lados=lados,
            tipo=config_dict.get('tipo', 'caballete'),
        )


@dataclass
class _EstadoLado:
    ocupado: float
    pilas: List[str]
    cadena_ancla_id: Optional[str]


@dataclass
class Snapshot:
    """
    Estado previo de lo que se tocó desde `begin()`.
    Solo guarda los lados y compartimientos efectivamente modificados.
    """
    lados: Dict[Tuple[str, Cara], _EstadoLado] = field(default_factory=dict)
    pesos: Dict[str, float] = field(default_factory=dict)
    pilas_nuevas: List[str] = field(default_factory=list)
    cerrada: bool = False


class LayoutVehiculo:
    """
    Estado mutable de una distribución: compartimientos + arena de pilas.

    Las pilas colocadas se indexan por id; los enlaces `base_id` se resuelven
    contra este índice, por lo que recorrer una cadena es una búsqueda y no
    puede haber ciclos (siempre se agrega sobre el tope actual).
    """

    def __init__(self, compartimientos: List[Compartimiento]):
        self.compartimientos = compartimientos
        self._por_id: Dict[str, Compartimiento] = {c.id: c for c in compartimientos}
        self.pilas: Dict[str, Pila] = {}
        self._hijos: Dict[str, str] = {}
        self._transacciones: List[Snapshot] = []

    @classmethod
    def from_config(cls, client_config) -> LayoutVehiculo:
        return cls([Compartimiento.from_config(c) for c in client_config.COMPARTIMIENTOS])

    # ============ CONSULTAS ============

    def compartimiento(self, compartimiento_id: str) -> Compartimiento:
        try:
            return self._por_id[compartimiento_id]
        except KeyError:
            raise ValueError(f"Compartimiento desconocido: '{compartimiento_id}'")

    def lado(self, compartimiento_id: str, cara: Cara) -> LadoCompartimiento:
        comp = self.compartimiento(compartimiento_id)
        if cara not in comp.lados:
            raise ValueError(f"Compartimiento {compartimiento_id} no tiene cara '{cara.value}'")
        return comp.lados[cara]

    def capacidad_de(self, compartimiento_id: str, cara: Cara) -> float:
        return self.lado(compartimiento_id, cara).capacidad

    def cabe(self, compartimiento_id: str, cara: Cara, pila: Pila) -> bool:
        lado = self.lado(compartimiento_id, cara)
        return lado.ocupado + pila.ancho <= lado.capacidad

    def pilas_de(self, compartimiento_id: str, cara: Cara) -> List[Pila]:
        """Pilas del lado en orden de colocación"""
        return [self.pilas[pid] for pid in self.lado(compartimiento_id, cara).pilas]

    def pilas_base(self, compartimiento_id: str, cara: Cara) -> List[Pila]:
        return [p for p in self.pilas_de(compartimiento_id, cara) if not p.es_apilada]

    def peso_cara(self, compartimiento_id: str, cara: Cara) -> float:
        return sum(p.peso for p in self.pilas_de(compartimiento_id, cara))

    def piezas_cara(self, compartimiento_id: str, cara: Cara) -> int:
        return sum(p.num_piezas for p in self.pilas_de(compartimiento_id, cara))

    def lado_geometrico(self, compartimiento_id: str, cara: Cara, ancho: float) -> LadoCamion:
        """
        Lado del camión que ocuparía una pila de `ancho` colocada ahora.
        La primera mitad de la capacidad es del conductor; la segunda del ayudante.
        """
        lado = self.lado(compartimiento_id, cara)
        punto_medio = lado.ocupado + ancho / 2
        if punto_medio < lado.capacidad / 2:
            return LadoCamion.CONDUCTOR
        return LadoCamion.AYUDANTE

    # ============ CADENAS ============

    def hijo_de(self, pila_id: str) -> Optional[Pila]:
        hijo_id = self._hijos.get(pila_id)
        return self.pilas[hijo_id] if hijo_id else None

    def tiene_encima(self, pila_id: str) -> bool:
        return pila_id in self._hijos

    def raiz(self, pila_id: str) -> Pila:
        actual = self.pilas[pila_id]
        while actual.base_id is not None:
            actual = self.pilas[actual.base_id]
        return actual

    def tope(self, pila_id: str) -> Pila:
        actual = self.pilas[pila_id]
        while actual.id in self._hijos:
            actual = self.pilas[self._hijos[actual.id]]
        return actual

    def profundidad(self, pila_id: str) -> int:
        """Niveles de apilamiento bajo la pila (0 = base)"""
        niveles = 0
        actual = self.pilas[pila_id]
        while actual.base_id is not None:
            niveles += 1
            actual = self.pilas[actual.base_id]
        return niveles

    def cadena(self, pila_id: str) -> List[Pila]:
        """Cadena completa que contiene a la pila, desde la raíz hasta el tope"""
        actual = self.raiz(pila_id)
        resultado = [actual]
        while actual.id in self._hijos:
            actual = self.pilas[self._hijos[actual.id]]
            resultado.append(actual)
        return resultado

    def piezas_en_cadena(self, pila_id: str) -> int:
        return sum(p.num_piezas for p in self.cadena(pila_id))

    # ============ MUTACIÓN ============

    def colocar(
        self,
        compartimiento_id: str,
        cara: Cara,
        pila: Pila,
        base: Optional[Pila] = None,
        proteger: bool = False
    ) -> Pila:
        """
        Coloca una pila en un lado: directo en el piso (consume ancho) o sobre
        `base` (hereda su lado del camión, no consume ancho).

        Raises:
            ValueError: si la pila ya está colocada, no cabe, o la base no es
                un tope libre del mismo lado
        """
        if pila.id in self.pilas:
            raise ValueError(f"Pila {pila.id} ya está colocada")

        comp = self.compartimiento(compartimiento_id)
        lado = self.lado(compartimiento_id, cara)

        if base is None:
            if lado.ocupado + pila.ancho > lado.capacidad:
                raise ValueError(
                    f"Pila {pila.id} excede capacidad de {compartimiento_id}/{cara.value}: "
                    f"{lado.ocupado + pila.ancho:.0f} > {lado.capacidad:.0f}"
                )
            lado_camion = self.lado_geometrico(compartimiento_id, cara, pila.ancho)
        else:
            if base.id not in lado.pilas:
                raise ValueError(
                    f"Base {base.id} no está en {compartimiento_id}/{cara.value}"
                )
            if self.tiene_encima(base.id):
                raise ValueError(f"Base {base.id} ya tiene una pila encima")
            lado_camion = base.lado

        self._registrar(comp, cara)

        if base is None:
            lado.ocupado += pila.ancho
        else:
            self._hijos[base.id] = pila.id

        lado.pilas.append(pila.id)
        comp.peso_total += pila.peso
        pila.marcar_colocada(
            compartimiento_id=compartimiento_id,
            cara=cara,
            lado=lado_camion,
            base_id=base.id if base else None,
            protegida=proteger,
        )
        self.pilas[pila.id] = pila

        if self._transacciones:
            self._transacciones[-1].pilas_nuevas.append(pila.id)

        return pila

    def fijar_ancla(self, compartimiento_id: str, cara: Cara, raiz_id: str):
        """Activa la cadena múltiple del lado (una sola por lado)"""
        lado = self.lado(compartimiento_id, cara)
        if lado.cadena_ancla_id is not None and lado.cadena_ancla_id != raiz_id:
            raise ValueError(
                f"{compartimiento_id}/{cara.value} ya tiene cadena activa "
                f"({lado.cadena_ancla_id})"
            )
        self._registrar(self.compartimiento(compartimiento_id), cara)
        lado.cadena_ancla_id = raiz_id

    # ============ TRANSACCIONES ============

    def begin(self) -> Snapshot:
        snapshot = Snapshot()
        self._transacciones.append(snapshot)
        return snapshot

    def commit(self, snapshot: Snapshot):
        """Confirma los cambios; si hay una transacción externa, los hereda"""
        self._cerrar(snapshot)
        if self._transacciones:
            externa = self._transacciones[-1]
            for clave, estado in snapshot.lados.items():
                externa.lados.setdefault(clave, estado)
            for comp_id, peso in snapshot.pesos.items():
                externa.pesos.setdefault(comp_id, peso)
            externa.pilas_nuevas.extend(snapshot.pilas_nuevas)

    def rollback(self, snapshot: Snapshot):
        """Deja el layout exactamente como estaba en `begin()`"""
        self._cerrar(snapshot)

        for pila_id in reversed(snapshot.pilas_nuevas):
            pila = self.pilas.pop(pila_id)
            if pila.base_id is not None:
                self._hijos.pop(pila.base_id, None)
            pila.desmarcar()

        for (comp_id, cara), estado in snapshot.lados.items():
            lado = self._por_id[comp_id].lados[cara]
            lado.ocupado = estado.ocupado
            lado.pilas = estado.pilas
            lado.cadena_ancla_id = estado.cadena_ancla_id

        for comp_id, peso in snapshot.pesos.items():
            self._por_id[comp_id].peso_total = peso

    def _cerrar(self, snapshot: Snapshot):
        if not self._transacciones or self._transacciones[-1] is not snapshot:
            raise ValueError("Solo se puede cerrar la transacción más interna")
        if snapshot.cerrada:
            raise ValueError("Transacción ya cerrada")
        snapshot.cerrada = True
        self._transacciones.pop()

    def _registrar(self, comp: Compartimiento, cara: Cara):
        if not self._transacciones:
            return
        snapshot = self._transacciones[-1]
        clave = (comp.id, cara)
        if clave not in snapshot.lados:
            lado = comp.lados[cara]
            snapshot.lados[clave] = _EstadoLado(
                ocupado=lado.ocupado,
                pilas=list(lado.pilas),
                cadena_ancla_id=lado.cadena_ancla_id,
            )
        snapshot.pesos.setdefault(comp.id, comp.peso_total)

    # ============ VALIDACIÓN ============

    def validar_integridad(self) -> Tuple[bool, List[str]]:
        """
        Verifica las invariantes físicas del layout.

        Returns:
            (es_valido, lista_errores)
        """
        errores = []
        tolerancia = 1e-6

        for comp in self.compartimientos:
            for cara, lado in comp.lados.items():
                nombre = f"{comp.id}/{cara.value}"

                if lado.ocupado > lado.capacidad + tolerancia:
                    errores.append(
                        f"{nombre}: ocupado {lado.ocupado:.0f} > capacidad {lado.capacidad:.0f}"
                    )

                ancho_bases = sum(p.ancho for p in self.pilas_base(comp.id, cara))
                if abs(ancho_bases - lado.ocupado) > tolerancia:
                    errores.append(
                        f"{nombre}: ocupado {lado.ocupado:.0f} != ancho de bases {ancho_bases:.0f}"
                    )

                bases_usadas: Dict[str, str] = {}
                for pila in self.pilas_de(comp.id, cara):
                    if pila.base_id is None:
                        continue
                    if pila.base_id in bases_usadas:
                        errores.append(
                            f"{nombre}: base {pila.base_id} tiene dos pilas encima "
                            f"({bases_usadas[pila.base_id]}, {pila.id})"
                        )
                    bases_usadas[pila.base_id] = pila.id
                    if pila.base_id not in lado.pilas:
                        errores.append(f"{nombre}: pila {pila.id} apoyada fuera del lado")

                if lado.cadena_ancla_id is not None:
                    raices = {
                        self.raiz(p.id).id
                        for p in self.pilas_de(comp.id, cara) if p.es_apilada
                    }
                    if raices - {lado.cadena_ancla_id}:
                        errores.append(
                            f"{nombre}: cadenas paralelas {sorted(raices)} con ancla "
                            f"{lado.cadena_ancla_id}"
                        )

        return len(errores) == 0, errores

    # ============ EXPORTACIÓN ============

    def to_dict(self) -> List[Dict[str, Any]]:
        return [
            {
                'id': comp.id,
                'tipo': comp.tipo,
                'orientacion': comp.orientacion.value,
                'altura': comp.altura,
                'peso_total': round(comp.peso_total, 3),
                'lados': {
                    cara.value: {
                        'capacidad': lado.capacidad,
                        'ocupado': lado.ocupado,
                        'restante': lado.restante,
                        'cadena_ancla_id': lado.cadena_ancla_id,
                        'pilas': [self.pilas[pid].to_dict() for pid in lado.pilas],
                    }
                    for cara, lado in comp.lados.items()
                },
            }
            for comp in self.compartimientos
        ]

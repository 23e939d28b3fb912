"""
Tests del modelo de compartimientos: capacidad, cadenas y transacciones.
"""

import json

import pytest

from models.enums import Cara, LadoCamion
from models.layout import LadoCompartimiento


def _estado(layout) -> str:
    return json.dumps(layout.to_dict(), sort_keys=True)


class TestLadoCompartimiento:

    def test_restante(self):
        lado = LadoCompartimiento(nombre="frente", capacidad=2200)
        lado.ocupado = 800
        assert lado.restante == 1400
        assert lado.nombre == Cara.FRENTE

    def test_capacidad_invalida(self):
        with pytest.raises(ValueError, match="Capacidad debe ser > 0"):
            LadoCompartimiento(nombre=Cara.FRENTE, capacidad=0)


class TestLayoutDesdeConfig:

    def test_compartimientos_y_caras(self, layout):
        ids = [c.id for c in layout.compartimientos]
        assert ids == ["caballete_3", "caballete_2", "caballete_1", "bastidor"]

        vertical = layout.compartimiento("caballete_3")
        assert vertical.es_vertical
        assert not vertical.tiene_medio
        assert layout.capacidad_de("caballete_3", Cara.FRENTE) == 3800

        bastidor = layout.compartimiento("bastidor")
        assert bastidor.tipo == "bastidor"
        assert bastidor.caras_laterales() == [Cara.FRENTE]
        assert bastidor.tiene_medio

    def test_compartimiento_desconocido(self, layout):
        with pytest.raises(ValueError, match="Compartimiento desconocido"):
            layout.compartimiento("caballete_9")

    def test_cara_inexistente(self, layout):
        with pytest.raises(ValueError, match="no tiene cara"):
            layout.lado("caballete_3", Cara.MEDIO)


class TestColocar:

    def test_base_consume_ancho(self, layout, crear_pila):
        pila = crear_pila(ancho=800, num_piezas=5, peso=20.0)
        layout.colocar("caballete_2", Cara.FRENTE, pila)

        lado = layout.lado("caballete_2", Cara.FRENTE)
        assert lado.ocupado == 800
        assert lado.restante == 1400
        assert pila.asignada
        assert pila.compartimiento_id == "caballete_2"
        assert layout.compartimiento("caballete_2").peso_total == 100.0

    def test_excede_capacidad(self, layout, crear_pila):
        layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1500))
        with pytest.raises(ValueError, match="excede capacidad"):
            layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=800))

    def test_pila_ya_colocada(self, layout, crear_pila):
        pila = crear_pila()
        layout.colocar("caballete_2", Cara.FRENTE, pila)
        with pytest.raises(ValueError, match="ya está colocada"):
            layout.colocar("caballete_2", Cara.ATRAS, pila)

    def test_lado_geometrico(self, layout, crear_pila):
        primera = layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=500))
        assert primera.lado == LadoCamion.CONDUCTOR

        layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=1500))
        # ocupado 2000: el punto medio de la siguiente cae pasada la mitad
        tercera = layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=500))
        assert tercera.lado == LadoCamion.AYUDANTE


class TestCadenas:

    def test_apilada_no_consume_ancho(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=1000, num_piezas=3))
        encima = crear_pila(ancho=900, num_piezas=2)
        layout.colocar("caballete_2", Cara.ATRAS, encima, base=base)

        assert layout.lado("caballete_2", Cara.ATRAS).ocupado == 1000
        assert encima.base_id == base.id
        assert encima.lado == base.lado
        assert layout.piezas_en_cadena(encima.id) == 5

    def test_recorridos(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=1000))
        medio = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=900), base=base)
        tope = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=800), base=medio)

        assert layout.raiz(tope.id) is base
        assert layout.tope(base.id) is tope
        assert layout.hijo_de(base.id) is medio
        assert layout.profundidad(tope.id) == 2
        assert [p.id for p in layout.cadena(medio.id)] == [base.id, medio.id, tope.id]

    def test_base_con_pila_encima(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=1000))
        layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=900), base=base)

        with pytest.raises(ValueError, match="ya tiene una pila encima"):
            layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=900), base=base)

    def test_base_de_otro_lado(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=1000))
        with pytest.raises(ValueError, match="no está en"):
            layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=900), base=base)

    def test_una_sola_ancla_por_lado(self, layout, crear_pila):
        a = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        b = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        layout.fijar_ancla("caballete_2", Cara.FRENTE, a.id)

        with pytest.raises(ValueError, match="ya tiene cadena activa"):
            layout.fijar_ancla("caballete_2", Cara.FRENTE, b.id)


class TestTransacciones:

    def test_rollback_restaura_estado_exacto(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        antes = _estado(layout)

        snapshot = layout.begin()
        nueva = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=800))
        encima = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=900), base=base)
        layout.fijar_ancla("caballete_2", Cara.FRENTE, base.id)
        layout.colocar("caballete_1", Cara.MEDIO, crear_pila(ancho=500, especial=True))
        layout.rollback(snapshot)

        assert _estado(layout) == antes
        assert not nueva.asignada and not encima.asignada
        assert not layout.tiene_encima(base.id)
        assert nueva.id not in layout.pilas

    def test_commit_conserva_cambios(self, layout, crear_pila):
        snapshot = layout.begin()
        pila = layout.colocar("caballete_3", Cara.ATRAS, crear_pila(ancho=700))
        layout.commit(snapshot)

        assert pila.asignada
        assert layout.lado("caballete_3", Cara.ATRAS).ocupado == 700

    def test_commit_anidado_revertido_por_externa(self, layout, crear_pila):
        antes = _estado(layout)

        externa = layout.begin()
        layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=700))
        interna = layout.begin()
        layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=600))
        layout.colocar("caballete_2", Cara.ATRAS, crear_pila(ancho=600))
        layout.commit(interna)
        layout.rollback(externa)

        assert _estado(layout) == antes

    def test_cierre_fuera_de_orden(self, layout):
        externa = layout.begin()
        layout.begin()
        with pytest.raises(ValueError, match="más interna"):
            layout.commit(externa)


class TestIntegridad:

    def test_layout_valido(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=900), base=base)

        valido, errores = layout.validar_integridad()
        assert valido, errores

    def test_detecta_ocupado_inconsistente(self, layout, crear_pila):
        layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        layout.lado("caballete_2", Cara.FRENTE).ocupado = 300

        valido, errores = layout.validar_integridad()
        assert not valido
        assert "caballete_2/frente" in errores[0]

"""
Tests de expansión de productos y construcción de pilas.
"""

from models.enums import TipoVidrio
from optimization.pile_builder import (
    expandir_productos,
    dividir_parejo,
    generar_pilas,
    separar_por_dimension,
)


def _generador_ids():
    contador = {"n": 0}

    def nuevo():
        contador["n"] += 1
        return f"M{contador['n']:04d}"
    return nuevo


class TestDividirParejo:

    def test_division_pareja(self):
        bloques = dividir_parejo(list(range(45)), 30)
        assert [len(b) for b in bloques] == [23, 22]

    def test_multiplo_exacto(self):
        assert [len(b) for b in dividir_parejo(list(range(60)), 30)] == [30, 30]

    def test_no_pierde_elementos(self):
        items = list(range(71))
        bloques = dividir_parejo(items, 12)
        assert [x for b in bloques for x in b] == items
        assert max(len(b) for b in bloques) - min(len(b) for b in bloques) <= 1

    def test_vacio(self):
        assert dividir_parejo([], 30) == []


class TestExpandirProductos:

    def test_una_pieza_por_unidad(self, config, crear_producto):
        productos = [crear_producto(cantidad=3, peso=12.5), crear_producto(cantidad=2)]
        piezas = expandir_productos(productos, config)

        assert [p.id for p in piezas] == [
            "U0000-000", "U0000-001", "U0000-002", "U0001-000", "U0001-001"
        ]
        assert piezas[0].peso == 12.5

    def test_orienta_piezas(self, config, crear_producto):
        productos = [
            crear_producto(ancho=2000, alto=800),
            crear_producto(ancho=2600, alto=1000),
        ]
        de_pie, acostada = expandir_productos(productos, config)

        assert (de_pie.ancho, de_pie.alto, de_pie.acostada) == (800, 2000, False)
        assert (acostada.ancho, acostada.alto, acostada.acostada) == (2600, 1000, True)

    def test_marca_especiales(self, config, crear_producto):
        piezas = expandir_productos([crear_producto(tipo=TipoVidrio.PVB)], config)
        assert piezas[0].especial


class TestGenerarPilas:

    def test_45_piezas_de_pie_en_dos_pilas(self, config, crear_producto):
        piezas = expandir_productos([crear_producto(cantidad=45)], config)
        pilas = generar_pilas(piezas, config, _generador_ids())

        assert [p.num_piezas for p in pilas] == [23, 22]
        assert [p.id for p in pilas] == ["M0001", "M0002"]
        assert all(p.ancho == 800 and p.de_pie and not p.especial for p in pilas)

    def test_orden_de_pie_acostadas_especiales(self, config, crear_producto):
        productos = [
            crear_producto(tipo=TipoVidrio.PVB, cantidad=2),
            crear_producto(ancho=2600, alto=1000, cantidad=2),
            crear_producto(cantidad=2),
        ]
        piezas = expandir_productos(productos, config)
        pilas = generar_pilas(piezas, config, _generador_ids())

        assert [(p.especial, p.acostada) for p in pilas] == [
            (False, False), (False, True), (True, False)
        ]

    def test_especiales_se_dividen_en_12(self, config, crear_producto):
        piezas = expandir_productos([crear_producto(tipo=TipoVidrio.PVB, cantidad=13)], config)
        pilas = generar_pilas(piezas, config, _generador_ids())

        assert [p.num_piezas for p in pilas] == [7, 6]
        assert all(p.especial for p in pilas)

    def test_especial_con_pieza_acostada_acuesta_toda_la_pila(self, config, crear_producto):
        productos = [
            crear_producto(tipo=TipoVidrio.LAMINADO_COMUN, ancho=1000, alto=2000, cantidad=2),
            crear_producto(tipo=TipoVidrio.LAMINADO_COMUN, ancho=2600, alto=1000, cantidad=1),
        ]
        piezas = expandir_productos(productos, config)
        pilas = generar_pilas(piezas, config, _generador_ids())

        assert len(pilas) == 1
        pila = pilas[0]
        assert all(p.acostada for p in pila.piezas)
        assert pila.ancho == 2600
        assert [p.ancho for p in pila.piezas] == [2600, 2000, 2000]

    def test_forzar_acostar(self, config, crear_producto):
        piezas = expandir_productos([crear_producto(cantidad=4)], config)
        pilas = generar_pilas(piezas, config, _generador_ids(), forzar_acostar=True)

        assert len(pilas) == 1
        assert pilas[0].acostada
        assert pilas[0].ancho == 2000

    def test_sin_piezas(self, config):
        assert generar_pilas([], config, _generador_ids()) == []


class TestSepararPorDimension:

    def test_separa_acostadas_y_de_pie(self, config, crear_producto):
        productos = [
            crear_producto(tipo=TipoVidrio.LAMINADO_COMUN, ancho=1000, alto=2000, cantidad=2),
            crear_producto(tipo=TipoVidrio.LAMINADO_COMUN, ancho=2600, alto=1000, cantidad=1),
        ]
        pila = generar_pilas(expandir_productos(productos, config), config, _generador_ids())[0]

        subpilas = separar_por_dimension(pila, config)

        assert [s.id for s in subpilas] == ["M0001-A", "M0001-P"]
        assert all(s.origen_id == "M0001" and s.especial for s in subpilas)
        acostada, de_pie = subpilas
        assert acostada.num_piezas == 1 and acostada.acostada
        assert de_pie.num_piezas == 2 and de_pie.de_pie
        assert de_pie.ancho == 1000

    def test_conserva_piezas(self, config, crear_producto):
        productos = [
            crear_producto(ancho=2600, alto=1000, cantidad=3),
            crear_producto(ancho=800, alto=2000, cantidad=5),
        ]
        piezas = expandir_productos(productos, config)
        pila = generar_pilas(piezas, config, _generador_ids(), forzar_acostar=True)[0]

        subpilas = separar_por_dimension(pila, config)

        ids = sorted(pz.id for s in subpilas for pz in s.piezas)
        assert ids == sorted(p.id for p in piezas)

"""
Tests de postproceso: resumen, vista apilada y almacén de compartidos.
"""

import threading

import pytest

from models.enums import Cara, TipoVidrio
from optimization.orchestrator import distribuir_piezas
from optimization.pile_builder import expandir_productos
from services.postprocess import (
    compute_stats,
    organizar_pilas_apiladas,
    organizar_layout,
    resumen_desde_resultado,
)
from services.shared_store import AlmacenCompartidos


class TestResumen:

    def test_compute_stats(self, config, crear_producto, crear_pila):
        piezas = expandir_productos([
            crear_producto(cliente_id="1", cantidad=3),
            crear_producto(cliente_id="2", cantidad=2, tipo=TipoVidrio.PVB),
        ], config)
        asignadas = [crear_pila(num_piezas=4)]
        no_asignadas = [crear_pila(num_piezas=1)]

        resumen = compute_stats(piezas, asignadas, no_asignadas)

        assert resumen.to_dict() == {
            "numero_clientes": 2,
            "total_piezas": 5,
            "piezas_normales": 3,
            "piezas_especiales": 2,
            "piezas_asignadas": 4,
            "piezas_no_asignadas": 1,
        }

    def test_resumen_desde_resultado_serializado(self, config, crear_producto):
        resultado = distribuir_piezas([
            crear_producto(cliente_id="1", cantidad=40),
            crear_producto(cliente_id="2", cantidad=5, tipo=TipoVidrio.PVB),
        ], config).to_dict()

        assert resumen_desde_resultado(resultado) == resultado["resumen"]

    def test_resumen_de_resultado_compartido(self, config, crear_producto):
        """Sin pilas_asignadas las asignadas se leen de los compartimientos"""
        resultado = distribuir_piezas([
            crear_producto(cliente_id="1", cantidad=40),
            crear_producto(cliente_id="2", cantidad=5, tipo=TipoVidrio.PVB),
            crear_producto(cliente_id="3", ancho=2600, alto=1000, cantidad=30),
        ], config).to_dict()
        compartido = {
            "compartimientos": resultado["compartimientos"],
            "pilas_no_asignadas": resultado["pilas_no_asignadas"],
        }

        assert resumen_desde_resultado(compartido) == resultado["resumen"]


class TestVistaApilada:

    def test_bases_con_apiladas(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        medio = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=900), base=base)
        tope = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=800), base=medio)
        suelta = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=700))

        comp = [c for c in layout.to_dict() if c["id"] == "caballete_2"][0]
        vista = organizar_pilas_apiladas(comp)

        pilas = vista["lados"]["frente"]["pilas"]
        assert [p["id"] for p in pilas] == [base.id, suelta.id]
        assert [p["id"] for p in pilas[0]["apiladas"]] == [medio.id, tope.id]
        assert pilas[1]["apiladas"] == []

    def test_no_modifica_entrada(self, layout, crear_pila):
        base = layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=1000))
        layout.colocar("caballete_2", Cara.FRENTE, crear_pila(ancho=900), base=base)
        compartimientos = layout.to_dict()

        organizar_layout(compartimientos)

        frente = compartimientos[1]["lados"]["frente"]["pilas"]
        assert len(frente) == 2
        assert "apiladas" not in frente[0]


class TestAlmacenCompartidos:

    def test_guardar_y_obtener(self):
        almacen = AlmacenCompartidos()
        compartido_id = almacen.guardar({"resumen": {"total_piezas": 3}})

        registro = almacen.obtener(compartido_id)
        assert registro["resumen"] == {"total_piezas": 3}
        assert registro["id"] == compartido_id
        assert "creado_en" in registro

    def test_id_invalido(self):
        with pytest.raises(ValueError, match="ID inválido"):
            AlmacenCompartidos().obtener("../etc/passwd")

    def test_id_desconocido(self):
        assert AlmacenCompartidos().obtener("0" * 32) is None

    def test_descarta_mas_antiguo(self):
        almacen = AlmacenCompartidos(max_entradas=2)
        primero = almacen.guardar({"n": 1})
        almacen.guardar({"n": 2})
        almacen.guardar({"n": 3})

        assert len(almacen) == 2
        assert almacen.obtener(primero) is None

    def test_guardar_concurrente_respeta_limite(self):
        almacen = AlmacenCompartidos(max_entradas=5)

        def guardar_varios(n):
            for i in range(50):
                almacen.guardar({"hilo": n, "i": i})

        hilos = [threading.Thread(target=guardar_varios, args=(n,)) for n in range(4)]
        for hilo in hilos:
            hilo.start()
        for hilo in hilos:
            hilo.join()

        assert len(almacen) == 5

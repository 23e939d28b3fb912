"""
Tests de preferencias por cliente y de la colocación que las respeta.
"""

import pytest

from models.domain import PreferenciaCliente
from models.enums import Cara, LadoCamion, PosicionPreferida
from optimization.preferences import ResolvedorPreferencias, RestriccionColocacion
from optimization.strategies import ColocacionPreferencia, ColocacionDirecta


@pytest.fixture
def resolvedor(config):
    return ResolvedorPreferencias(config)


class TestPreferenciaCliente:

    def test_desde_config(self):
        pref = PreferenciaCliente.from_config({"lado": "MOTORISTA", "posicion": "FRENTE"})
        assert pref.lado == LadoCamion.CONDUCTOR
        assert pref.posiciones == (PosicionPreferida.FRENTE,)
        assert pref.compartimientos == ()
        assert not pref.acostar

    def test_compartimiento_true_son_caballetes(self):
        pref = PreferenciaCliente.from_config(
            {"compartimiento": True}, caballetes=("caballete_3", "caballete_2")
        )
        assert pref.compartimientos == ("caballete_3", "caballete_2")

    def test_lado_desconocido(self):
        with pytest.raises(ValueError, match="Lado desconocido"):
            PreferenciaCliente.from_config({"lado": "TECHO"})


class TestResolvedorPreferencias:

    def test_tabla_completa(self, resolvedor):
        assert len(resolvedor) == 47

    def test_ids_numericos_normalizados(self, resolvedor):
        assert "6765" in resolvedor
        assert "06765" in resolvedor
        assert 6765 in resolvedor
        assert "999" not in resolvedor

    def test_restriccion(self, resolvedor):
        restriccion = resolvedor.restriccion_para("6765")
        assert restriccion.lado == LadoCamion.CONDUCTOR
        assert restriccion.posiciones == (PosicionPreferida.FRENTE,)

    def test_sin_preferencia(self, resolvedor):
        assert resolvedor.restriccion_para("999") is None

    def test_solo_acostar_no_restringe_posicion(self, resolvedor):
        assert resolvedor.forzar_acostar("5540")
        assert not resolvedor.forzar_acostar("6765")

    def test_cualquier_caballete_excluye_bastidor(self, resolvedor):
        restriccion = resolvedor.restriccion_para("224")
        assert restriccion.compartimientos == ("caballete_3", "caballete_2", "caballete_1")


class TestRestriccionColocacion:

    def test_final_es_ultima_cara(self):
        restriccion = RestriccionColocacion(posiciones=(PosicionPreferida.FINAL,))
        assert restriccion.caras_para([Cara.FRENTE, Cara.ATRAS]) == [Cara.ATRAS]
        assert restriccion.caras_para([Cara.FRENTE]) == [Cara.FRENTE]

    def test_cara_inexistente_no_se_ofrece(self):
        restriccion = RestriccionColocacion(posiciones=(PosicionPreferida.ATRAS,))
        assert restriccion.caras_para([Cara.FRENTE]) == []

    def test_orden_de_compartimientos(self):
        restriccion = RestriccionColocacion(compartimientos=("caballete_2", "caballete_3"))
        ids = ["caballete_3", "caballete_2", "caballete_1", "bastidor"]
        assert restriccion.ordenar_compartimientos(ids) == ["caballete_2", "caballete_3"]

    def test_vacia(self):
        assert RestriccionColocacion().vacia
        assert RestriccionColocacion().permite_lado(LadoCamion.AYUDANTE)


class TestColocacionPreferencia:

    def test_motorista_frente(self, contexto, resolvedor, crear_pila):
        """Pila de 500 en el frente del primer caballete, primera mitad del lado"""
        pila = crear_pila(ancho=500, cliente_id="6765")
        restriccion = resolvedor.restriccion_para("6765")

        assert ColocacionPreferencia(contexto).intentar(pila, restriccion)

        assert pila.compartimiento_id == "caballete_3"
        assert pila.cara == Cara.FRENTE
        assert pila.lado == LadoCamion.CONDUCTOR
        capacidad = contexto.layout.capacidad_de("caballete_3", Cara.FRENTE)
        assert 0 + pila.ancho / 2 < capacidad / 2

    def test_lado_ocupado_pasa_al_siguiente(self, contexto, layout, resolvedor, crear_pila):
        layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=2000))
        pila = crear_pila(ancho=500, cliente_id="6765")

        assert ColocacionPreferencia(contexto).intentar(pila, resolvedor.restriccion_para("6765"))
        assert pila.compartimiento_id == "caballete_2"
        assert pila.lado == LadoCamion.CONDUCTOR

    def test_ignora_especiales(self, contexto, resolvedor, crear_pila):
        pila = crear_pila(especial=True, cliente_id="6765")
        assert not ColocacionPreferencia(contexto).intentar(pila, resolvedor.restriccion_para("6765"))

    def test_directa_respeta_lado(self, contexto, layout, crear_pila):
        layout.colocar("caballete_3", Cara.FRENTE, crear_pila(ancho=2000))
        restriccion = RestriccionColocacion(
            compartimientos=("caballete_3",), posiciones=(PosicionPreferida.FRENTE,),
            lado=LadoCamion.CONDUCTOR,
        )
        assert not ColocacionDirecta(contexto).intentar(crear_pila(ancho=500), restriccion)

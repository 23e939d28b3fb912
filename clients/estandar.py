from clients.base import ClientConfig


class EstandarConfig(ClientConfig):
    HEADER_ROW = 0

    # Configuraciones algoritmo
    AGRUPAR_POR_SECUENCIA = False

    # Camión: caballetes en orden de prioridad para colocar un grupo completo
    COMPARTIMIENTOS = [
        {
            "id": "caballete_3",
            "tipo": "caballete",
            "orientacion": "vertical",
            "altura": 2450,
            "lados": {"frente": 3800, "atras": 3800},
        },
        {
            "id": "caballete_2",
            "tipo": "caballete",
            "orientacion": "horizontal",
            "altura": 2450,
            "lados": {"frente": 2200, "medio": 2200, "atras": 2200},
        },
        {
            "id": "caballete_1",
            "tipo": "caballete",
            "orientacion": "horizontal",
            "altura": 2450,
            "lados": {"frente": 2200, "medio": 2200, "atras": 2200},
        },
        {
            "id": "bastidor",
            "tipo": "bastidor",
            "orientacion": "horizontal",
            "altura": 2450,
            "lados": {"frente": 2200, "medio": 2200},
        },
    ]

    # El medio del bastidor se balancea contra el frente del caballete 1
    PARES_MEDIO = [
        ("caballete_1", "medio", "caballete_1", "atras"),
        ("caballete_2", "medio", "caballete_2", "atras"),
        ("bastidor", "medio", "caballete_1", "frente"),
    ]

    # Parámetros de pilas
    MAX_PIEZAS_POR_PILA = 30
    UMBRAL_DIVISION_ESPECIAL = 12

    TECHO_GENERAL = 32
    TECHO_RESCATE = 34
    TECHO_MEDIO = 12
    TECHO_CADENA_HORIZONTAL = 32
    TECHO_CADENA_VERTICAL = 60
    TECHO_PVB_ESPECIAL = 25
    TECHO_FLEXIBILIDAD_MEDIO = 50

    MAX_COMBINACION_MULTIPLE = 4

    # Orientación (mm)
    ALTURA_MAXIMA = 2450
    LADO_MENOR_MAXIMO = 1200
    ANCHO_MAXIMO_MEDIO = 2200

    UMBRAL_PESO_CARA = 0.6
    UMBRAL_DESBALANCE = 0.2

    # Tipos de vidrio
    TIPOS_ESPECIALES = frozenset({
        "PVB",
        "Laminado Comum",
        "Laminado Temperado",
        "Molde",
        "Eco Glass",
    })

    # Mapeo de columnas
    COLUMN_MAPPING = {
        "CLIENTE": "Cliente",
        "PEDIDO": "Pedido Cliente",
        "PRODUCTO": "Produto",
        "DESCRIPCION": "Produto Descrição",
        "TIPO_DESCRIPCION": "Tipo Produto Descrição",
        "CANTIDAD": "Qtde",
        "ANCHO": "Largura",
        "ALTO": "Altura",
        "PESO": "Peso Total",
        "SECUENCIA": "Sequência",
        "CIUDAD": "Cidade",
    }

    # Preferencias por cliente (id numérico)
    PREFERENCIAS_CLIENTES = {
        "6765": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "4022": {"lado": "MOTORISTA", "posicion": "ATRAS"},
        "5540": {"acostar": True, "lado": "MOTORISTA"},
        "7604": {"acostar": True, "lado": "AJUDANTE"},
        "2494": {"acostar": True, "lado": "AJUDANTE"},
        "1291": {"posicion": "ATRAS"},
        "5595": {"posicion": "FRENTE"},
        "6871": {"posicion": "FRENTE"},
        "6217": {"compartimiento": "caballete_2", "posicion": "ATRAS"},
        "2925": {"compartimiento": "bastidor", "posicion": "ATRAS"},
        "10080": {"compartimiento": "caballete_3", "posicion": "ATRAS"},
        "103": {"posicion": "FRENTE"},
        "3020": {"lado": "AJUDANTE"},
        "7352": {"compartimiento": ["caballete_2", "caballete_3"], "posicion": ["ATRAS", "FINAL"]},
        "8716": {"lado": "MOTORISTA", "posicion": "ATRAS"},
        "5973": {"lado": "MOTORISTA", "posicion": "ATRAS", "compartimiento": "caballete_2"},
        "145": {"posicion": "FRENTE"},
        "140": {"lado": "MOTORISTA"},
        "1858": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "2079": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "5955": {"lado": "MOTORISTA", "posicion": "ATRAS", "compartimiento": "bastidor"},
        "6805": {"acostar": True, "lado": "AJUDANTE"},
        "1158": {"acostar": True, "lado": "AJUDANTE"},
        "1844": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "4342": {"posicion": "ATRAS", "compartimiento": "caballete_2"},
        "5689": {"posicion": "FRENTE"},
        "194": {"lado": "MOTORISTA", "posicion": "ATRAS"},
        "2181": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "224": {"lado": "MOTORISTA", "compartimiento": True},
        "3076": {"lado": "AJUDANTE", "posicion": "FRENTE"},
        "3511": {"posicion": "FRENTE"},
        "7632": {"lado": "MOTORISTA", "posicion": "FRENTE"},
        "6067": {"lado": "MOTORISTA", "compartimiento": "caballete_3"},
        "3441": {"acostar": True, "lado": "AJUDANTE"},
        "6243": {"posicion": "FRENTE"},
        "2222": {"lado": "MOTORISTA", "posicion": "ATRAS"},
        "1370": {"posicion": "FRENTE"},
        "1588": {"compartimiento": ["caballete_2", "caballete_3"], "posicion": "ATRAS"},
        "2597": {"posicion": "ATRAS"},
        "7280": {"acostar": True, "lado": "MOTORISTA"},
        "27": {"posicion": "ATRAS"},
        "1749": {"compartimiento": ["caballete_2", "caballete_3"]},
        "3456": {"posicion": "ATRAS"},
        "2036": {"posicion": "FRENTE"},
        "6729": {"posicion": "FRENTE"},
        "6373": {"lado": "AJUDANTE"},
        "2028": {"lado": "AJUDANTE"},
    }

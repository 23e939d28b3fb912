"""
Módulo de estrategias de colocación.

Contiene:
- ContextoDistribucion / ResultadoDistribucion: estado y resultado de una corrida
- ColocacionDirecta: pila base con balance de caras
- ApilamientoSimple / CadenaMultiple: apilamiento sobre cadenas
- ColocacionMedio: especiales en la cara del medio
- ColocacionPreferencia: preferencias por cliente
- Estrategias de grupo (grupo completo, misma cara)
"""

from optimization.strategies.base import (
    ContextoDistribucion,
    ResultadoDistribucion,
    EstrategiaColocacion,
)

from optimization.strategies.direct_placement import ColocacionDirecta

from optimization.strategies.stacking import (
    ApilamientoSimple,
    CadenaMultiple,
    puede_apilar,
    puede_apilar_multiple,
)

from optimization.strategies.middle_slot import ColocacionMedio
from optimization.strategies.preference_placement import ColocacionPreferencia

from optimization.strategies.grouping import (
    intentar_grupo_completo,
    colocar_misma_cara,
)

__all__ = [
    # Contexto
    'ContextoDistribucion',
    'ResultadoDistribucion',
    'EstrategiaColocacion',

    # Estrategias por pila
    'ColocacionDirecta',
    'ApilamientoSimple',
    'CadenaMultiple',
    'ColocacionMedio',
    'ColocacionPreferencia',
    'puede_apilar',
    'puede_apilar_multiple',

    # Estrategias de grupo
    'intentar_grupo_completo',
    'colocar_misma_cara',
]

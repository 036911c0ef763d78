# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Beneficios:
#   - Type hints para mejor documentación y autocompletado
#   - Fácil serialización a JSON (respuestas y sesión)
#   - Independiente del mecanismo de almacenamiento (memoria ahora)
# ==============================================================================

from .entities import (
    # Enumeraciones
    Department,
    Permission,
    ItemStatus,
    ALL_PERMISSIONS,
    LOW_STOCK_THRESHOLD,
    RECOMMENDED_CATEGORIES,

    # Reglas derivadas
    derive_status,

    # Entidades
    User,
    InventoryItem,
    DepartmentSummary,
)

__all__ = [
    'Department',
    'Permission',
    'ItemStatus',
    'ALL_PERMISSIONS',
    'LOW_STOCK_THRESHOLD',
    'RECOMMENDED_CATEGORIES',
    'derive_status',
    'User',
    'InventoryItem',
    'DepartmentSummary',
]

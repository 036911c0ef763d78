# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la aplicación.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones sobre los repositorios
# 2. Aplican reglas de negocio: permisos, alcance, estado derivado
# 3. Las rutas (controllers) solo llaman a servicios
# 4. Cada comando recibe el usuario solicitante como argumento explícito
#
# ESTRUCTURA:
# ├── access_service.py    → Alcance por departamento y permisos (funciones puras)
# ├── inventory_service.py → Ítems, estado de stock, resúmenes
# ├── user_service.py      → Usuarios, autenticación (¡admin semilla protegido!)
# ├── errors.py            → Excepciones tipadas
# └── clock.py             → Reloj inyectable
# ==============================================================================

from inventory_dashboard.services.access_service import (
    visible_items,
    can_perform,
    is_in_scope,
    default_department_for,
)
from inventory_dashboard.services.clock import Clock, SystemClock, FixedClock
from inventory_dashboard.services.errors import (
    InventoryError,
    AuthorizationError,
    NotFoundError,
    ProtectedResourceError,
    DuplicateResourceError,
    InvariantViolation,
)
from inventory_dashboard.services.inventory_service import InventoryService
from inventory_dashboard.services.user_service import UserService

__all__ = [
    'visible_items',
    'can_perform',
    'is_in_scope',
    'default_department_for',
    'Clock',
    'SystemClock',
    'FixedClock',
    'InventoryError',
    'AuthorizationError',
    'NotFoundError',
    'ProtectedResourceError',
    'DuplicateResourceError',
    'InvariantViolation',
    'InventoryService',
    'UserService',
]

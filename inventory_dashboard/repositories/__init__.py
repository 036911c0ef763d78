# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso al almacenamiento (actualmente memoria).
# Cuando se migre a una base de datos, solo hay que modificar esta capa.
#
# ESTRUCTURA:
# ├── interfaces.py            → Protocolos (contratos para otros backends)
# ├── base.py                  → MemoryRepository (colección ordenada)
# ├── seed_data.py             → Usuarios e ítems iniciales
# ├── inventory_repository.py  → Ítems de inventario
# └── user_repository.py       → Usuarios
# ==============================================================================

from .interfaces import IInventoryRepository, IUserRepository
from .base import MemoryRepository
from .inventory_repository import InventoryRepository
from .user_repository import UserRepository
from .seed_data import SEED_ADMIN_ID

__all__ = [
    'IInventoryRepository',
    'IUserRepository',
    'MemoryRepository',
    'InventoryRepository',
    'UserRepository',
    'SEED_ADMIN_ID',
]

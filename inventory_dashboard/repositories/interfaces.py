# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que todos los repositorios
# deben implementar. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Los servicios dependen de interfaces, NO de implementaciones concretas
#    - Pasar de memoria a una base de datos solo requiere nueva implementación
#
# 2. TESTING
#    - Fácil crear repositorios con otro set semilla
#
# ==============================================================================

from typing import List, Optional, Protocol, runtime_checkable

from inventory_dashboard.models import InventoryItem, User


@runtime_checkable
class IInventoryRepository(Protocol):
    """Contrato del repositorio de inventario."""

    def reset(self) -> None:
        """Vuelve al set semilla."""
        ...

    def list(self) -> List[InventoryItem]:
        """Todos los ítems en orden de inserción."""
        ...

    def get(self, record_id: str) -> Optional[InventoryItem]:
        """Ítem por ID."""
        ...

    def exists(self, record_id: str) -> bool:
        ...

    def add(self, record: InventoryItem) -> None:
        """Agrega al final."""
        ...

    def replace(self, record: InventoryItem) -> bool:
        """Reemplaza en su posición."""
        ...

    def remove(self, record_id: str) -> Optional[InventoryItem]:
        """Elimina y devuelve el ítem."""
        ...

    def list_by_department(self, department) -> List[InventoryItem]:
        """Ítems de un departamento."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Contrato del repositorio de usuarios."""

    def reset(self) -> None:
        ...

    def list(self) -> List[User]:
        ...

    def get(self, record_id: str) -> Optional[User]:
        ...

    def exists(self, record_id: str) -> bool:
        ...

    def add(self, record: User) -> None:
        ...

    def replace(self, record: User) -> bool:
        ...

    def remove(self, record_id: str) -> Optional[User]:
        ...

    def find_by_username(self, username: str) -> Optional[User]:
        """Usuario por nombre de acceso."""
        ...

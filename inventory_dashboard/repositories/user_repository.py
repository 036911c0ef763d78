# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Colección de usuarios (en memoria), independiente del inventario.
# ==============================================================================

from typing import List, Optional

from inventory_dashboard.models import User
from inventory_dashboard.repositories.base import MemoryRepository
from inventory_dashboard.repositories.seed_data import seed_users


class UserRepository(MemoryRepository[User]):
    """Repositorio para gestión de usuarios."""

    def _seed_records(self) -> List[User]:
        return seed_users()

    def find_by_username(self, username: str) -> Optional[User]:
        """
        Busca un usuario por su nombre de acceso.

        Args:
            username: Nombre de usuario (comparación exacta)

        Returns:
            Usuario o None
        """
        for user in self.list():
            if user.username == username:
                return user
        return None

# ==============================================================================
# REPOSITORIO DE INVENTARIO
# ==============================================================================
# Colección canónica de ítems de inventario (en memoria).
# ==============================================================================

from typing import List

from inventory_dashboard.models import Department, InventoryItem
from inventory_dashboard.repositories.base import MemoryRepository
from inventory_dashboard.repositories.seed_data import seed_items


class InventoryRepository(MemoryRepository[InventoryItem]):
    """
    Repositorio para los ítems de inventario.

    El orden de inserción se conserva: los ítems nuevos van al final y
    una modificación no cambia la posición del ítem.
    """

    def _seed_records(self) -> List[InventoryItem]:
        return seed_items()

    def list_by_department(self, department: Department) -> List[InventoryItem]:
        """
        Obtiene los ítems de un departamento.

        Args:
            department: Departamento a filtrar

        Returns:
            Lista de ítems en orden de inserción
        """
        return [item for item in self.list() if item.department == department]

# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con los ítems:
# - Comandos (alta, modificación, baja) con permiso + alcance de departamento
# - Estado de stock SIEMPRE derivado de la cantidad (derive_status)
# - Vistas agregadas (resúmenes, conteos, recientes) recalculadas en cada
#   llamada sobre la colección viva, nunca mantenidas incrementalmente
#
# El usuario que ejecuta cada comando llega SIEMPRE como argumento; este
# servicio no conoce la sesión ni ningún "usuario actual" global.
# ==============================================================================

import logging
import uuid
from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from inventory_dashboard.models import (
    Department,
    DepartmentSummary,
    InventoryItem,
    ItemStatus,
    Permission,
    User,
    derive_status,
)
from inventory_dashboard.performance_logger import profile_function
from inventory_dashboard.repositories.interfaces import IInventoryRepository
from inventory_dashboard.services.access_service import (
    can_perform,
    default_department_for,
    is_in_scope,
)
from inventory_dashboard.services.clock import Clock, SystemClock
from inventory_dashboard.services.errors import (
    AuthorizationError,
    InvariantViolation,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Campos que un formulario puede fijar en un ítem
EDITABLE_FIELDS = frozenset([
    'name', 'description', 'department', 'quantity', 'category', 'location'
])

# Campos que solo el servicio asigna
MANAGED_FIELDS = frozenset(['id', 'status', 'last_updated', 'lastUpdated', 'added_by', 'addedBy'])

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InventoryService:
    """
    Servicio para gestión de inventario.

    Responsabilidades:
    - CRUD de ítems con autorización en el propio comando
    - Derivación del estado de stock
    - Proyecciones de solo lectura por departamento, estado y categoría
    """

    def __init__(self, inventory_repo: IInventoryRepository, clock: Clock = None):
        """
        Inicializa el servicio de inventario.

        Args:
            inventory_repo: Repositorio de inventario
            clock: Reloj (SystemClock si no se indica)
        """
        self.inventory_repo = inventory_repo
        self.clock = clock or SystemClock()

    # =========================================================================
    # VALIDACIONES INTERNAS
    # =========================================================================

    @staticmethod
    def _require_permission(requester: Optional[User], action: Permission) -> None:
        if not can_perform(requester, action):
            who = requester.username if requester else 'anónimo'
            logger.warning("Permiso '%s' denegado a %s", action.value, who)
            raise AuthorizationError(
                f"No tienes permiso para '{action.value}' ítems", action.value
            )

    def _authorize(self, requester: Optional[User], action: Permission,
                   department: Department) -> None:
        """Permiso y alcance: ambos deben cumplirse."""
        self._require_permission(requester, action)
        if not is_in_scope(requester, department):
            logger.warning(
                "%s intentó '%s' fuera de su departamento (%s)",
                requester.username, action.value, department.value
            )
            raise AuthorizationError(
                f'El departamento {department.value} está fuera de tu alcance',
                action.value
            )

    @staticmethod
    def _check_fields(data: Dict[str, Any]) -> None:
        managed = sorted(k for k in data if k in MANAGED_FIELDS)
        if managed:
            raise InvariantViolation(
                f"Campos administrados por el sistema: {', '.join(managed)}"
            )
        unknown = sorted(k for k in data if k not in EDITABLE_FIELDS)
        if unknown:
            raise InvariantViolation(f"Campos desconocidos: {', '.join(unknown)}")

    @staticmethod
    def _check_quantity(quantity: Any) -> int:
        # bool es subclase de int, no es una cantidad válida
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvariantViolation(f'Cantidad no entera: {quantity!r}')
        if quantity < 0:
            raise InvariantViolation(f'Cantidad negativa: {quantity}')
        return quantity

    @staticmethod
    def _check_department(value: Any) -> Department:
        try:
            return Department(value)
        except ValueError:
            raise InvariantViolation(f'Departamento inválido: {value!r}') from None

    def _next_timestamp(self, previous: Optional[datetime]) -> datetime:
        """Marca de tiempo estrictamente posterior a la anterior del registro."""
        now = self.clock.now()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _get_or_raise(self, item_id: str) -> InventoryItem:
        item = self.inventory_repo.get(item_id)
        if item is None:
            raise NotFoundError('Ítem', item_id)
        return item

    # =========================================================================
    # COMANDOS
    # =========================================================================

    @profile_function(name="Agregar ítem")
    def add_item(self, candidate: Dict[str, Any], requester: Optional[User]) -> InventoryItem:
        """
        Crea un nuevo ítem.

        Args:
            candidate: Datos ya validados por el formulario (name, description,
                department, quantity, category, location)
            requester: Usuario que crea

        Returns:
            El ítem creado (con id, estado y fecha asignados)

        Raises:
            AuthorizationError: Sin permiso 'add' o departamento fuera de alcance
            InvariantViolation: Datos mal formados (cantidad negativa, etc.)
        """
        self._require_permission(requester, Permission.ADD)
        self._check_fields(candidate)
        if 'name' not in candidate or 'quantity' not in candidate:
            raise InvariantViolation('El ítem requiere nombre y cantidad')

        department = self._check_department(
            candidate.get('department', default_department_for(requester))
        )
        self._authorize(requester, Permission.ADD, department)
        quantity = self._check_quantity(candidate['quantity'])

        item = InventoryItem(
            id=uuid.uuid4().hex,
            name=candidate['name'],
            description=candidate.get('description', ''),
            department=department,
            quantity=quantity,
            category=candidate.get('category', ''),
            location=candidate.get('location', ''),
            status=derive_status(quantity),
            last_updated=self._next_timestamp(None),
            added_by=requester.id,
        )
        self.inventory_repo.add(item)

        logger.info(
            "Ítem %s '%s' creado por %s en %s (cantidad=%d, estado=%s)",
            item.id, item.name, requester.username, department.value,
            quantity, item.status.value
        )
        return item

    @profile_function(name="Editar ítem")
    def update_item(self, item_id: str, patch: Dict[str, Any],
                    requester: Optional[User]) -> InventoryItem:
        """
        Aplica una modificación parcial a un ítem.

        El estado se recalcula con la cantidad resultante (la del patch si
        viene, si no la anterior) y la fecha de actualización siempre avanza,
        incluso con un patch vacío.

        Raises:
            NotFoundError: El ítem no existe
            AuthorizationError: Sin permiso 'edit' o ítem fuera de alcance
            InvariantViolation: Patch con campos no editables o mal formados
        """
        current = self._get_or_raise(item_id)
        self._authorize(requester, Permission.EDIT, current.department)
        self._check_fields(patch)

        changes = dict(patch)
        if 'department' in changes:
            changes['department'] = self._check_department(changes['department'])
            # Tampoco se puede mover un ítem fuera del propio alcance
            self._authorize(requester, Permission.EDIT, changes['department'])
        if 'quantity' in changes:
            changes['quantity'] = self._check_quantity(changes['quantity'])

        quantity = changes.get('quantity', current.quantity)
        updated = replace(
            current,
            **changes,
            status=derive_status(quantity),
            last_updated=self._next_timestamp(current.last_updated),
        )
        self.inventory_repo.replace(updated)

        if updated.status != current.status:
            logger.info(
                "Ítem %s cambió de estado: %s → %s",
                item_id, current.status.value, updated.status.value
            )
        logger.info("Ítem %s actualizado por %s: %s", item_id, requester.username,
                    sorted(changes))
        return updated

    @profile_function(name="Eliminar ítem")
    def delete_item(self, item_id: str, requester: Optional[User]) -> None:
        """
        Elimina un ítem.

        Raises:
            NotFoundError: El ítem no existe
            AuthorizationError: Sin permiso 'delete' o ítem fuera de alcance
        """
        current = self._get_or_raise(item_id)
        self._authorize(requester, Permission.DELETE, current.department)
        self.inventory_repo.remove(item_id)
        logger.info("Ítem %s '%s' eliminado por %s", item_id, current.name,
                    requester.username)

    # =========================================================================
    # CONSULTAS (sin autorización: el llamador compone con access_service)
    # =========================================================================

    def all_items(self) -> List[InventoryItem]:
        """Todos los ítems en orden de inserción."""
        return self.inventory_repo.list()

    def items_by_department(self, department: Union[Department, str]) -> List[InventoryItem]:
        """Ítems de un departamento."""
        return self.inventory_repo.list_by_department(Department(department))

    def item_by_id(self, item_id: str) -> Optional[InventoryItem]:
        """Ítem por ID o None."""
        return self.inventory_repo.get(item_id)

    def department_summary(self, department: Union[Department, str, None] = None) -> DepartmentSummary:
        """
        Resumen de conteos de un departamento, o de todo el sistema si
        department es None. Se recalcula en cada llamada.
        """
        if department is None:
            return self.summarize(self.all_items())
        department = Department(department)
        return self.summarize(self.items_by_department(department), department)

    # =========================================================================
    # AGREGADOS SOBRE UNA COLECCIÓN
    # =========================================================================
    # Funciones puras sobre la lista recibida: las páginas las aplican a la
    # vista ya filtrada por visible_items().

    @staticmethod
    def summarize(items: Iterable[InventoryItem],
                  department: Optional[Department] = None) -> DepartmentSummary:
        """Cuenta total y por estado de una colección."""
        counts = InventoryService.status_counts(items)
        return DepartmentSummary(
            department=department,
            total_items=sum(counts.values()),
            available_items=counts[ItemStatus.AVAILABLE.value],
            low_stock_items=counts[ItemStatus.LOW.value],
            out_of_stock_items=counts[ItemStatus.OUT_OF_STOCK.value],
        )

    @staticmethod
    def status_counts(items: Iterable[InventoryItem]) -> Dict[str, int]:
        """Cantidad de ítems por estado (siempre con los tres estados)."""
        counts = {status.value: 0 for status in ItemStatus}
        for item in items:
            counts[item.status.value] += 1
        return counts

    @staticmethod
    def category_counts(items: Iterable[InventoryItem], limit: int = 5) -> List[Tuple[str, int]]:
        """
        Categorías más frecuentes.

        Returns:
            Lista [(categoría, cantidad)] de mayor a menor; los empates
            conservan el orden de primera aparición.
        """
        return Counter(item.category for item in items).most_common(limit)

    def department_distribution(self) -> List[Tuple[str, int]]:
        """Ítems por departamento en todo el sistema (orden de aparición)."""
        counts = Counter(item.department.value for item in self.all_items())
        return list(counts.items())

    @staticmethod
    def recent_items(items: Iterable[InventoryItem], limit: int = 5) -> List[InventoryItem]:
        """Los ítems actualizados más recientemente (empates en orden de inserción)."""
        ordered = sorted(
            items,
            key=lambda item: item.last_updated or _EPOCH,
            reverse=True,
        )
        return ordered[:limit]

    @staticmethod
    def search_items(items: Iterable[InventoryItem], query: str = '',
                     category: str = '', status: str = '') -> List[InventoryItem]:
        """
        Filtra por texto (nombre, descripción, categoría, ubicación),
        categoría exacta y estado exacto. Los filtros vacíos no aplican.
        """
        term = (query or '').strip().lower()
        results = []
        for item in items:
            if term and not any(
                term in value.lower()
                for value in (item.name, item.description, item.category, item.location)
            ):
                continue
            if category and item.category != category:
                continue
            if status and item.status.value != status:
                continue
            results.append(item)
        return results

    @staticmethod
    def unique_categories(items: Iterable[InventoryItem]) -> List[str]:
        """Categorías presentes, en orden de primera aparición."""
        return list(dict.fromkeys(item.category for item in items))

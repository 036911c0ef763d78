# ==============================================================================
# RESOLUCIÓN DE ALCANCE Y PERMISOS
# ==============================================================================
# Capa de funciones puras, sin estado y sin errores: la ausencia de usuario
# simplemente da una lista vacía o False.
#
# Dos chequeos INDEPENDIENTES que se evalúan juntos en cada comando:
# - Alcance (visibilidad): qué departamento puede ver el usuario
# - Permiso (capacidad): qué acciones puede hacer (view/add/edit/delete)
# Un administrador se salta ambos. Esta es la única parte del código que
# conoce esa regla; servicios y rutas siempre pasan por aquí.
# ==============================================================================

from typing import Iterable, List, Optional, Union

from inventory_dashboard.models import Department, InventoryItem, Permission, User

# Departamento con el que se pre-llena el formulario de un administrador
ADMIN_DEFAULT_DEPARTMENT = Department.IT


def visible_items(user: Optional[User], items: Iterable[InventoryItem]) -> List[InventoryItem]:
    """
    Filtra los ítems que el usuario puede ver.

    Args:
        user: Usuario autenticado (o None)
        items: Colección completa de ítems

    Returns:
        Todos los ítems si es administrador, solo los de su departamento
        si no lo es. Se conserva el orden de entrada.
    """
    if user is None:
        return []
    if user.is_admin:
        return list(items)
    return [item for item in items if item.department == user.department]


def is_in_scope(user: Optional[User], department: Union[Department, str]) -> bool:
    """Verifica si un departamento está dentro del alcance del usuario."""
    if user is None:
        return False
    if user.is_admin:
        return True
    try:
        return Department(department) == user.department
    except ValueError:
        return False


def can_perform(user: Optional[User], action: Union[Permission, str]) -> bool:
    """
    Verifica si el usuario puede realizar una acción.

    'view' se concede siempre a un usuario autenticado: lo que se muestra
    se limita por alcance, no por permiso.
    """
    if user is None:
        return False
    try:
        action = Permission(action)
    except ValueError:
        return False
    if action == Permission.VIEW:
        return True
    return action in user.effective_permissions()


def default_department_for(user: Optional[User]) -> Department:
    """Departamento por defecto para el formulario de nuevo ítem."""
    if user is None or user.is_admin:
        return ADMIN_DEFAULT_DEPARTMENT
    return user.department

# ==============================================================================
# VALIDACIÓN DE FORMULARIOS
# ==============================================================================
# Se ejecuta ANTES de llamar a los servicios. Cada función devuelve
# (datos_limpios, errores) donde errores es {campo: mensaje}; un dict vacío
# significa que el formulario es válido.
#
# Las claves que no pertenecen al formulario se dejan pasar sin tocar: el
# servicio correspondiente las rechaza con InvariantViolation.
# ==============================================================================

import re
from typing import Any, Dict, Tuple

from inventory_dashboard.models import Department, Permission

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')
_INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')

ITEM_TEXT_FIELDS = ('name', 'description', 'category', 'location')


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_quantity(value: Any):
    """Entero o cadena de dígitos; None si no es convertible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def validate_item_form(data: Dict[str, Any], partial: bool = False) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Valida el formulario de ítem.

    Args:
        data: Datos recibidos
        partial: True para un patch (solo se validan los campos presentes)

    Returns:
        (datos_limpios, errores)
    """
    data = data or {}
    clean = dict(data)
    errors = {}

    for field in ITEM_TEXT_FIELDS:
        if field not in data:
            if not partial:
                errors[field] = 'Campo requerido'
            continue
        value = data[field]
        if _is_blank(value):
            errors[field] = 'Campo requerido'
        elif not isinstance(value, str):
            errors[field] = 'Debe ser texto'
        else:
            clean[field] = value.strip()

    if 'quantity' in data:
        quantity = _coerce_quantity(data['quantity'])
        if quantity is None:
            errors['quantity'] = 'La cantidad debe ser un número entero'
        elif quantity < 0:
            errors['quantity'] = 'La cantidad no puede ser negativa'
        else:
            clean['quantity'] = quantity
    elif not partial:
        errors['quantity'] = 'Campo requerido'

    if 'department' in data:
        try:
            clean['department'] = Department(data['department'])
        except ValueError:
            errors['department'] = 'Departamento inválido'

    return clean, errors


def validate_user_form(data: Dict[str, Any], creating: bool = True) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Valida el formulario de usuario.

    La contraseña solo es obligatoria al crear; al editar, vacía significa
    "conservar la actual". La clave isAdmin se traduce a is_admin.

    Returns:
        (datos_limpios, errores)
    """
    data = dict(data or {})
    errors = {}

    if 'isAdmin' in data:
        data['is_admin'] = data.pop('isAdmin')
    clean = dict(data)

    for field in ('username', 'name', 'email'):
        if field not in data:
            if creating:
                errors[field] = 'Campo requerido'
            continue
        if _is_blank(data[field]) or not isinstance(data[field], str):
            errors[field] = 'Campo requerido'
        else:
            clean[field] = data[field].strip()

    if 'email' in clean and 'email' not in errors and not EMAIL_PATTERN.search(clean['email']):
        errors['email'] = 'Email inválido'

    password = data.get('password')
    if password is not None and not isinstance(password, str):
        errors['password'] = 'Debe ser texto'
    elif creating and _is_blank(password):
        errors['password'] = 'Campo requerido'

    if 'permissions' in data or creating:
        permissions = data.get('permissions')
        if not isinstance(permissions, (list, tuple)) or not permissions:
            errors['permissions'] = 'Selecciona al menos un permiso'
        else:
            try:
                clean['permissions'] = [Permission(p) for p in permissions]
            except ValueError:
                errors['permissions'] = 'Permiso inválido'

    if 'department' in data:
        try:
            clean['department'] = Department(data['department'])
        except ValueError:
            errors['department'] = 'Departamento inválido'

    if 'is_admin' in data:
        clean['is_admin'] = bool(data['is_admin'])

    return clean, errors

# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia.
# Las claves de to_dict()/from_dict() usan camelCase: es el formato que
# consume el frontend y el que se guarda en la sesión.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum
from datetime import datetime


# ==============================================================================
# ENUMERACIONES - Departamentos, permisos y estados válidos
# ==============================================================================

class Department(str, Enum):
    """Departamentos de la organización (unidad de visibilidad)."""
    IT = "IT"
    HR = "HR"
    SALES = "Sales"
    SUPPORT = "Support"
    CLERKS = "Clerks"
    ELECTRIC = "Electric"


class Permission(str, Enum):
    """Capacidades que se pueden otorgar a un usuario."""
    VIEW = "view"
    EDIT = "edit"
    ADD = "add"
    DELETE = "delete"


class ItemStatus(str, Enum):
    """Clasificación de stock de un ítem (derivada de la cantidad)."""
    AVAILABLE = "available"
    LOW = "low"
    OUT_OF_STOCK = "out-of-stock"


ALL_PERMISSIONS = frozenset(Permission)

# Hasta este valor (inclusive) un ítem se considera "low"
LOW_STOCK_THRESHOLD = 5

# Categorías sugeridas en el formulario (no es una lista cerrada)
RECOMMENDED_CATEGORIES = (
    'Hardware',
    'Software',
    'Office Supplies',
    'Furniture',
    'Equipment',
    'Tools',
    'Supplies',
    'Documents',
    'Accessories',
    'Other',
)


def derive_status(quantity: int) -> ItemStatus:
    """
    Calcula el estado de stock a partir de la cantidad.

    Es la ÚNICA fuente del estado: todas las rutas de escritura lo usan.
    """
    if quantity <= 0:
        return ItemStatus.OUT_OF_STOCK
    if quantity <= LOW_STOCK_THRESHOLD:
        return ItemStatus.LOW
    return ItemStatus.AVAILABLE


def _parse_ts(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


def _format_ts(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


# ==============================================================================
# ENTIDADES DE USUARIO
# ==============================================================================

@dataclass
class User:
    """
    Representa un usuario del sistema.

    Attributes:
        id: Identificador único
        username: Nombre de acceso
        name: Nombre para mostrar
        email: Correo de contacto
        department: Departamento al que pertenece
        is_admin: Administrador (sin restricción de departamento)
        permissions: Permisos almacenados
        password: Credencial opaca, solo se compara por igualdad
        created_at: Fecha de creación
    """
    id: str
    username: str
    name: str = ''
    email: str = ''
    department: Department = Department.IT
    is_admin: bool = False
    permissions: List[Permission] = field(default_factory=lambda: [Permission.VIEW])
    password: str = ''
    created_at: Optional[datetime] = None

    def effective_permissions(self) -> frozenset:
        """Los administradores tienen todos los permisos implícitamente."""
        if self.is_admin:
            return ALL_PERMISSIONS
        return frozenset(self.permissions)

    def to_dict(self, include_password: bool = False) -> Dict[str, Any]:
        """Convierte a diccionario (la credencial solo si se pide)."""
        d = {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'email': self.email,
            'department': self.department.value,
            'isAdmin': self.is_admin,
            'permissions': [p.value for p in self.permissions],
            'createdAt': _format_ts(self.created_at),
        }
        if include_password:
            d['password'] = self.password
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            username=data.get('username', ''),
            name=data.get('name', ''),
            email=data.get('email', ''),
            department=Department(data.get('department', Department.IT.value)),
            is_admin=bool(data.get('isAdmin', False)),
            permissions=[Permission(p) for p in data.get('permissions', ['view'])],
            password=data.get('password', ''),
            created_at=_parse_ts(data.get('createdAt')),
        )


# ==============================================================================
# ENTIDADES DE INVENTARIO
# ==============================================================================

@dataclass
class InventoryItem:
    """
    Ítem del inventario de un departamento.

    El campo status NUNCA se asigna desde fuera: lo recalcula el
    InventoryService con derive_status() en cada alta o modificación.
    """
    id: str
    name: str
    description: str = ''
    department: Department = Department.IT
    quantity: int = 0
    category: str = ''
    location: str = ''
    status: ItemStatus = ItemStatus.OUT_OF_STOCK
    last_updated: Optional[datetime] = None
    added_by: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para las respuestas JSON."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'department': self.department.value,
            'quantity': self.quantity,
            'category': self.category,
            'location': self.location,
            'status': self.status.value,
            'lastUpdated': _format_ts(self.last_updated),
            'addedBy': self.added_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InventoryItem':
        """Crea instancia desde diccionario (el estado se vuelve a derivar)."""
        quantity = int(data.get('quantity', 0))
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            description=data.get('description', ''),
            department=Department(data.get('department', Department.IT.value)),
            quantity=quantity,
            category=data.get('category', ''),
            location=data.get('location', ''),
            status=derive_status(quantity),
            last_updated=_parse_ts(data.get('lastUpdated')),
            added_by=data.get('addedBy', ''),
        )


@dataclass
class DepartmentSummary:
    """
    Resumen de conteos de un departamento (o de todo el sistema si
    department es None). Se calcula siempre sobre la colección viva.
    """
    department: Optional[Department] = None
    total_items: int = 0
    available_items: int = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'department': self.department.value if self.department else None,
            'totalItems': self.total_items,
            'availableItems': self.available_items,
            'lowStockItems': self.low_stock_items,
            'outOfStockItems': self.out_of_stock_items,
        }

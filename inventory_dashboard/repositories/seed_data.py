# ==============================================================================
# DATOS SEMILLA
# ==============================================================================
# Estado inicial del sistema. Los datos NO se guardan en disco: al reiniciar
# el proceso (o llamar reset() en los repositorios) se vuelve a este set.
#
# IMPORTANTE: el usuario con id SEED_ADMIN_ID es el administrador semilla.
# Está protegido en UserService: no puede ser eliminado ni perder el rol.
# ==============================================================================

from typing import List

from inventory_dashboard.models import InventoryItem, User

SEED_ADMIN_ID = '1'

SEED_USERS = [
    {
        'id': SEED_ADMIN_ID,
        'username': 'admin',
        'password': 'admin123',
        'name': 'System Administrator',
        'department': 'IT',
        'isAdmin': True,
        'permissions': ['view', 'edit', 'add', 'delete'],
        'email': 'admin@company.com',
        'createdAt': '2024-01-01T08:00:00+00:00',
    },
    {
        'id': '2',
        'username': 'itmanager',
        'password': 'it123',
        'name': 'Ian Torres',
        'department': 'IT',
        'isAdmin': False,
        'permissions': ['view', 'edit', 'add', 'delete'],
        'email': 'itmanager@company.com',
        'createdAt': '2024-01-05T09:30:00+00:00',
    },
    {
        'id': '3',
        'username': 'hrmanager',
        'password': 'hr123',
        'name': 'Helen Ruiz',
        'department': 'HR',
        'isAdmin': False,
        'permissions': ['view', 'add'],
        'email': 'hrmanager@company.com',
        'createdAt': '2024-01-08T10:00:00+00:00',
    },
    {
        'id': '4',
        'username': 'salesrep',
        'password': 'sales123',
        'name': 'Sam Alvarez',
        'department': 'Sales',
        'isAdmin': False,
        'permissions': ['view'],
        'email': 'salesrep@company.com',
        'createdAt': '2024-01-12T11:15:00+00:00',
    },
    {
        'id': '5',
        'username': 'support',
        'password': 'support123',
        'name': 'Paula Ortega',
        'department': 'Support',
        'isAdmin': False,
        'permissions': ['view', 'edit'],
        'email': 'support@company.com',
        'createdAt': '2024-02-01T08:45:00+00:00',
    },
    {
        'id': '6',
        'username': 'clerk',
        'password': 'clerk123',
        'name': 'Carla Lemus',
        'department': 'Clerks',
        'isAdmin': False,
        'permissions': ['view', 'add', 'edit'],
        'email': 'clerk@company.com',
        'createdAt': '2024-02-10T14:20:00+00:00',
    },
    {
        'id': '7',
        'username': 'electric',
        'password': 'electric123',
        'name': 'Eric Lozano',
        'department': 'Electric',
        'isAdmin': False,
        'permissions': ['view', 'edit', 'add', 'delete'],
        'email': 'electric@company.com',
        'createdAt': '2024-02-15T07:50:00+00:00',
    },
]

SEED_ITEMS = [
    {
        'id': '1',
        'name': 'Dell Latitude Laptop',
        'description': 'Standard issue 14" business laptop, 16GB RAM',
        'department': 'IT',
        'quantity': 12,
        'category': 'Hardware',
        'location': 'IT Storage Room A',
        'lastUpdated': '2024-05-02T10:00:00+00:00',
        'addedBy': '2',
    },
    {
        'id': '2',
        'name': 'Network Switch 24-port',
        'description': 'Managed gigabit switch for floor closets',
        'department': 'IT',
        'quantity': 3,
        'category': 'Equipment',
        'location': 'Server Room',
        'lastUpdated': '2024-05-06T15:30:00+00:00',
        'addedBy': '1',
    },
    {
        'id': '3',
        'name': 'Office 365 Licenses',
        'description': 'Unassigned seats for new hires',
        'department': 'IT',
        'quantity': 0,
        'category': 'Software',
        'location': 'License Portal',
        'lastUpdated': '2024-04-28T09:10:00+00:00',
        'addedBy': '1',
    },
    {
        'id': '4',
        'name': 'Onboarding Folders',
        'description': 'Printed onboarding packs with policy handbook',
        'department': 'HR',
        'quantity': 40,
        'category': 'Documents',
        'location': 'HR Cabinet 2',
        'lastUpdated': '2024-05-01T13:00:00+00:00',
        'addedBy': '3',
    },
    {
        'id': '5',
        'name': 'Ergonomic Chair',
        'description': 'Adjustable chairs for new workstations',
        'department': 'HR',
        'quantity': 2,
        'category': 'Furniture',
        'location': 'Warehouse Bay 4',
        'lastUpdated': '2024-05-03T16:45:00+00:00',
        'addedBy': '3',
    },
    {
        'id': '6',
        'name': 'Product Brochures',
        'description': 'Spring catalogue brochures for client visits',
        'department': 'Sales',
        'quantity': 150,
        'category': 'Office Supplies',
        'location': 'Sales Office Shelf B',
        'lastUpdated': '2024-04-20T11:20:00+00:00',
        'addedBy': '1',
    },
    {
        'id': '7',
        'name': 'Demo Tablets',
        'description': 'Tablets preloaded with the sales demo app',
        'department': 'Sales',
        'quantity': 4,
        'category': 'Hardware',
        'location': 'Sales Office Locker',
        'lastUpdated': '2024-05-05T08:05:00+00:00',
        'addedBy': '1',
    },
    {
        'id': '8',
        'name': 'USB Headsets',
        'description': 'Noise cancelling headsets for the call desk',
        'department': 'Support',
        'quantity': 9,
        'category': 'Accessories',
        'location': 'Support Desk Cabinet',
        'lastUpdated': '2024-05-04T12:00:00+00:00',
        'addedBy': '5',
    },
    {
        'id': '9',
        'name': 'Replacement Keyboards',
        'description': 'Spare USB keyboards for ticket swaps',
        'department': 'Support',
        'quantity': 0,
        'category': 'Hardware',
        'location': 'Support Desk Cabinet',
        'lastUpdated': '2024-04-30T17:25:00+00:00',
        'addedBy': '5',
    },
    {
        'id': '10',
        'name': 'Printer Paper A4',
        'description': 'Boxes of 5 reams, 80gsm',
        'department': 'Clerks',
        'quantity': 25,
        'category': 'Supplies',
        'location': 'Mail Room',
        'lastUpdated': '2024-05-02T07:40:00+00:00',
        'addedBy': '6',
    },
    {
        'id': '11',
        'name': 'Multimeter',
        'description': 'Digital multimeters for field inspections',
        'department': 'Electric',
        'quantity': 5,
        'category': 'Tools',
        'location': 'Electric Workshop',
        'lastUpdated': '2024-05-06T09:00:00+00:00',
        'addedBy': '7',
    },
    {
        'id': '12',
        'name': 'Cable Spool 100m',
        'description': 'Copper wire spools, 2.5mm',
        'department': 'Electric',
        'quantity': 18,
        'category': 'Supplies',
        'location': 'Electric Workshop',
        'lastUpdated': '2024-04-25T10:30:00+00:00',
        'addedBy': '7',
    },
]


def seed_users() -> List[User]:
    """Usuarios iniciales."""
    return [User.from_dict(u) for u in SEED_USERS]


def seed_items() -> List[InventoryItem]:
    """Ítems iniciales (el estado se deriva de la cantidad al construirlos)."""
    return [InventoryItem.from_dict(i) for i in SEED_ITEMS]

# ==============================================================================
# EXCEPCIONES DE NEGOCIO
# ==============================================================================
# Los servicios informan los comandos rechazados con estas excepciones.
# Nunca corrigen ni descartan en silencio un comando: el llamador recibe
# siempre el error tipado y decide cómo mostrarlo.
#
#   InventoryError (base, con 'code' legible por máquina)
#   ├── AuthorizationError      → sin permiso o fuera del departamento
#   ├── NotFoundError           → el ID no existe
#   ├── ProtectedResourceError  → operación sobre el administrador semilla
#   ├── DuplicateResourceError  → nombre de usuario ya registrado
#   └── InvariantViolation      → dato mal formado llegó al servicio
# ==============================================================================


class InventoryError(Exception):
    """Excepción base de la capa de servicios."""

    code = 'INVENTORY_ERROR'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthorizationError(InventoryError):
    """El usuario no tiene el permiso o el alcance de departamento requerido."""

    code = 'NOT_AUTHORIZED'

    def __init__(self, message: str, action: str = None):
        super().__init__(message)
        self.action = action


class NotFoundError(InventoryError):
    """El registro referenciado no existe."""

    code = 'NOT_FOUND'

    def __init__(self, resource: str, record_id: str):
        super().__init__(f'{resource} "{record_id}" no encontrado')
        self.resource = resource
        self.record_id = record_id


class ProtectedResourceError(InventoryError):
    """Se intentó eliminar o degradar al administrador semilla."""

    code = 'PROTECTED_RESOURCE'


class DuplicateResourceError(InventoryError):
    """Ya existe un registro con esa clave única."""

    code = 'DUPLICATE'


class InvariantViolation(InventoryError):
    """
    Llegó al servicio un dato que la capa de formularios debió rechazar
    (por ejemplo una cantidad negativa o un intento de fijar el estado).
    """

    code = 'INVARIANT_VIOLATION'

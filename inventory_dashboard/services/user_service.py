# ==============================================================================
# SERVICIO DE USUARIOS
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con usuarios.
#
# - Este servicio NO depende del tipo de almacenamiento
# - Solo interactúa con repositorios a través de interfaces claras
# - Toda la lógica de permisos y validaciones está aquí, NO en rutas
#
# REGLA CRÍTICA - ADMINISTRADOR SEMILLA:
# El usuario con id SEED_ADMIN_ID está BLINDADO y NO puede:
# - Ser eliminado (sin importar quién lo pida)
# - Perder el rol de administrador
# Estas validaciones se hacen AQUÍ, no en templates ni rutas.
#
# NOTA: las credenciales se comparan en texto plano contra la lista de
# usuarios. No es un mecanismo de seguridad real.
# ==============================================================================

import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional

from inventory_dashboard.models import Department, Permission, User
from inventory_dashboard.repositories.interfaces import IUserRepository
from inventory_dashboard.repositories.seed_data import SEED_ADMIN_ID
from inventory_dashboard.services.clock import Clock, SystemClock
from inventory_dashboard.services.errors import (
    AuthorizationError,
    DuplicateResourceError,
    InvariantViolation,
    NotFoundError,
    ProtectedResourceError,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Servicio para gestión de usuarios.

    Responsabilidades:
    - Autenticación (comparación directa de credenciales)
    - CRUD de usuarios, solo para administradores
    - Protección del administrador semilla
    """

    # Campos que un administrador puede fijar
    EDITABLE_FIELDS = frozenset([
        'username', 'name', 'email', 'department', 'is_admin', 'permissions', 'password'
    ])

    def __init__(self, user_repo: IUserRepository, clock: Clock = None):
        """
        Inicializa el servicio de usuarios.

        Args:
            user_repo: Repositorio de usuarios
            clock: Reloj para la fecha de creación
        """
        self.user_repo = user_repo
        self.clock = clock or SystemClock()

    # =========================================================================
    # MÉTODOS DE PROTECCIÓN - ADMINISTRADOR SEMILLA
    # =========================================================================

    def is_protected_user(self, user_id: str) -> bool:
        """Verifica si el usuario es el administrador semilla."""
        return user_id == SEED_ADMIN_ID

    def _require_admin(self, requester: Optional[User], action: str) -> None:
        if requester is None or not requester.is_admin:
            who = requester.username if requester else 'anónimo'
            logger.warning("%s intentó '%s' usuarios sin ser administrador", who, action)
            raise AuthorizationError(
                'Solo un administrador puede gestionar usuarios', action
            )

    def _get_or_raise(self, user_id: str) -> User:
        user = self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError('Usuario', user_id)
        return user

    def _check_username_free(self, username: str, own_id: str = None) -> None:
        existing = self.user_repo.find_by_username(username)
        if existing is not None and existing.id != own_id:
            raise DuplicateResourceError(f"El usuario '{username}' ya existe")

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Verifica campos y convierte departamento/permisos a enumeraciones."""
        unknown = sorted(k for k in data if k not in self.EDITABLE_FIELDS)
        if unknown:
            raise InvariantViolation(f"Campos desconocidos: {', '.join(unknown)}")

        clean = dict(data)
        for field in ('username', 'name', 'email', 'password'):
            if clean.get(field) is not None and not isinstance(clean[field], str):
                raise InvariantViolation(f"El campo '{field}' debe ser texto")
        if 'permissions' in clean and not isinstance(clean['permissions'], (list, tuple)):
            raise InvariantViolation('Los permisos deben ser una lista')
        try:
            if 'department' in clean:
                clean['department'] = Department(clean['department'])
            if 'permissions' in clean:
                clean['permissions'] = list(dict.fromkeys(
                    Permission(p) for p in clean['permissions']
                ))
        except ValueError as e:
            raise InvariantViolation(f'Valor inválido: {e}') from None
        if 'is_admin' in clean:
            clean['is_admin'] = bool(clean['is_admin'])
        return clean

    # =========================================================================
    # AUTENTICACIÓN
    # =========================================================================

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Autentica un usuario.

        Args:
            username: Nombre de usuario
            password: Contraseña (comparación por igualdad)

        Returns:
            El usuario si las credenciales coinciden, None si no
        """
        if not username or not password:
            return None
        user = self.user_repo.find_by_username(username)
        if user is None or user.password != password:
            logger.info("Intento de inicio de sesión fallido para '%s'", username)
            return None
        logger.info("Inicio de sesión de '%s'", username)
        return user

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_user(self, user_id: str) -> Optional[User]:
        """Usuario por ID o None."""
        return self.user_repo.get(user_id)

    def list_users(self) -> List[User]:
        """Todos los usuarios en orden de creación."""
        return self.user_repo.list()

    def search_users(self, query: str = '') -> List[User]:
        """
        Busca usuarios por nombre, usuario, email o departamento.

        Args:
            query: Texto a buscar (vacío = todos)
        """
        term = (query or '').strip().lower()
        users = self.list_users()
        if not term:
            return users
        return [
            u for u in users
            if any(term in value.lower()
                   for value in (u.name, u.username, u.email, u.department.value))
        ]

    # =========================================================================
    # COMANDOS
    # =========================================================================

    def create_user(self, data: Dict[str, Any], requester: Optional[User]) -> User:
        """
        Crea un nuevo usuario.

        Por defecto: departamento IT, sin rol de administrador y solo con
        permiso 'view'.

        Raises:
            AuthorizationError: El solicitante no es administrador
            DuplicateResourceError: El nombre de usuario ya existe
            InvariantViolation: Datos mal formados
        """
        self._require_admin(requester, 'create')
        clean = self._normalize(data)
        username = (clean.get('username') or '').strip()
        if not username:
            raise InvariantViolation('El nombre de usuario es requerido')
        self._check_username_free(username)

        user = User(
            id=uuid.uuid4().hex,
            username=username,
            name=clean.get('name', ''),
            email=clean.get('email', ''),
            department=clean.get('department', Department.IT),
            is_admin=clean.get('is_admin', False),
            permissions=clean.get('permissions') or [Permission.VIEW],
            password=clean.get('password', ''),
            created_at=self.clock.now(),
        )
        self.user_repo.add(user)
        logger.info("Usuario '%s' creado por %s", username, requester.username)
        return user

    def update_user(self, user_id: str, patch: Dict[str, Any],
                    requester: Optional[User]) -> User:
        """
        Modifica un usuario.

        Una contraseña vacía en el patch se ignora y se conserva la anterior.

        Raises:
            NotFoundError: El usuario no existe
            AuthorizationError: El solicitante no es administrador
            ProtectedResourceError: Quitar el rol al administrador semilla
            DuplicateResourceError: El nuevo nombre de usuario ya existe
        """
        current = self._get_or_raise(user_id)
        self._require_admin(requester, 'edit')
        clean = self._normalize(patch)

        if self.is_protected_user(user_id) and clean.get('is_admin') is False:
            raise ProtectedResourceError(
                'El administrador principal no puede perder su rol'
            )

        if not (clean.get('password') or '').strip():
            clean.pop('password', None)
        if 'username' in clean:
            clean['username'] = (clean['username'] or '').strip()
            if not clean['username']:
                raise InvariantViolation('El nombre de usuario es requerido')
            self._check_username_free(clean['username'], own_id=user_id)

        updated = replace(current, **clean)
        self.user_repo.replace(updated)
        logger.info("Usuario %s actualizado por %s: %s", user_id, requester.username,
                    sorted(k for k in clean if k != 'password'))
        return updated

    def delete_user(self, user_id: str, requester: Optional[User]) -> None:
        """
        Elimina un usuario.

        El administrador semilla se rechaza antes de cualquier otra
        verificación, sin importar quién lo pida.

        Raises:
            ProtectedResourceError: Es el administrador semilla
            NotFoundError: El usuario no existe
            AuthorizationError: El solicitante no es administrador
        """
        if self.is_protected_user(user_id):
            who = requester.username if requester else 'anónimo'
            logger.warning("%s intentó eliminar al administrador principal", who)
            raise ProtectedResourceError(
                'El administrador principal no puede ser eliminado'
            )
        current = self._get_or_raise(user_id)
        self._require_admin(requester, 'delete')
        self.user_repo.remove(user_id)
        logger.info("Usuario '%s' eliminado por %s", current.username, requester.username)

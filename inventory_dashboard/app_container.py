# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (se pueden cambiar repositorios y reloj)
#   - Migración gradual (cambiar repos sin tocar servicios)
#
# Los repositorios son EN MEMORIA: reset() descarta todos los cambios y
# vuelve al set semilla, igual que un reinicio del proceso.
# ==============================================================================

from typing import Optional

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de almacenamiento (memoria)
# ═══════════════════════════════════════════════════════════════════════════════
from inventory_dashboard.repositories import InventoryRepository, UserRepository

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from inventory_dashboard.services import (
    Clock,
    InventoryService,
    SystemClock,
    UserService,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = AppContainer()
        inventory_service = container.inventory_service
        user_service = container.user_service
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, clock: Clock = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, clock: Clock = None):
        """
        Inicializa el contenedor.

        Args:
            clock: Reloj compartido por los servicios (SystemClock por defecto)
        """
        if self._initialized:
            return

        self.clock = clock or SystemClock()

        # Inicializar repositorios (lazy loading)
        self._inventory_repo: Optional[InventoryRepository] = None
        self._user_repo: Optional[UserRepository] = None

        # Inicializar servicios (lazy loading)
        self._inventory_service: Optional[InventoryService] = None
        self._user_service: Optional[UserService] = None

        self._initialized = True

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def inventory_repo(self) -> InventoryRepository:
        """Repositorio de inventario (singleton)."""
        if self._inventory_repo is None:
            self._inventory_repo = InventoryRepository()
        return self._inventory_repo

    @property
    def user_repo(self) -> UserRepository:
        """Repositorio de usuarios (singleton)."""
        if self._user_repo is None:
            self._user_repo = UserRepository()
        return self._user_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def inventory_service(self) -> InventoryService:
        """Servicio de inventario (singleton)."""
        if self._inventory_service is None:
            self._inventory_service = InventoryService(self.inventory_repo, self.clock)
        return self._inventory_service

    @property
    def user_service(self) -> UserService:
        """Servicio de usuarios (singleton)."""
        if self._user_service is None:
            self._user_service = UserService(self.user_repo, self.clock)
        return self._user_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self, clock: Clock = None) -> None:
        """
        Reinicia todas las instancias (los datos vuelven a la semilla).
        Útil para testing.

        Args:
            clock: Nuevo reloj (si no se indica se conserva el actual)
        """
        if clock is not None:
            self.clock = clock

        self._inventory_repo = None
        self._user_repo = None

        self._inventory_service = None
        self._user_service = None

    @classmethod
    def get_instance(cls, clock: Clock = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            clock: Reloj (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            return cls(clock)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(clock: Clock = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global.

    Args:
        clock: Reloj (solo se usa en la primera llamada)
    """
    return AppContainer.get_instance(clock)

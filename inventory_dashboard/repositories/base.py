# ==============================================================================
# REPOSITORIO BASE - Colección en memoria
# ==============================================================================
# Los datos viven solo durante la ejecución del proceso: cada repositorio
# se construye a partir de un set semilla fijo y vuelve a él con reset().
# ==============================================================================

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')


class MemoryRepository(ABC, Generic[T]):
    """
    Clase base abstracta para los repositorios en memoria.

    Guarda los registros en un dict ordenado por inserción (id -> entidad).
    Nunca entrega el registro canónico: toda lectura devuelve una copia y
    toda escritura guarda una copia, así ningún llamador puede mutar la
    colección por fuera del repositorio.

    Al migrar a una base de datos:
    - Esta clase se reemplazará por una conexión a base de datos
    - list/get/add se convertirán en queries SQL
    """

    def __init__(self, seed: Optional[Iterable[T]] = None):
        """
        Inicializa el repositorio.

        Args:
            seed: Registros iniciales (si es None se usa _seed_records())
        """
        self._seed = list(seed) if seed is not None else None
        self._records: Dict[str, T] = {}
        self.reset()

    @abstractmethod
    def _seed_records(self) -> List[T]:
        """
        Retorna los registros semilla de este repositorio.
        Debe ser implementado por cada repositorio concreto.
        """
        pass

    @staticmethod
    def _key(record: Any) -> str:
        return record.id

    def reset(self) -> None:
        """Descarta todos los cambios y vuelve al set semilla."""
        records = self._seed if self._seed is not None else self._seed_records()
        self._records = {self._key(r): copy.deepcopy(r) for r in records}

    def list(self) -> List[T]:
        """Todos los registros, en orden de inserción."""
        return [copy.deepcopy(r) for r in self._records.values()]

    def get(self, record_id: str) -> Optional[T]:
        """Obtiene un registro por ID o None."""
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def exists(self, record_id: str) -> bool:
        return record_id in self._records

    def add(self, record: T) -> None:
        """Agrega un registro al final de la colección."""
        self._records[self._key(record)] = copy.deepcopy(record)

    def replace(self, record: T) -> bool:
        """
        Reemplaza un registro existente conservando su posición.

        Returns:
            True si existía y se reemplazó
        """
        key = self._key(record)
        if key not in self._records:
            return False
        self._records[key] = copy.deepcopy(record)
        return True

    def remove(self, record_id: str) -> Optional[T]:
        """
        Elimina un registro.

        Returns:
            El registro eliminado o None si no existía
        """
        return self._records.pop(record_id, None)

    def count(self) -> int:
        return len(self._records)

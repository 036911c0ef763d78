"""
Reloj inyectable.

Los servicios nunca llaman a ``datetime.now()`` directamente: reciben un
Clock en el constructor, así los tests pueden fijar el tiempo.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Interfaz de reloj."""

    @abstractmethod
    def now(self) -> datetime:
        """Fecha y hora actual, siempre con zona horaria (UTC)."""
        ...


class SystemClock(Clock):
    """Reloj real del sistema."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    Reloj de prueba: devuelve siempre el mismo instante hasta que se
    avanza manualmente con advance().
    """

    def __init__(self, current: datetime = None):
        self._current = current or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current

    def advance(self, **kwargs) -> datetime:
        """Avanza el reloj (mismos argumentos que timedelta)."""
        self._current = self._current + timedelta(**kwargs)
        return self._current

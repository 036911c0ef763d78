"""Tablero de inventario por departamentos con permisos por usuario."""

__version__ = "0.1.0"

# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide rendimiento de rutas y funciones sin afectar la experiencia del usuario.
# Usa el módulo logging: mientras no se llame configure_logging() los
# registros solo se propagan al logger raíz; después se guardan además en
# archivos legibles dentro del directorio de logs.
#
# ACTIVAR/DESACTIVAR: variable de entorno ENABLE_PROFILING (1/0)
# ==============================================================================

import logging
import os
import threading
import time
from collections import defaultdict
from functools import wraps

# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

ENABLE_PROFILING = os.environ.get('ENABLE_PROFILING', '1') == '1'

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300   # Advertencia si supera 300ms
THRESHOLD_CRITICAL = 700  # Crítico si supera 700ms

# Directorio de logs por defecto
LOGS_DIR = os.environ.get(
    'INVENTORY_LOGS_DIR',
    os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
)

performance_log = logging.getLogger('inventory_dashboard.performance')
slow_routes_log = logging.getLogger('inventory_dashboard.performance.slow_routes')
slow_functions_log = logging.getLogger('inventory_dashboard.performance.slow_functions')

# Mapeo de rutas a nombres legibles (para logs más humanos)
ROUTE_NAMES = {
    # Autenticación
    'POST /api/login': 'Iniciar sesión',
    'POST /api/logout': 'Cerrar sesión',
    'GET /api/session': 'Restaurar sesión',

    # Tablero
    'GET /api/dashboard': 'Ver panel principal',
    'GET /api/analytics': 'Ver analíticas',
    'GET /api/summary': 'Ver resumen de departamento',

    # Inventario
    'GET /api/items': 'Listar inventario',
    'POST /api/items': 'Agregar ítem',
    'GET /api/items/<item_id>': 'Ver ítem',
    'PUT /api/items/<item_id>': 'Editar ítem',
    'PATCH /api/items/<item_id>': 'Editar ítem',
    'DELETE /api/items/<item_id>': 'Eliminar ítem',

    # Usuarios
    'GET /api/users': 'Listar usuarios',
    'POST /api/users': 'Crear usuario',
    'PUT /api/users/<user_id>': 'Editar usuario',
    'DELETE /api/users/<user_id>': 'Eliminar usuario',
}


# ═══════════════════════════════════════════════════════════════════════════
# ESTADÍSTICAS DE FUNCIONES (en memoria)
# ═══════════════════════════════════════════════════════════════════════════

# Estructura: {nombre_funcion: {calls: int, total_time: float, max_time: float}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()


# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE ARCHIVOS DE LOG
# ═══════════════════════════════════════════════════════════════════════════

def configure_logging(logs_dir: str = None, level: int = logging.INFO) -> str:
    """
    Crea el directorio de logs y conecta los archivos:
    app.log, performance.log, slow_routes.log, slow_functions.log

    Es idempotente: llamarla dos veces no duplica handlers.

    Returns:
        Ruta del directorio de logs usado
    """
    logs_dir = logs_dir or LOGS_DIR
    os.makedirs(logs_dir, exist_ok=True)

    formatter = logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s')
    targets = [
        (logging.getLogger('inventory_dashboard'), 'app.log'),
        (performance_log, 'performance.log'),
        (slow_routes_log, 'slow_routes.log'),
        (slow_functions_log, 'slow_functions.log'),
    ]
    for logger, filename in targets:
        path = os.path.join(logs_dir, filename)
        already = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(path)
            for h in logger.handlers
        )
        if not already:
            handler = logging.FileHandler(path, encoding='utf-8')
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        logger.setLevel(level)
    return logs_dir


def _get_route_name(method, path, rule=None):
    """
    Obtiene nombre legible para una ruta.
    Intenta hacer match con ROUTE_NAMES, si no, devuelve la ruta raw.
    """
    key = f"{method} {path}"
    if key in ROUTE_NAMES:
        return ROUTE_NAMES[key]

    # Con la regla de Flask se resuelven las rutas con parámetros
    if rule:
        rule_key = f"{method} {rule}"
        if rule_key in ROUTE_NAMES:
            return ROUTE_NAMES[rule_key]

    return key


# ═══════════════════════════════════════════════════════════════════════════
# 1️⃣ PROFILING DE RUTAS (hooks de Flask)
# ═══════════════════════════════════════════════════════════════════════════

def log_route_performance(method, path, rule, time_ms, user=None):
    """
    Registra el rendimiento de una ruta y marca las lentas.

    Args:
        method: GET, POST, etc.
        path: Ruta solicitada (/api/items/42)
        rule: Regla de Flask (/api/items/<item_id>)
        time_ms: Tiempo en milisegundos
        user: Usuario que hizo la petición (opcional)
    """
    action_name = _get_route_name(method, path, rule)
    user_str = user or 'anónimo'

    performance_log.info(
        "Acción: %s | Usuario: %s | Ruta: %s %s | Tiempo: %.0f ms",
        action_name, user_str, method, path, time_ms
    )

    if time_ms >= THRESHOLD_CRITICAL:
        slow_routes_log.critical(
            "Ruta MUY LENTA: %s | Usuario: %s | %.0f ms (umbral: %d ms)",
            action_name, user_str, time_ms, THRESHOLD_CRITICAL
        )
    elif time_ms >= THRESHOLD_WARNING:
        slow_routes_log.warning(
            "Ruta LENTA: %s | Usuario: %s | %.0f ms (umbral: %d ms)",
            action_name, user_str, time_ms, THRESHOLD_WARNING
        )


def init_profiling(app):
    """
    Inicializa el sistema de profiling en una app Flask.
    Registra hooks before_request y after_request.

    Uso:
        from inventory_dashboard.performance_logger import init_profiling
        init_profiling(app)
    """
    if not ENABLE_PROFILING:
        return

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request, session

        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000  # ms

        if request.path.startswith('/static'):
            return response

        rule = str(request.url_rule) if request.url_rule else request.path
        user = (session.get('currentUser') or {}).get('username')
        log_route_performance(request.method, request.path, rule, elapsed, user)
        return response


# ═══════════════════════════════════════════════════════════════════════════
# 2️⃣ DECORADOR PARA FUNCIONES CLAVE
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Decorador para medir rendimiento de funciones críticas.

    Uso:
        @profile_function
        def mi_funcion():
            ...

        @profile_function(name="Agregar ítem")
        def add_item():
            ...

    Registra:
        - Cantidad de llamadas
        - Tiempo total y máximo
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn

        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000

                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    if elapsed_ms > stats['max_time']:
                        stats['max_time'] = elapsed_ms

                if elapsed_ms >= THRESHOLD_WARNING:
                    level = logging.CRITICAL if elapsed_ms >= THRESHOLD_CRITICAL else logging.WARNING
                    slow_functions_log.log(
                        level, "Función: %s | Tiempo: %.0f ms", func_name, elapsed_ms
                    )

        return wrapper

    # Permitir uso sin paréntesis: @profile_function
    if func is not None:
        return decorator(func)
    return decorator


# ═══════════════════════════════════════════════════════════════════════════
# 3️⃣ REPORTE DE ESTADÍSTICAS
# ═══════════════════════════════════════════════════════════════════════════

def get_function_stats():
    """
    Obtiene estadísticas de todas las funciones perfiladas.

    Returns:
        dict: {nombre: {calls, avg_time, max_time}}
    """
    with _stats_lock:
        result = {}
        for func_name, stats in _function_stats.items():
            calls = stats['calls']
            avg = stats['total_time'] / calls if calls > 0 else 0
            result[func_name] = {
                'calls': calls,
                'avg_time': round(avg, 2),
                'max_time': round(stats['max_time'], 2)
            }
        return result


def reset_stats():
    """Reinicia todas las estadísticas (útil para testing)"""
    with _stats_lock:
        _function_stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'configure_logging',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'reset_stats',
]

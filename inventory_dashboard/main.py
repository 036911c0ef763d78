from flask import Flask, jsonify, request, session
from functools import wraps
from werkzeug.exceptions import HTTPException
import logging
import os

from inventory_dashboard.models import (
    Department,
    ItemStatus,
    Permission,
    RECOMMENDED_CATEGORIES,
    User,
)
from inventory_dashboard.performance_logger import configure_logging, init_profiling
from inventory_dashboard.services import (
    AuthorizationError,
    DuplicateResourceError,
    InventoryError,
    InventoryService,
    InvariantViolation,
    NotFoundError,
    ProtectedResourceError,
    can_perform,
    default_department_for,
    is_in_scope,
    visible_items,
)
from inventory_dashboard.validators import validate_item_form, validate_user_form

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo traducen HTTP <-> servicios. Toda la lógica de negocio
# (permisos, alcance, estado de stock) vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from inventory_dashboard.app_container import get_container

logger = logging.getLogger(__name__)

app = Flask(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en INVENTORY_LOGS_DIR
# Para desactivar: ENABLE_PROFILING=0
init_profiling(app)

# ═══════════════════════════════════════════════════════════════════════════════
# MODO PRODUCCIÓN
# ═══════════════════════════════════════════════════════════════════════════════
PRODUCTION_MODE = os.environ.get('INVENTORY_PRODUCTION_MODE', '0') == '1'

# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
# SECRET_KEY: En producción DEBE definirse via variable de entorno
# Comando: export INVENTORY_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
_DEFAULT_SECRET = "inventory_dashboard_dev_secret_key_change_in_production"
_SECRET_KEY = os.environ.get("INVENTORY_SECRET_KEY")

if PRODUCTION_MODE and not _SECRET_KEY:
    logger.warning("PRODUCTION_MODE activo sin INVENTORY_SECRET_KEY definida")

app.secret_key = _SECRET_KEY or _DEFAULT_SECRET

# Configuración de cookies de sesión
app.config.update(
    SESSION_COOKIE_HTTPONLY=True,      # Protege contra XSS
    SESSION_COOKIE_SECURE=False,       # False para HTTP local (True solo para HTTPS)
    SESSION_COOKIE_SAMESITE='Lax',     # Protección CSRF básica
    PERMANENT_SESSION_LIFETIME=86400,  # 24 horas
)

# Clave fija de la sesión donde se guarda el usuario autenticado
SESSION_USER_KEY = 'currentUser'

# Código HTTP para cada error de negocio (se busca por la jerarquía de clases)
ERROR_STATUS = {
    AuthorizationError: 403,
    ProtectedResourceError: 403,
    NotFoundError: 404,
    DuplicateResourceError: 409,
    InvariantViolation: 422,
}


# ═══════════════════════════════════════════════════════════════════════════════
# SESIÓN Y DECORADORES
# ═══════════════════════════════════════════════════════════════════════════════

def current_user():
    """
    Usuario de la sesión, tal como se guardó al iniciar sesión.

    No se vuelve a consultar el repositorio: la copia de la sesión sobrevive
    a un reinicio aunque los datos vuelvan a la semilla.
    """
    data = session.get(SESSION_USER_KEY)
    if not data:
        return None
    try:
        return User.from_dict(data)
    except (TypeError, ValueError):
        logger.warning("Sesión con usuario corrupto, se descarta")
        session.pop(SESSION_USER_KEY, None)
        return None


def _error(message, status, code, **extra):
    body = {"ok": False, "error": message, "code": code}
    body.update(extra)
    return jsonify(body), status


def _validation_error(errors):
    return _error("Datos inválidos", 400, "VALIDATION_ERROR", errors=errors)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return _error("Debes iniciar sesión.", 401, "NOT_AUTHENTICATED")
        return f(*args, **kwargs)
    return wrapper


def admin_required(f):
    @wraps(f)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user().is_admin:
            return _error("Permiso denegado.", 403, AuthorizationError.code)
        return f(*args, **kwargs)
    return wrapper


@app.after_request
def set_security_headers(response):
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=()'
    # NOTA: HSTS solo en producción con HTTPS real
    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


# ═══════════════════════════════════════════════════════════════════════════════
# MANEJO DE ERRORES → JSON
# ═══════════════════════════════════════════════════════════════════════════════

@app.errorhandler(InventoryError)
def handle_inventory_error(e):
    status = next(
        (ERROR_STATUS[cls] for cls in type(e).__mro__ if cls in ERROR_STATUS), 400
    )
    return _error(e.message, status, e.code)


@app.errorhandler(HTTPException)
def handle_http_error(e):
    # Las redirecciones de werkzeug (p. ej. barra final) conservan su Location
    if e.code is not None and 300 <= e.code < 400:
        return e
    return _error(e.description, e.code, e.name.upper().replace(' ', '_'))


# ═══════════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/login", methods=["POST"])
def login():
    data = _json_body() or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    if not username or not password:
        errors = {}
        if not username:
            errors["username"] = "Campo requerido"
        if not password:
            errors["password"] = "Campo requerido"
        return _validation_error(errors)

    user = get_container().user_service.authenticate(username, password)
    if user is None:
        return _error("Usuario o contraseña incorrecta.", 401, "INVALID_CREDENTIALS")

    session.permanent = True  # Sesión permanente (usa PERMANENT_SESSION_LIFETIME)
    session[SESSION_USER_KEY] = user.to_dict()
    return jsonify({"ok": True, "user": user.to_dict()})


@app.route("/api/logout", methods=["POST"])
def logout():
    user = current_user()
    session.pop(SESSION_USER_KEY, None)
    if user:
        logger.info("Cierre de sesión de '%s'", user.username)
    return jsonify({"ok": True})


@app.route("/api/session", methods=["GET"])
def restore_session():
    user = current_user()
    return jsonify({"ok": True, "user": user.to_dict() if user else None})


# ═══════════════════════════════════════════════════════════════════════════════
# TABLERO Y ANALÍTICAS
# ═══════════════════════════════════════════════════════════════════════════════

def _visible_for(user):
    return visible_items(user, get_container().inventory_service.all_items())


@app.route("/api/dashboard", methods=["GET"])
@login_required
def dashboard():
    user = current_user()
    items = _visible_for(user)
    if user.is_admin:
        title = "System Overview"
        summary = InventoryService.summarize(items)
    else:
        title = f"{user.department.value} Department Dashboard"
        summary = InventoryService.summarize(items, user.department)

    return jsonify({
        "ok": True,
        "title": title,
        "summary": summary.to_dict(),
        "lowStock": [i.to_dict() for i in items if i.status == ItemStatus.LOW],
        "outOfStock": [i.to_dict() for i in items if i.status == ItemStatus.OUT_OF_STOCK],
        "recent": [i.to_dict() for i in InventoryService.recent_items(items)],
    })


@app.route("/api/analytics", methods=["GET"])
@login_required
def analytics():
    user = current_user()
    service = get_container().inventory_service
    items = _visible_for(user)
    distribution = service.department_distribution() if user.is_admin else []
    return jsonify({
        "ok": True,
        "statusCounts": InventoryService.status_counts(items),
        "topCategories": [
            {"category": category, "count": count}
            for category, count in InventoryService.category_counts(items)
        ],
        "departmentDistribution": [
            {"department": department, "count": count}
            for department, count in distribution
        ],
    })


@app.route("/api/summary", methods=["GET"])
@login_required
def department_summary():
    user = current_user()
    raw = (request.args.get("department") or "").strip()
    department = None
    if raw:
        try:
            department = Department(raw)
        except ValueError:
            return _validation_error({"department": "Departamento inválido"})

    if not user.is_admin:
        if department is not None and department != user.department:
            raise AuthorizationError(
                f'El departamento {department.value} está fuera de tu alcance', 'view'
            )
        department = user.department

    summary = get_container().inventory_service.department_summary(department)
    return jsonify({"ok": True, "summary": summary.to_dict()})


@app.route("/api/options", methods=["GET"])
@login_required
def form_options():
    user = current_user()
    return jsonify({
        "ok": True,
        "departments": [d.value for d in Department],
        "categories": list(RECOMMENDED_CATEGORIES),
        "permissions": [p.value for p in Permission],
        "statuses": [s.value for s in ItemStatus],
        "defaultDepartment": default_department_for(user).value,
        "can": {p.value: can_perform(user, p) for p in Permission},
    })


# ═══════════════════════════════════════════════════════════════════════════════
# INVENTARIO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/items", methods=["GET"])
@login_required
def list_items():
    items = _visible_for(current_user())
    results = InventoryService.search_items(
        items,
        query=request.args.get("q", ""),
        category=request.args.get("category", ""),
        status=request.args.get("status", ""),
    )
    return jsonify({
        "ok": True,
        "items": [i.to_dict() for i in results],
        "categories": InventoryService.unique_categories(items),
    })


@app.route("/api/items", methods=["POST"])
@login_required
def add_item():
    data = _json_body()
    if data is None:
        return _validation_error({"body": "Se esperaba un objeto JSON"})
    clean, errors = validate_item_form(data)
    if errors:
        return _validation_error(errors)
    item = get_container().inventory_service.add_item(clean, current_user())
    return jsonify({"ok": True, "item": item.to_dict()}), 201


@app.route("/api/items/<item_id>", methods=["GET"])
@login_required
def get_item(item_id):
    user = current_user()
    item = get_container().inventory_service.item_by_id(item_id)
    if item is None:
        raise NotFoundError('Ítem', item_id)
    if not is_in_scope(user, item.department):
        raise AuthorizationError(
            f'El departamento {item.department.value} está fuera de tu alcance', 'view'
        )
    return jsonify({"ok": True, "item": item.to_dict()})


@app.route("/api/items/<item_id>", methods=["PUT", "PATCH"])
@login_required
def update_item(item_id):
    data = _json_body()
    if data is None:
        return _validation_error({"body": "Se esperaba un objeto JSON"})
    clean, errors = validate_item_form(data, partial=request.method == "PATCH")
    if errors:
        return _validation_error(errors)
    item = get_container().inventory_service.update_item(item_id, clean, current_user())
    return jsonify({"ok": True, "item": item.to_dict()})


@app.route("/api/items/<item_id>", methods=["DELETE"])
@login_required
def delete_item(item_id):
    get_container().inventory_service.delete_item(item_id, current_user())
    return jsonify({"ok": True})


# ═══════════════════════════════════════════════════════════════════════════════
# USUARIOS (solo administradores)
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/users", methods=["GET"])
@admin_required
def list_users():
    users = get_container().user_service.search_users(request.args.get("q", ""))
    return jsonify({"ok": True, "users": [u.to_dict() for u in users]})


@app.route("/api/users", methods=["POST"])
@admin_required
def create_user():
    data = _json_body()
    if data is None:
        return _validation_error({"body": "Se esperaba un objeto JSON"})
    clean, errors = validate_user_form(data, creating=True)
    if errors:
        return _validation_error(errors)
    user = get_container().user_service.create_user(clean, current_user())
    return jsonify({"ok": True, "user": user.to_dict()}), 201


@app.route("/api/users/<user_id>", methods=["PUT"])
@admin_required
def update_user(user_id):
    data = _json_body()
    if data is None:
        return _validation_error({"body": "Se esperaba un objeto JSON"})
    clean, errors = validate_user_form(data, creating=False)
    if errors:
        return _validation_error(errors)
    user = get_container().user_service.update_user(user_id, clean, current_user())
    return jsonify({"ok": True, "user": user.to_dict()})


@app.route("/api/users/<user_id>", methods=["DELETE"])
@admin_required
def delete_user(user_id):
    get_container().user_service.delete_user(user_id, current_user())
    return jsonify({"ok": True})


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"ok": True, "status": "healthy"})


if __name__ == "__main__":
    # Configuración para desarrollo local
    # En producción usar WSGI (gunicorn, waitress, etc.) con wsgi:app
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '127.0.0.1')
    PORT = int(os.environ.get('FLASK_PORT', 5000))

    logs_dir = configure_logging(level=logging.DEBUG if DEBUG else logging.INFO)
    logger.info("Servidor iniciado en http://%s:%s (logs en %s)", HOST, PORT, logs_dir)

    app.run(host=HOST, port=PORT, debug=DEBUG)

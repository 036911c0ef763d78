# ==============================================================================
# WSGI Entry Point - Para Gunicorn / Waitress en producción
# ==============================================================================
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/                 <- Directorio de trabajo (en sys.path)
#   ├── wsgi.py                <- Este archivo
#   ├── pyproject.toml
#   └── inventory_dashboard/   <- Paquete Python
#       ├── main.py
#       ├── services/
#       └── repositories/
# ==============================================================================

from inventory_dashboard.main import app
from inventory_dashboard.performance_logger import configure_logging

# Archivos de log (app.log, performance.log, ...) en INVENTORY_LOGS_DIR
configure_logging()

if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5000)

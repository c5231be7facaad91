'''Flask app assembly: config, database handle, blueprints, error handlers.
Does not start a server; used by run.py, WSGI servers and the test suite.'''
# portal/app_factory.py
import atexit
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load environment variables before any portal module reads them
load_dotenv()

from portal.db.init_db import init_db  # noqa: E402
from portal.db.session import Database  # noqa: E402
from portal.logger import get_logger  # noqa: E402

logger = get_logger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_PARTS_ROOT = "/mnt/jdrive/APC EngJobs"


def load_config() -> Dict[str, Any]:
    """Configuration from the environment (.env honoured)."""
    db_path = os.path.join(BASE_DIR, "parts_portal.db")
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-secret-key-change-in-production"),
        "DATABASE_URL": os.getenv("DATABASE_URL", f"sqlite:///{db_path}"),
        # engineering job drive, <root>/<range folder>/<part folder>
        "PARTS_ROOT": os.getenv("PARTS_ROOT", DEFAULT_PARTS_ROOT),
        "SCAN_MAX_WORKERS": int(os.getenv("SCAN_MAX_WORKERS", 1)),
    }


def create_app(config_overrides: Optional[Dict[str, Any]] = None, database: Optional[Database] = None) -> Flask:
    """
    App factory.

    :param config_overrides: values that win over the environment (tests)
    :param database: an already constructed handle; one is built from DATABASE_URL otherwise
    """
    app = Flask(__name__)
    app.config.update(load_config())
    app.json.sort_keys = False
    if config_overrides:
        app.config.update(config_overrides)

    # the one catalog handle for this process
    if database is None:
        database = Database(app.config["DATABASE_URL"])
        atexit.register(database.dispose)
    init_db(database)
    app.extensions["database"] = database

    from portal.routes.admin import admin_bp
    from portal.routes.products import products_bp
    from portal.routes.health import health_bp

    app.register_blueprint(admin_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(health_bp)

    register_error_handlers(app)

    logger.info(f"Parts portal ready, parts root: {app.config['PARTS_ROOT']}")
    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

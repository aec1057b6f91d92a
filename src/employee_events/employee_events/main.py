from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, render_template

from config import get_settings_module

from .common.cancellation import CancellationToken
from .common.logging_config import setup_logging
from .common.request_id_filter import current_request_id, new_request_id
from .core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from .core.exceptions import NotFoundError, OperationCancelledError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import Container, build_container
from .employees.controller import register as register_employees
from .events.controller import register as register_events
from .home.controller import register as register_home

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def start_request():
        g.request_id = new_request_id()
        g.cancel = CancellationToken.with_timeout(app.config["REQUEST_TIMEOUT_SECONDS"])

    @app.after_request
    def tag_response(response):
        request_id = current_request_id()
        if request_id:
            response.headers["X-Request-ID"] = request_id
        return response

    @app.teardown_request
    def end_request(exc):
        cancel = g.pop("cancel", None)
        if cancel is not None:
            cancel.cancel()


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(NotFoundError)
    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    @app.errorhandler(OperationCancelledError)
    def cancelled(e):
        logger.warning("Request cancelled: %s", e)
        return render_template("errors/error.html", request_id=current_request_id(), cancelled=True), 503

    @app.errorhandler(500)
    def internal_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("Unhandled error", exc_info=original)
        return render_template("errors/error.html", request_id=current_request_id(), cancelled=False), 500


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["REQUEST_TIMEOUT_SECONDS"] = getattr(
        settings, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS
    )

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_DIR", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(db_config=db_config)

    app.extensions["employee_events.container"] = container

    _register_request_hooks(app)
    _register_error_handlers(app)

    register_home(app, container)
    register_events(app, container)
    register_employees(app, container)

    return app

import logging
import os
import sys
from datetime import timedelta

from flask import Flask, g, jsonify, request
from dotenv import load_dotenv
from sqlalchemy import inspect as sa_inspect
from werkzeug.exceptions import HTTPException

from app.konnect.config import load_config
from app.konnect.db import init_db, teardown_db_session
from app.konnect.routes import bp as routes_bp
from app.konnect.auth import bp as auth_bp, load_current_user
from app.konnect.modules.tenants.api import bp as tenants_bp
from app.konnect.modules.fleets.api import bp as fleets_bp
from app.konnect.modules.routers.api import bp as routers_bp
from app.konnect.modules.hotspot_users.api import bp as hotspot_users_bp
from app.konnect.modules.firewall_templates.api import bp as firewall_templates_bp
from app.konnect.modules.audit_trails.api import bp as audit_trails_bp
from app.konnect.modules.dashboard.api import bp as dashboard_bp

# Tables the API cannot run without; checked once at startup.
REQUIRED_TABLES = (
    "users",
    "tenants",
    "fleets",
    "routers",
    "hotspot_users",
    "firewall_templates",
    "audit_trails",
)

_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, app.config.get("LOG_LEVEL") or "INFO", logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)
    app.logger.setLevel(level)


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates")
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=7)
    app.config["SESSION_REFRESH_EACH_REQUEST"] = True
    _configure_logging(app)

    @app.template_filter("dateformat")
    def _dateformat_filter(value, format: str = "%Y-%m-%d") -> str:
        if value is None:
            return "-"
        if hasattr(value, "strftime"):
            return value.strftime(format)
        return str(value)

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(tenants_bp, url_prefix="/api")
    app.register_blueprint(fleets_bp, url_prefix="/api")
    app.register_blueprint(routers_bp, url_prefix="/api")
    app.register_blueprint(hotspot_users_bp, url_prefix="/api")
    app.register_blueprint(firewall_templates_bp, url_prefix="/api")
    app.register_blueprint(audit_trails_bp, url_prefix="/api")
    app.register_blueprint(dashboard_bp, url_prefix="/api")

    def _load_user_wrapper():
        if request.path.startswith(("/static/", "/health", "/healthz")):
            g.current_user = None
            return None
        return load_current_user()

    app.before_request(_load_user_wrapper)
    app.teardown_appcontext(teardown_db_session)

    # Migration health (lean): detect drift between code expectations and DB schema.
    app.config.setdefault("_schema_health_ok", True)
    app.config.setdefault("_schema_health_missing", [])

    def _run_schema_health_check() -> None:
        missing: list[str] = []
        try:
            engine = app.extensions.get("sqlalchemy_engine")
            if engine is None:
                raise RuntimeError("sqlalchemy_engine not initialized")
            insp = sa_inspect(engine)
            missing = [t for t in REQUIRED_TABLES if not insp.has_table(t)]
        except Exception as e:
            app.logger.exception("Schema health check failed: %s", e)

        if missing:
            app.logger.error("DB schema out of date; run `alembic upgrade head`. Missing tables: %s", ", ".join(missing))
        app.config["_schema_health_missing"] = missing
        app.config["_schema_health_ok"] = not missing

    _run_schema_health_check()

    @app.before_request
    def _schema_health_guardrail():  # type: ignore[no-redef]
        if app.config.get("_schema_health_ok"):
            return None
        if request.path.startswith("/api"):
            return jsonify({"message": "Database schema out of date", "missing": app.config["_schema_health_missing"]}), 503
        return None

    @app.errorhandler(HTTPException)
    def _err_http(e: HTTPException):  # type: ignore[no-redef]
        return jsonify({"message": e.name}), e.code

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.error(
            "Unhandled 500 (request_id=%s): %r",
            getattr(g, "request_id", None),
            getattr(e, "original_exception", None) or e,
            exc_info=getattr(e, "original_exception", None),
        )
        s = getattr(g, "db_session", None)
        if s is not None:
            s.rollback()
        return jsonify({"message": "Internal server error"}), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app

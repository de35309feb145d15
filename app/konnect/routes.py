from flask import Blueprint, current_app, render_template

from app.konnect.storage import get_storage

bp = Blueprint("routes", __name__)

_RECENT_AUDIT_ROWS = 10


@bp.get("/")
def index():
    storage = get_storage()
    return render_template(
        "public/index.html",
        stats=storage.get_dashboard_stats(),
        top_tenants=storage.get_top_tenants(5),
        recent_events=storage.get_all_audit_trails(limit=_RECENT_AUDIT_ROWS),
    )


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True, "schema_ok": bool(current_app.config.get("_schema_health_ok"))}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for k8s probes. No DB access, minimal overhead.
    """
    return "ok", 200

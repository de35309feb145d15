from flask import Blueprint, jsonify

from app.konnect.storage import get_storage

bp = Blueprint("dashboard", __name__)


@bp.get("/dashboard/stats")
def dashboard_stats():
    return jsonify(get_storage().get_dashboard_stats())

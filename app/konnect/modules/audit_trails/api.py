from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from app.konnect.modules.audit_trails.service import parse_audit_filters
from app.konnect.storage import get_storage

bp = Blueprint("audit_trails", __name__)


@bp.get("/audit-trails")
def audit_trails_list():
    return jsonify([a.to_dict() for a in get_storage().get_all_audit_trails()])


@bp.post("/audit-trails/filter")
def audit_trails_filter():
    payload = request.get_json(silent=True)
    if payload is None:
        # A body that is present but not JSON is an error; no body means no filters
        if request.get_data(cache=True):
            return jsonify({"error": "Invalid filter parameters"}), 400
        payload = {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Invalid filter parameters"}), 400
    try:
        filters = parse_audit_filters(payload)
    except ValueError as e:
        current_app.logger.info("Rejected audit filter: %s", e)
        return jsonify({"error": "Invalid filter parameters"}), 400
    return jsonify([a.to_dict() for a in get_storage().filter_audit_trails(filters)])

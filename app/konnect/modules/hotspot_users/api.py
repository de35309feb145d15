from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify

from app.konnect.db import db_session
from app.konnect.modules.hotspot_users.service import create_hotspot_user, validate_hotspot_user_payload
from app.konnect.rbac import current_user, login_required
from app.konnect.storage import get_storage
from app.konnect.utils import json_body

bp = Blueprint("hotspot_users", __name__)


@bp.get("/hotspot-users")
def hotspot_users_list():
    return jsonify([u.to_dict() for u in get_storage().get_all_hotspot_users()])


@bp.get("/hotspot-users/stats")
def hotspot_users_stats():
    return jsonify(get_storage().get_hotspot_user_stats())


@bp.get("/hotspot-users/<int:hotspot_user_id>")
def hotspot_user_detail(hotspot_user_id: int):
    hotspot_user = get_storage().get_hotspot_user(hotspot_user_id)
    if not hotspot_user:
        abort(404)
    return jsonify(hotspot_user.to_dict())


@bp.post("/hotspot-users")
@login_required
def hotspot_users_create():
    s = db_session()
    payload = json_body()

    errors = validate_hotspot_user_payload(s, payload)
    if errors:
        current_app.logger.info("Rejected hotspot user payload: %s", " ".join(errors))
        return jsonify({"error": "Invalid hotspot user data"}), 400

    hotspot_user = create_hotspot_user(s, payload, current_user())
    s.commit()
    return jsonify(hotspot_user.to_dict()), 201

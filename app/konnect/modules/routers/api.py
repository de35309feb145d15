from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify

from app.konnect.db import db_session
from app.konnect.modules.routers.service import create_router, validate_router_payload
from app.konnect.rbac import current_user, login_required
from app.konnect.storage import get_storage
from app.konnect.utils import json_body

bp = Blueprint("routers", __name__)


@bp.get("/routers")
def routers_list():
    return jsonify([r.to_dict() for r in get_storage().get_all_routers()])


@bp.get("/routers/stats")
def routers_stats():
    return jsonify(get_storage().get_online_routers())


@bp.get("/routers/<int:router_id>")
def router_detail(router_id: int):
    router = get_storage().get_router(router_id)
    if not router:
        abort(404)
    return jsonify(router.to_dict())


@bp.post("/routers")
@login_required
def routers_create():
    s = db_session()
    payload = json_body()

    errors = validate_router_payload(s, payload)
    if errors:
        current_app.logger.info("Rejected router payload: %s", " ".join(errors))
        return jsonify({"error": "Invalid router data"}), 400

    router = create_router(s, payload, current_user())
    s.commit()
    return jsonify(router.to_dict()), 201

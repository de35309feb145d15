from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify

from app.konnect.db import db_session
from app.konnect.modules.fleets.service import create_fleet, validate_fleet_payload
from app.konnect.rbac import current_user, login_required
from app.konnect.storage import get_storage
from app.konnect.utils import json_body

bp = Blueprint("fleets", __name__)


@bp.get("/fleets")
def fleets_list():
    return jsonify([f.to_dict() for f in get_storage().get_all_fleets()])


@bp.get("/fleets/<int:fleet_id>")
def fleet_detail(fleet_id: int):
    fleet = get_storage().get_fleet(fleet_id)
    if not fleet:
        abort(404)
    return jsonify(fleet.to_dict())


@bp.post("/fleets")
@login_required
def fleets_create():
    s = db_session()
    payload = json_body()

    errors = validate_fleet_payload(payload)
    if errors:
        current_app.logger.info("Rejected fleet payload: %s", " ".join(errors))
        return jsonify({"error": "Invalid fleet data"}), 400

    fleet = create_fleet(s, payload, current_user())
    s.commit()
    return jsonify(fleet.to_dict()), 201

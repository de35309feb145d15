from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify

from app.konnect.db import db_session
from app.konnect.modules.firewall_templates.service import (
    create_firewall_template,
    validate_firewall_template_payload,
)
from app.konnect.rbac import current_user, login_required
from app.konnect.storage import get_storage
from app.konnect.utils import json_body

bp = Blueprint("firewall_templates", __name__)


@bp.get("/firewall-templates")
def firewall_templates_list():
    return jsonify([t.to_dict() for t in get_storage().get_all_firewall_templates()])


@bp.get("/firewall-templates/<int:template_id>")
def firewall_template_detail(template_id: int):
    template = get_storage().get_firewall_template(template_id)
    if not template:
        abort(404)
    return jsonify(template.to_dict())


@bp.post("/firewall-templates")
@login_required
def firewall_templates_create():
    s = db_session()
    payload = json_body()

    errors = validate_firewall_template_payload(payload)
    if errors:
        current_app.logger.info("Rejected firewall template payload: %s", " ".join(errors))
        return jsonify({"error": "Invalid firewall template data"}), 400

    template = create_firewall_template(s, payload, current_user())
    s.commit()
    return jsonify(template.to_dict()), 201

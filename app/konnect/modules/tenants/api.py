from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request

from app.konnect.constants import DEFAULT_TOP_TENANTS
from app.konnect.db import db_session
from app.konnect.modules.tenants.service import create_tenant, validate_tenant_payload
from app.konnect.rbac import current_user, login_required
from app.konnect.storage import get_storage
from app.konnect.utils import json_body, parse_positive_int

bp = Blueprint("tenants", __name__)


@bp.get("/tenants")
def tenants_list():
    return jsonify([t.to_dict() for t in get_storage().get_all_tenants()])


@bp.get("/tenants/top")
def tenants_top():
    limit = parse_positive_int(request.args.get("limit"), DEFAULT_TOP_TENANTS)
    return jsonify([t.to_dict() for t in get_storage().get_top_tenants(limit)])


@bp.get("/tenants/<int:tenant_id>")
def tenant_detail(tenant_id: int):
    tenant = get_storage().get_tenant(tenant_id)
    if not tenant:
        abort(404)
    return jsonify(tenant.to_dict())


@bp.post("/tenants")
@login_required
def tenants_create():
    s = db_session()
    payload = json_body()

    errors = validate_tenant_payload(payload)
    if errors:
        current_app.logger.info("Rejected tenant payload: %s", " ".join(errors))
        return jsonify({"error": "Invalid tenant data"}), 400

    tenant = create_tenant(s, payload, current_user())
    s.commit()
    return jsonify(tenant.to_dict()), 201

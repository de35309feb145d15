from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.konnect.audit import record_event
from app.konnect.constants import CATEGORY_FIREWALL_TEMPLATE, EVENT_CREATE
from app.konnect.storage import DatabaseStorage
from app.konnect.utils import clean_str

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.konnect.models import User
    from app.konnect.modules.firewall_templates.models import FirewallTemplate


def validate_firewall_template_payload(payload: dict[str, Any]) -> list[str]:
    errors = []
    if not clean_str(payload.get("name")):
        errors.append("Name is required.")
    return errors


def create_firewall_template(s: "Session", payload: dict[str, Any], user: "User") -> "FirewallTemplate":
    template = DatabaseStorage(s).create_firewall_template(name=clean_str(payload.get("name")) or "")
    record_event(
        s,
        actor=user,
        event=EVENT_CREATE,
        category=CATEGORY_FIREWALL_TEMPLATE,
        description=f"Firewall template {template.name} was created",
    )
    return template

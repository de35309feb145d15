from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.konnect.audit import record_event
from app.konnect.constants import CATEGORY_HOTSPOT_USER, EVENT_CREATE
from app.konnect.storage import DatabaseStorage
from app.konnect.utils import clean_str, fits_db_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.konnect.models import User
    from app.konnect.modules.hotspot_users.models import HotspotUser


def validate_hotspot_user_payload(s: "Session", payload: dict[str, Any]) -> list[str]:
    """Validate hotspot user payload; the router must already exist. Returns list of errors."""
    errors = []
    if not clean_str(payload.get("username")):
        errors.append("Username is required.")
    active = payload.get("active")
    if active is not None and not isinstance(active, bool):
        errors.append("Active must be true or false.")
    router_id = payload.get("routerId")
    if not fits_db_int(router_id):
        errors.append("Router id must be an integer.")
    elif DatabaseStorage(s).get_router(router_id) is None:
        errors.append(f"Router {router_id} does not exist.")
    return errors


def create_hotspot_user(s: "Session", payload: dict[str, Any], user: "User") -> "HotspotUser":
    hotspot_user = DatabaseStorage(s).create_hotspot_user(
        username=clean_str(payload.get("username")) or "",
        router_id=payload["routerId"],
        active=bool(payload.get("active", True)),
    )
    router = hotspot_user.router
    record_event(
        s,
        actor=user,
        event=EVENT_CREATE,
        category=CATEGORY_HOTSPOT_USER,
        description=(
            f"Hotspot user {hotspot_user.username} was created for router "
            f"{router.name if router else 'Unknown'}"
        ),
    )
    return hotspot_user

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.konnect.audit import record_event
from app.konnect.constants import CATEGORY_ROUTER, EVENT_CREATE
from app.konnect.storage import DatabaseStorage
from app.konnect.utils import clean_str

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.konnect.models import User
    from app.konnect.modules.routers.models import Router


def validate_router_payload(s: "Session", payload: dict[str, Any]) -> list[str]:
    """Validate router creation payload, including identifier uniqueness. Returns list of errors."""
    errors = []
    if not clean_str(payload.get("name")):
        errors.append("Name is required.")
    identifier = clean_str(payload.get("identifier"))
    if not identifier:
        errors.append("Identifier is required.")
    elif DatabaseStorage(s).get_router_by_identifier(identifier):
        errors.append(f"Identifier {identifier} is already registered.")
    online = payload.get("online")
    if online is not None and not isinstance(online, bool):
        errors.append("Online must be true or false.")
    return errors


def create_router(s: "Session", payload: dict[str, Any], user: "User") -> "Router":
    router = DatabaseStorage(s).create_router(
        name=clean_str(payload.get("name")) or "",
        identifier=clean_str(payload.get("identifier")) or "",
        online=bool(payload.get("online", False)),
    )
    record_event(
        s,
        actor=user,
        event=EVENT_CREATE,
        category=CATEGORY_ROUTER,
        description=f"Router {router.name} ({router.identifier}) was created",
    )
    return router

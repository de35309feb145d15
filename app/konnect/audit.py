import logging

from flask import g, has_app_context
from sqlalchemy.orm import Session

from app.konnect.constants import AUDIT_EVENTS
from app.konnect.models import AuditTrail, User
from app.konnect.storage import DatabaseStorage

logger = logging.getLogger(__name__)


def record_event(
    s: Session,
    *,
    actor: User | None,
    event: str,
    category: str,
    description: str,
    performed_by: str | None = None,
) -> AuditTrail:
    """
    Append-only audit trail helper.
    The performer is the actor's display name unless given explicitly (e.g. "System").
    """
    if event not in AUDIT_EVENTS:
        raise ValueError(f"unknown audit event: {event}")
    performer = performed_by or (actor.name if actor else None)
    if not performer:
        raise ValueError("audit event needs an actor or an explicit performer")
    entry = DatabaseStorage(s).create_audit_trail(
        description=description,
        event=event,
        category=category,
        performed_by=performer,
    )
    logger.info(
        "audit event=%s category=%s performed_by=%s request_id=%s: %s",
        event,
        category,
        performer,
        getattr(g, "request_id", None) if has_app_context() else None,
        description,
    )
    return entry

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.konnect.audit import record_event
from app.konnect.constants import CATEGORY_TENANT, EVENT_CREATE
from app.konnect.storage import DatabaseStorage
from app.konnect.utils import clean_str, fits_db_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.konnect.models import User
    from app.konnect.modules.tenants.models import Tenant


def validate_tenant_payload(payload: dict[str, Any]) -> list[str]:
    """Validate tenant creation payload. Returns list of errors."""
    errors = []
    if not clean_str(payload.get("name")):
        errors.append("Name is required.")
    data_usage = payload.get("dataUsage")
    if data_usage is not None and not fits_db_int(data_usage):
        errors.append("Data usage must be a non-negative integer.")
    return errors


def create_tenant(s: "Session", payload: dict[str, Any], user: "User") -> "Tenant":
    """Create a tenant and its audit entry."""
    tenant = DatabaseStorage(s).create_tenant(
        name=clean_str(payload.get("name")) or "",
        data_usage=payload.get("dataUsage") or 0,
    )
    record_event(
        s,
        actor=user,
        event=EVENT_CREATE,
        category=CATEGORY_TENANT,
        description=f"Tenant {tenant.name} was created",
    )
    return tenant

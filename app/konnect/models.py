from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)  # display name, used as audit performer
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(64), nullable=False, default="user")  # "user" or "admin"
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Public representation; the password hash is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "avatar": self.avatar,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
        }


class AuditTrail(Base):
    """
    Append-only audit trail entry.
    Rows are written by app.konnect.audit.record_event and never updated or deleted.
    """

    __tablename__ = "audit_trails"
    __table_args__ = (
        Index("idx_audit_trails_timestamp", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    event: Mapped[str] = mapped_column(String(32), nullable=False)  # e.g. "Create", "Login"
    category: Mapped[str] = mapped_column(String(128), nullable=False)  # e.g. "Tenant", "Hotspot User"
    performed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "event": self.event,
            "category": self.category,
            "performedBy": self.performed_by,
            "timestamp": isoformat(self.timestamp),
        }


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.konnect.modules.tenants.models import Tenant  # noqa: E402,F401
from app.konnect.modules.fleets.models import Fleet  # noqa: E402,F401
from app.konnect.modules.routers.models import Router  # noqa: E402,F401
from app.konnect.modules.hotspot_users.models import HotspotUser  # noqa: E402,F401
from app.konnect.modules.firewall_templates.models import FirewallTemplate  # noqa: E402,F401

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.konnect.models import Base, isoformat

if TYPE_CHECKING:
    from app.konnect.modules.routers.models import Router


class HotspotUser(Base):
    __tablename__ = "hotspot_users"
    __table_args__ = (
        Index("idx_hotspot_users_router_id", "router_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(150), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    router_id: Mapped[int] = mapped_column(ForeignKey("routers.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    # Many-to-one, no cascade; hotspot users are never removed through the API
    router: Mapped["Router"] = relationship("Router", lazy="select")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "active": self.active,
            "routerId": self.router_id,
            "createdAt": isoformat(self.created_at),
        }

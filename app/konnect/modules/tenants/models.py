from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.konnect.models import Base, isoformat


class Tenant(Base):
    __tablename__ = "tenants"
    __table_args__ = (
        Index("idx_tenants_data_usage", "data_usage"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Cumulative bytes exchanged by the tenant's devices
    data_usage: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dataUsage": self.data_usage,
            "createdAt": isoformat(self.created_at),
        }

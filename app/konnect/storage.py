from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.konnect.constants import ROLE_USER
from app.konnect.models import AuditTrail, User
from app.konnect.modules.firewall_templates.models import FirewallTemplate
from app.konnect.modules.fleets.models import Fleet
from app.konnect.modules.hotspot_users.models import HotspotUser
from app.konnect.modules.routers.models import Router
from app.konnect.modules.tenants.models import Tenant
from app.konnect.utils import fits_db_int


@dataclass(frozen=True)
class AuditFilters:
    category: str | None = None
    event: str | None = None
    performed_by: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    # True when `end` is midnight after a whole-day bound
    end_exclusive: bool = False


class DatabaseStorage:
    """
    One method per entity per verb, each a single query against the session.
    Creates add + flush only; the caller owns the commit.
    """

    def __init__(self, session: Session) -> None:
        self.s = session

    def _get(self, model: Any, pk: int) -> Any:
        # ids past the column range cannot exist and would overflow the driver
        if not fits_db_int(pk):
            return None
        return self.s.get(model, pk)

    def _add(self, obj: Any) -> Any:
        self.s.add(obj)
        self.s.flush()
        return obj

    # ---------- Users ----------
    def get_user(self, user_id: int) -> User | None:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.s.scalars(select(User).where(User.username == username)).one_or_none()

    def get_user_by_email(self, email: str) -> User | None:
        return self.s.scalars(select(User).where(User.email == email)).one_or_none()

    def create_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        name: str,
        avatar: str | None = None,
        role: str = ROLE_USER,
    ) -> User:
        return self._add(
            User(username=username, email=email, password_hash=password_hash, name=name, avatar=avatar, role=role)
        )

    def get_all_users(self) -> list[User]:
        return list(self.s.scalars(select(User).order_by(User.id.asc())))

    # ---------- Tenants ----------
    def get_tenant(self, tenant_id: int) -> Tenant | None:
        return self._get(Tenant, tenant_id)

    def create_tenant(self, *, name: str, data_usage: int = 0) -> Tenant:
        return self._add(Tenant(name=name, data_usage=data_usage))

    def get_all_tenants(self) -> list[Tenant]:
        return list(self.s.scalars(select(Tenant).order_by(Tenant.id.asc())))

    def get_top_tenants(self, limit: int) -> list[Tenant]:
        q = select(Tenant).order_by(Tenant.data_usage.desc(), Tenant.id.asc()).limit(limit)
        return list(self.s.scalars(q))

    def get_total_tenants(self) -> int:
        return self.s.scalar(select(func.count()).select_from(Tenant)) or 0

    def get_total_data_usage(self) -> int:
        return int(self.s.scalar(select(func.coalesce(func.sum(Tenant.data_usage), 0))) or 0)

    # ---------- Fleets ----------
    def get_fleet(self, fleet_id: int) -> Fleet | None:
        return self._get(Fleet, fleet_id)

    def create_fleet(self, *, name: str) -> Fleet:
        return self._add(Fleet(name=name))

    def get_all_fleets(self) -> list[Fleet]:
        return list(self.s.scalars(select(Fleet).order_by(Fleet.id.asc())))

    def get_total_fleets(self) -> int:
        return self.s.scalar(select(func.count()).select_from(Fleet)) or 0

    # ---------- Routers ----------
    def get_router(self, router_id: int) -> Router | None:
        return self._get(Router, router_id)

    def get_router_by_identifier(self, identifier: str) -> Router | None:
        return self.s.scalars(select(Router).where(Router.identifier == identifier)).one_or_none()

    def create_router(self, *, name: str, identifier: str, online: bool = False) -> Router:
        return self._add(Router(name=name, identifier=identifier, online=online))

    def get_all_routers(self) -> list[Router]:
        return list(self.s.scalars(select(Router).order_by(Router.id.asc())))

    def get_online_routers(self) -> dict[str, int]:
        total = self.s.scalar(select(func.count()).select_from(Router)) or 0
        online = self.s.scalar(select(func.count()).select_from(Router).where(Router.online.is_(True))) or 0
        return {"online": online, "total": total}

    # ---------- Hotspot users ----------
    def get_hotspot_user(self, hotspot_user_id: int) -> HotspotUser | None:
        return self._get(HotspotUser, hotspot_user_id)

    def create_hotspot_user(self, *, username: str, router_id: int, active: bool = True) -> HotspotUser:
        return self._add(HotspotUser(username=username, router_id=router_id, active=active))

    def get_all_hotspot_users(self) -> list[HotspotUser]:
        return list(self.s.scalars(select(HotspotUser).order_by(HotspotUser.id.asc())))

    def get_hotspot_user_stats(self) -> dict[str, int]:
        total = self.s.scalar(select(func.count()).select_from(HotspotUser)) or 0
        active = (
            self.s.scalar(select(func.count()).select_from(HotspotUser).where(HotspotUser.active.is_(True))) or 0
        )
        return {"active": active, "total": total}

    # ---------- Firewall templates ----------
    def get_firewall_template(self, template_id: int) -> FirewallTemplate | None:
        return self._get(FirewallTemplate, template_id)

    def create_firewall_template(self, *, name: str) -> FirewallTemplate:
        return self._add(FirewallTemplate(name=name))

    def get_all_firewall_templates(self) -> list[FirewallTemplate]:
        return list(self.s.scalars(select(FirewallTemplate).order_by(FirewallTemplate.id.asc())))

    # ---------- Audit trail (append-only) ----------
    def get_audit_trail(self, audit_id: int) -> AuditTrail | None:
        return self._get(AuditTrail, audit_id)

    def create_audit_trail(self, *, description: str, event: str, category: str, performed_by: str) -> AuditTrail:
        return self._add(
            AuditTrail(description=description, event=event, category=category, performed_by=performed_by)
        )

    def get_all_audit_trails(self, limit: int | None = None) -> list[AuditTrail]:
        q = select(AuditTrail).order_by(AuditTrail.timestamp.desc(), AuditTrail.id.desc())
        if limit is not None:
            q = q.limit(limit)
        return list(self.s.scalars(q))

    def filter_audit_trails(self, filters: AuditFilters) -> list[AuditTrail]:
        q = select(AuditTrail)
        if filters.category:
            q = q.where(AuditTrail.category == filters.category)
        if filters.event:
            q = q.where(AuditTrail.event == filters.event)
        if filters.performed_by:
            q = q.where(AuditTrail.performed_by == filters.performed_by)
        if filters.start is not None:
            q = q.where(AuditTrail.timestamp >= filters.start)
        if filters.end is not None:
            if filters.end_exclusive:
                q = q.where(AuditTrail.timestamp < filters.end)
            else:
                q = q.where(AuditTrail.timestamp <= filters.end)
        q = q.order_by(AuditTrail.timestamp.desc(), AuditTrail.id.desc())
        return list(self.s.scalars(q))

    # ---------- Dashboard ----------
    def get_dashboard_stats(self) -> dict[str, Any]:
        return {
            "totalDataExchanged": self.get_total_data_usage(),
            "hotspotUsers": self.get_hotspot_user_stats(),
            "onlineRouters": self.get_online_routers(),
            "totalTenants": self.get_total_tenants(),
            "totalFleets": self.get_total_fleets(),
        }


def get_storage() -> DatabaseStorage:
    """Storage bound to the request-scoped session."""
    from app.konnect.db import db_session

    return DatabaseStorage(db_session())

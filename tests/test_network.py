"""Fleets, routers, hotspot users and firewall templates."""
import pytest

from app.konnect.db import session_scope
from app.konnect.modules.hotspot_users.models import HotspotUser
from app.konnect.modules.routers.models import Router


def _seed_router(app, name="Core", identifier="RTR-001", online=True) -> int:
    with session_scope(app) as s:
        router = Router(name=name, identifier=identifier, online=online)
        s.add(router)
        s.flush()
        return router.id


@pytest.mark.parametrize(
    "path,payload",
    [
        ("/api/fleets", {"name": "North"}),
        ("/api/routers", {"name": "Core", "identifier": "RTR-001"}),
        ("/api/hotspot-users", {"username": "guest", "routerId": 1}),
        ("/api/firewall-templates", {"name": "Default deny"}),
    ],
)
def test_create_endpoints_require_auth(client, audit_rows, path, payload):
    r = client.post(path, json=payload)
    assert r.status_code == 401
    assert audit_rows() == []


@pytest.mark.parametrize("path", ["/api/fleets", "/api/routers", "/api/hotspot-users", "/api/firewall-templates"])
def test_list_endpoints_are_public(client, path):
    r = client.get(path)
    assert r.status_code == 200
    assert r.json == []


def test_fleet_create(client, login, audit_rows):
    login()
    r = client.post("/api/fleets", json={"name": "North"})
    assert r.status_code == 201
    assert client.get("/api/fleets").json[0]["name"] == "North"

    rows = audit_rows(category="Fleet")
    assert [(row.event, row.description) for row in rows] == [("Create", "Fleet North was created")]


def test_fleet_create_requires_name(client, login):
    login()
    r = client.post("/api/fleets", json={"name": ""})
    assert r.status_code == 400
    assert r.json == {"error": "Invalid fleet data"}


def test_firewall_template_create(client, login, audit_rows):
    login()
    r = client.post("/api/firewall-templates", json={"name": "Default deny"})
    assert r.status_code == 201
    assert r.json["name"] == "Default deny"

    rows = audit_rows(category="Firewall Template")
    assert len(rows) == 1
    assert rows[0].description == "Firewall template Default deny was created"

    detail = client.get(f"/api/firewall-templates/{r.json['id']}")
    assert detail.status_code == 200


def test_router_create(client, login, audit_rows):
    login()
    r = client.post("/api/routers", json={"name": "Core", "identifier": "RTR-001", "online": True})
    assert r.status_code == 201
    assert r.json["online"] is True

    rows = audit_rows(category="Router")
    assert len(rows) == 1
    assert rows[0].description == "Router Core (RTR-001) was created"


def test_router_online_defaults_to_false(client, login):
    login()
    r = client.post("/api/routers", json={"name": "Edge", "identifier": "RTR-002"})
    assert r.status_code == 201
    assert r.json["online"] is False


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Core"},
        {"identifier": "RTR-009"},
        {"name": "Core", "identifier": "RTR-009", "online": "yes"},
        {"name": "Dup", "identifier": "RTR-001"},
    ],
)
def test_router_create_rejects_invalid_payload(app, client, login, payload):
    _seed_router(app)
    login()
    r = client.post("/api/routers", json=payload)
    assert r.status_code == 400
    assert r.json == {"error": "Invalid router data"}


def test_router_stats(app, client):
    _seed_router(app, "A", "R-A", online=True)
    _seed_router(app, "B", "R-B", online=True)
    _seed_router(app, "C", "R-C", online=False)

    r = client.get("/api/routers/stats")
    assert r.status_code == 200
    assert r.json == {"online": 2, "total": 3}


def test_hotspot_user_create_names_router_in_audit(app, client, login, audit_rows):
    router_id = _seed_router(app)
    login()
    r = client.post("/api/hotspot-users", json={"username": "guest1", "routerId": router_id})
    assert r.status_code == 201
    assert r.json["active"] is True
    assert r.json["routerId"] == router_id

    rows = audit_rows(category="Hotspot User")
    assert len(rows) == 1
    assert rows[0].description == "Hotspot user guest1 was created for router Core"


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "guest1", "routerId": 999},
        {"username": "guest1", "routerId": "1"},
        {"username": "guest1"},
        {"routerId": 1},
        {"username": "guest1", "routerId": 1, "active": "no"},
        {"username": "guest1", "routerId": 10**20},
        {"username": "guest1", "routerId": -1},
    ],
)
def test_hotspot_user_create_rejects_invalid_payload(app, client, login, audit_rows, payload):
    _seed_router(app)
    login()
    r = client.post("/api/hotspot-users", json=payload)
    assert r.status_code == 400
    assert r.json == {"error": "Invalid hotspot user data"}
    assert audit_rows(category="Hotspot User") == []


def test_hotspot_user_stats(app, client):
    router_id = _seed_router(app)
    with session_scope(app) as s:
        s.add_all(
            [
                HotspotUser(username="a", router_id=router_id, active=True),
                HotspotUser(username="b", router_id=router_id, active=False),
                HotspotUser(username="c", router_id=router_id, active=True),
            ]
        )

    r = client.get("/api/hotspot-users/stats")
    assert r.status_code == 200
    assert r.json == {"active": 2, "total": 3}

from datetime import datetime

import pytest

from app.konnect.db import session_scope
from app.konnect.models import AuditTrail


@pytest.fixture()
def seeded(app):
    rows = [
        ("Tenant Acme was created", "Create", "Tenant", "Ada Admin", datetime(2026, 1, 1, 9, 0)),
        ("User Ada Admin logged in", "Login", "User", "Ada Admin", datetime(2026, 1, 2, 8, 30)),
        ("Router Core (R1) was created", "Create", "Router", "Olly Operator", datetime(2026, 1, 3, 23, 59)),
        ("Password reset requested for user Olly Operator", "Reset", "User", "System", datetime(2026, 1, 4, 12, 0)),
    ]
    with session_scope(app) as s:
        for description, event, category, performer, ts in rows:
            s.add(
                AuditTrail(
                    description=description,
                    event=event,
                    category=category,
                    performed_by=performer,
                    timestamp=ts,
                )
            )
    return rows


def _descriptions(response):
    return [row["description"] for row in response.json]


def test_list_is_newest_first(client, seeded):
    r = client.get("/api/audit-trails")
    assert r.status_code == 200
    assert [row["timestamp"] for row in r.json] == [
        "2026-01-04T12:00:00",
        "2026-01-03T23:59:00",
        "2026-01-02T08:30:00",
        "2026-01-01T09:00:00",
    ]
    assert set(r.json[0]) == {"id", "description", "event", "category", "performedBy", "timestamp"}


def test_filter_by_category(client, seeded):
    r = client.post("/api/audit-trails/filter", json={"category": "User"})
    assert r.status_code == 200
    assert _descriptions(r) == [
        "Password reset requested for user Olly Operator",
        "User Ada Admin logged in",
    ]


def test_filter_combines_event_and_performer(client, seeded):
    r = client.post("/api/audit-trails/filter", json={"event": "Create", "performedBy": "Ada Admin"})
    assert _descriptions(r) == ["Tenant Acme was created"]


def test_blank_filters_are_ignored(client, seeded):
    r = client.post("/api/audit-trails/filter", json={"category": "", "event": "  ", "startDate": ""})
    assert r.status_code == 200
    assert len(r.json) == 4


def test_empty_body_returns_everything(client, seeded):
    r = client.post("/api/audit-trails/filter")
    assert r.status_code == 200
    assert len(r.json) == 4


def test_date_range_end_date_covers_whole_day(client, seeded):
    r = client.post("/api/audit-trails/filter", json={"startDate": "2026-01-02", "endDate": "2026-01-03"})
    assert _descriptions(r) == ["Router Core (R1) was created", "User Ada Admin logged in"]


def test_date_range_accepts_datetimes(client, seeded):
    r = client.post(
        "/api/audit-trails/filter",
        json={"startDate": "2026-01-01T09:00:00Z", "endDate": "2026-01-02T08:30:00+00:00"},
    )
    assert _descriptions(r) == ["User Ada Admin logged in", "Tenant Acme was created"]


@pytest.mark.parametrize(
    "payload",
    [
        {"startDate": "yesterday"},
        {"category": 5},
        {"startDate": "2026-01-05", "endDate": "2026-01-01"},
        ["Create"],
    ],
)
def test_invalid_filter_is_400(client, seeded, payload):
    r = client.post("/api/audit-trails/filter", json=payload)
    assert r.status_code == 400
    assert r.json == {"error": "Invalid filter parameters"}


@pytest.mark.parametrize(
    "data, content_type",
    [
        ('{"category": "User"', "application/json"),
        ("category=User", "application/x-www-form-urlencoded"),
    ],
)
def test_unparseable_filter_body_is_400(client, seeded, data, content_type):
    r = client.post("/api/audit-trails/filter", data=data, content_type=content_type)
    assert r.status_code == 400
    assert r.json == {"error": "Invalid filter parameters"}

from app.konnect.constants import FORGOT_PASSWORD_MESSAGE
from app.konnect.db import session_scope
from app.konnect.models import User

from conftest import ADMIN, OPERATOR

NEW_USER = {"username": "newbie", "email": "new@example.com", "name": "New Person", "password": "hunter22"}


def _user_count(app) -> int:
    with session_scope(app) as s:
        return s.query(User).count()


def test_register_creates_user_and_logs_in(app, client, audit_rows):
    r = client.post("/api/register", json=NEW_USER)
    assert r.status_code == 201
    body = r.json
    assert body["username"] == "newbie"
    assert body["role"] == "user"
    assert "password" not in body and "password_hash" not in body

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json["email"] == "new@example.com"

    rows = audit_rows(category="User", event="Create")
    assert len(rows) == 1
    assert rows[0].description == "User New Person was registered"
    assert rows[0].performed_by == "New Person"
    assert _user_count(app) == 3


def test_register_duplicate_email_rejected(app, client):
    r = client.post("/api/register", json={**NEW_USER, "email": OPERATOR["email"]})
    assert r.status_code == 400
    assert r.json["message"] == "Email already in use"
    assert _user_count(app) == 2


def test_register_duplicate_username_rejected(app, client, audit_rows):
    r = client.post("/api/register", json={**NEW_USER, "username": OPERATOR["username"]})
    assert r.status_code == 400
    assert r.json["message"] == "Username already exists"
    assert _user_count(app) == 2
    assert audit_rows() == []


def test_register_validation_errors_are_field_level(app, client):
    r = client.post("/api/register", json={"username": "x", "email": "not-an-email", "password": "123"})
    assert r.status_code == 400
    assert r.json["message"] == "Validation failed"
    paths = {tuple(e["path"]) for e in r.json["errors"]}
    assert ("email",) in paths
    assert ("password",) in paths
    assert ("name",) in paths
    assert _user_count(app) == 2


def test_login_success_strips_password(client, audit_rows):
    r = client.post("/api/login", json={"email": OPERATOR["email"], "password": OPERATOR["password"]})
    assert r.status_code == 200
    assert r.json["name"] == OPERATOR["name"]
    assert "password" not in r.json and "password_hash" not in r.json

    rows = audit_rows(event="Login")
    assert [row.description for row in rows] == ["User Olly Operator logged in"]


def test_login_email_is_case_insensitive(client):
    r = client.post("/api/login", json={"email": "OPS@Example.com", "password": OPERATOR["password"]})
    assert r.status_code == 200


def test_login_wrong_password_is_401(client, audit_rows):
    r = client.post("/api/login", json={"email": OPERATOR["email"], "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json["message"] == "Invalid email or password"
    assert client.get("/api/user").status_code == 401
    assert audit_rows() == []


def test_login_unknown_email_gets_same_message(client):
    r = client.post("/api/login", json={"email": "nobody@example.com", "password": "whatever1"})
    assert r.status_code == 401
    assert r.json["message"] == "Invalid email or password"


def test_login_missing_credentials(client):
    r = client.post("/api/login", json={"email": OPERATOR["email"]})
    assert r.status_code == 401
    assert r.json["message"] == "Missing credentials"


def test_logout_records_event_then_clears_session(client, login, audit_rows):
    login()
    r = client.post("/api/logout")
    assert r.status_code == 200

    rows = audit_rows(event="Logout")
    assert len(rows) == 1
    assert rows[0].description == "User Olly Operator logged out"
    assert client.get("/api/user").status_code == 401


def test_logout_without_session_is_ok_and_silent(client, audit_rows):
    r = client.post("/api/logout")
    assert r.status_code == 200
    assert audit_rows() == []


def test_current_user_requires_session(client):
    r = client.get("/api/user")
    assert r.status_code == 401
    assert r.json == {"message": "Unauthorized"}


def test_forgot_password_message_identical_for_known_and_unknown(client, audit_rows):
    known = client.post("/api/forgot-password", json={"email": OPERATOR["email"]})
    unknown = client.post("/api/forgot-password", json={"email": "ghost@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json == unknown.json == {"message": FORGOT_PASSWORD_MESSAGE}

    rows = audit_rows(event="Reset")
    assert len(rows) == 1
    assert rows[0].performed_by == "System"
    assert rows[0].description == "Password reset requested for user Olly Operator"


def test_forgot_password_requires_email(client):
    r = client.post("/api/forgot-password", json={})
    assert r.status_code == 400
    assert r.json["message"] == "Email is required"


def test_users_list_requires_login(client):
    assert client.get("/api/users").status_code == 401


def test_users_list_forbidden_for_non_admin(client, login):
    login(OPERATOR)
    r = client.get("/api/users")
    assert r.status_code == 403
    assert r.json == {"message": "Forbidden"}


def test_users_list_for_admin_strips_passwords(client, login):
    login(ADMIN)
    r = client.get("/api/users")
    assert r.status_code == 200
    assert {u["email"] for u in r.json} == {ADMIN["email"], OPERATOR["email"]}
    for u in r.json:
        assert "password" not in u and "password_hash" not in u

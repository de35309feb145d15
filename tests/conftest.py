import pytest

from app.konnect import create_app
from app.konnect.db import session_scope
from app.konnect.models import AuditTrail, Base, User
from app.konnect.security import hash_password

ADMIN = {"email": "admin@example.com", "password": "adminpw1", "name": "Ada Admin", "username": "ada"}
OPERATOR = {"email": "ops@example.com", "password": "opspw123", "name": "Olly Operator", "username": "olly"}


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    for k in ("SESSION_SECRET", "AUTO_CREATE_SCHEMA", "LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()
    app.config["TESTING"] = True

    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        for seed, role in ((ADMIN, "admin"), (OPERATOR, "user")):
            s.add(
                User(
                    username=seed["username"],
                    email=seed["email"],
                    name=seed["name"],
                    password_hash=hash_password(seed["password"]),
                    role=role,
                )
            )
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login(client):
    def _login(who=OPERATOR):
        r = client.post("/api/login", json={"email": who["email"], "password": who["password"]})
        assert r.status_code == 200
        return r

    return _login


@pytest.fixture()
def audit_rows(app):
    """Audit rows matching exact column values, oldest first."""

    def _rows(**filters):
        with session_scope(app) as s:
            q = s.query(AuditTrail)
            for column, value in filters.items():
                q = q.filter(getattr(AuditTrail, column) == value)
            return q.order_by(AuditTrail.id.asc()).all()

    return _rows

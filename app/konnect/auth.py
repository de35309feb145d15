from __future__ import annotations

import uuid
from typing import Any

from flask import Blueprint, current_app, g, jsonify, session

from app.konnect.audit import record_event
from app.konnect.constants import (
    CATEGORY_USER,
    EVENT_CREATE,
    EVENT_LOGIN,
    EVENT_LOGOUT,
    EVENT_RESET,
    FORGOT_PASSWORD_MESSAGE,
    MIN_PASSWORD_LENGTH,
    ROLE_ADMIN,
    SYSTEM_PERFORMER,
)
from app.konnect.db import db_session
from app.konnect.models import User
from app.konnect.rbac import current_user, login_required, require_role
from app.konnect.security import hash_password, verify_password
from app.konnect.storage import DatabaseStorage
from app.konnect.utils import is_valid_email, json_body

bp = Blueprint("auth", __name__)

_REGISTER_FIELDS = ("username", "email", "name", "password")


def load_current_user() -> None:
    """
    Loads g.current_user from the signed session cookie.
    Also assigns a simple per-request request_id (for audit/log correlation).
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex

    user_id = session.get("user_id")
    if not user_id:
        g.current_user = None
        return

    try:
        user = DatabaseStorage(db_session()).get_user(int(user_id))
    except Exception as e:
        current_app.logger.error("load_current_user DB error (clearing session): %s", e)
        session.pop("user_id", None)
        g.current_user = None
        return
    if not user:
        # Account vanished under a live session
        session.pop("user_id", None)
        g.current_user = None
        return
    g.current_user = user


def _login(user: User) -> None:
    session.clear()
    session["user_id"] = user.id
    session.permanent = True
    g.current_user = user


def validate_registration_payload(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Field-level errors for a registration body, shaped as {"path": [field], "message": ...}."""
    errors: list[dict[str, Any]] = []
    for field in _REGISTER_FIELDS:
        value = payload.get(field)
        if value is None:
            errors.append({"path": [field], "message": "Required"})
        elif not isinstance(value, str):
            errors.append({"path": [field], "message": "Expected string"})
        elif field in ("username", "name") and not value.strip():
            errors.append({"path": [field], "message": "Required"})

    email = payload.get("email")
    if isinstance(email, str) and not is_valid_email(email.strip()):
        errors.append({"path": ["email"], "message": "Invalid email address"})

    password = payload.get("password")
    if isinstance(password, str) and len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            {"path": ["password"], "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}
        )
    return errors


@bp.post("/register")
def register():
    s = db_session()
    storage = DatabaseStorage(s)
    payload = json_body()

    errors = validate_registration_payload(payload)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    email = payload["email"].strip().lower()
    username = payload["username"].strip()
    name = payload["name"].strip()

    # Duplicates are checked up front rather than relying on the unique constraints.
    if storage.get_user_by_email(email):
        return jsonify({"message": "Email already in use"}), 400
    if storage.get_user_by_username(username):
        return jsonify({"message": "Username already exists"}), 400

    user = storage.create_user(
        username=username,
        email=email,
        password_hash=hash_password(payload["password"]),
        name=name,
    )
    record_event(
        s,
        actor=user,
        event=EVENT_CREATE,
        category=CATEGORY_USER,
        description=f"User {user.name} was registered",
    )
    s.commit()

    _login(user)
    current_app.logger.info("Registered user_id=%s username=%s", user.id, user.username)
    return jsonify(user.to_dict()), 201


@bp.post("/login")
def login():
    s = db_session()
    payload = json_body()
    email = payload.get("email")
    password = payload.get("password")

    if not isinstance(email, str) or not isinstance(password, str) or not email.strip() or not password:
        return jsonify({"message": "Missing credentials"}), 401

    email = email.strip().lower()
    user = DatabaseStorage(s).get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        current_app.logger.info("Login failed (email=%s request_id=%s)", email, getattr(g, "request_id", None))
        return jsonify({"message": "Invalid email or password"}), 401

    _login(user)
    record_event(
        s,
        actor=user,
        event=EVENT_LOGIN,
        category=CATEGORY_USER,
        description=f"User {user.name} logged in",
    )
    s.commit()
    return jsonify(user.to_dict()), 200


@bp.post("/logout")
def logout():
    user = current_user()
    if user:
        s = db_session()
        record_event(
            s,
            actor=user,
            event=EVENT_LOGOUT,
            category=CATEGORY_USER,
            description=f"User {user.name} logged out",
        )
        s.commit()
    session.clear()
    g.current_user = None
    return "OK", 200


@bp.get("/user")
@login_required
def me():
    return jsonify(current_user().to_dict())


@bp.get("/users")
@require_role(ROLE_ADMIN)
def users_list():
    users = DatabaseStorage(db_session()).get_all_users()
    return jsonify([u.to_dict() for u in users])


@bp.post("/forgot-password")
def forgot_password():
    s = db_session()
    email = json_body().get("email")
    if not isinstance(email, str) or not email.strip():
        return jsonify({"message": "Email is required"}), 400

    user = DatabaseStorage(s).get_user_by_email(email.strip().lower())
    if user:
        # No mail is sent yet; the request is only recorded.
        record_event(
            s,
            actor=None,
            event=EVENT_RESET,
            category=CATEGORY_USER,
            description=f"Password reset requested for user {user.name}",
            performed_by=SYSTEM_PERFORMER,
        )
        s.commit()
    return jsonify({"message": FORGOT_PASSWORD_MESSAGE}), 200

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import abort, current_app, g

from app.konnect.models import User


def current_user() -> User | None:
    return getattr(g, "current_user", None)


def user_has_role(user: User | None, role: str) -> bool:
    return bool(user) and user.role == role


def login_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        if current_user() is None:
            abort(401)
        return fn(*args, **kwargs)

    return wrapped


def require_role(role: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(fn)
        def wrapped(*args: Any, **kwargs: Any):
            user = current_user()
            # Unauthenticated -> 401, authenticated but wrong role -> 403
            if user is None:
                abort(401)
            if not user_has_role(user, role):
                g.missing_role = role
                current_app.logger.warning(
                    "Forbidden: user_id=%s role=%s required_role=%s request_id=%s",
                    user.id,
                    user.role,
                    role,
                    getattr(g, "request_id", None),
                )
                abort(403)
            return fn(*args, **kwargs)

        return wrapped

    return decorator

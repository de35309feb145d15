import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str
    log_level: str
    auto_create_schema: bool


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getflag(name: str, default: bool) -> bool:
    raw = _getenv(name)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    env = _getenv("ENV", "development")
    return Settings(
        # SESSION_SECRET is what older deployments of the dashboard set.
        secret_key=_getenv("SECRET_KEY") or _getenv("SESSION_SECRET", "change-me"),
        env=env,
        database_url=_getenv("DATABASE_URL", "sqlite:///konnect.db"),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        auto_create_schema=_getflag("AUTO_CREATE_SCHEMA", env.lower() not in ("prod", "production")),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env.lower() in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "LOG_LEVEL": s.log_level,
        "AUTO_CREATE_SCHEMA": s.auto_create_schema,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
        # JSON bodies only; nothing is uploaded
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }

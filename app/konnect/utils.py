from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from flask import request

from app.konnect.constants import MAX_DB_INT

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def clean_str(value: Any) -> str | None:
    """Stripped string, or None when the value is missing, blank or not a string."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def is_int(value: Any) -> bool:
    # bool is an int subclass; JSON true/false must not pass as a number
    return isinstance(value, int) and not isinstance(value, bool)


def fits_db_int(value: Any) -> bool:
    """True for a non-negative int the database integer columns can hold."""
    return is_int(value) and 0 <= value <= MAX_DB_INT


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query-string integer, falling back to default for junk, zero, negatives or overflow."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if 0 < value <= MAX_DB_INT else default


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_range_start(raw: str) -> datetime:
    """
    Lower bound for a timestamp filter (inclusive).
    Accepts YYYY-MM-DD or a full ISO 8601 datetime; raises ValueError otherwise.
    """
    raw = raw.strip()
    if _DATE_ONLY_RE.match(raw):
        return datetime.combine(date.fromisoformat(raw), time.min)
    return _to_naive_utc(datetime.fromisoformat(raw))


def parse_range_end(raw: str) -> tuple[datetime, bool]:
    """
    Upper bound for a timestamp filter.
    Returns (bound, exclusive). A bare date covers the whole day, so it becomes
    an exclusive bound at midnight of the following day.
    """
    raw = raw.strip()
    if _DATE_ONLY_RE.match(raw):
        return datetime.combine(date.fromisoformat(raw) + timedelta(days=1), time.min), True
    return _to_naive_utc(datetime.fromisoformat(raw)), False


def json_body() -> dict[str, Any]:
    """The request's JSON object body, or {} for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

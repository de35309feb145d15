from __future__ import annotations

from typing import Any

from app.konnect.storage import AuditFilters
from app.konnect.utils import parse_range_end, parse_range_start

_FILTER_KEYS = ("category", "event", "performedBy", "startDate", "endDate")


def parse_audit_filters(payload: dict[str, Any]) -> AuditFilters:
    """
    Build AuditFilters from a filter request body.
    Every key is an optional string; blank strings are ignored.
    Raises ValueError for non-string values or unparseable dates.
    """
    values: dict[str, str | None] = {}
    for key in _FILTER_KEYS:
        raw = payload.get(key)
        if raw is None:
            values[key] = None
            continue
        if not isinstance(raw, str):
            raise ValueError(f"{key} must be a string")
        values[key] = raw.strip() or None

    start = parse_range_start(values["startDate"]) if values["startDate"] else None
    end, end_exclusive = parse_range_end(values["endDate"]) if values["endDate"] else (None, False)
    if start is not None and end is not None and start > end:
        raise ValueError("startDate is after endDate")

    return AuditFilters(
        category=values["category"],
        event=values["event"],
        performed_by=values["performedBy"],
        start=start,
        end=end,
        end_exclusive=end_exclusive,
    )

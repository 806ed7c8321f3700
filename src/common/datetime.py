"""Datetime utilities."""

from datetime import datetime, timezone


def to_iso(value: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string, e.g. 2024-01-01T12:00:00.000Z."""
    return to_iso(datetime.now(timezone.utc))
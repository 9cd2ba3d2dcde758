"""Date helpers shared by the core modules."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as an aware UTC ``datetime``."""

    return datetime.now(timezone.utc)


def to_iso(value: datetime | None) -> str | None:
    """Return ``value`` as an ISO-8601 string for storage."""

    if value is None:
        return None
    return ensure_aware(value).isoformat()


def from_iso(value: str | None) -> datetime | None:
    """Parse a stored ISO-8601 string; naive values are read as UTC."""

    if value is None:
        return None
    # ``fromisoformat`` only accepts a trailing ``Z`` on newer interpreters
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(value))


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

"""Domain helpers for user request bodies and the public user view."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

REQUIRED_FIELDS = ("username", "password")


def _field(payload: Any, name: str) -> Any:
    if not isinstance(payload, Mapping):
        return None
    return payload.get(name)


def is_user_body_valid(payload: Any) -> bool:
    """Return True when username and password are strings with non-blank content."""
    for name in REQUIRED_FIELDS:
        value = _field(payload, name)
        if not isinstance(value, str) or not value.strip():
            return False
    return True


def is_reset_body_valid(payload: Any, *, require_non_empty: bool = False) -> bool:
    """
    Reset bodies only need both fields to be strings. ``require_non_empty``
    applies the same blank check used for registration and login.
    """
    if require_non_empty:
        return is_user_body_valid(payload)
    return all(isinstance(_field(payload, name), str) for name in REQUIRED_FIELDS)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def safe_user_view(record: Any) -> dict:
    """
    Build the outward representation of a user record. The password is never
    copied, whatever shape ``record`` has (ORM entity, Row or mapping).
    """
    if isinstance(record, Mapping):
        get = record.get
    else:
        def get(name: str) -> Any:
            return getattr(record, name, None)
    return {
        "id": get("id"),
        "username": get("username"),
        "dateJoined": _as_utc(get("date_joined")),
    }

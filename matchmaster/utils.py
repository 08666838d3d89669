"""Utility functions for the application."""

from __future__ import annotations

import datetime
from typing import Any


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def parse_timestamp(value: Any) -> datetime.datetime | None:
    """Normalise a stored timestamp to an aware datetime.

    Firestore hands back ``DatetimeWithNanoseconds`` (a datetime subclass),
    older records carry ISO-8601 strings. Naive values are taken as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if hasattr(value, "to_datetime") and not isinstance(value, datetime.datetime):
        value = value.to_datetime()
    if not isinstance(value, datetime.datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value


def format_timestamp(value: datetime.datetime | None) -> str | None:
    """Render a datetime for JSON responses."""
    if value is None:
        return None
    return value.isoformat()


def is_blank(value: Any) -> bool:
    """Return True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()

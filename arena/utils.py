"""Utility functions shared by the repositories and models."""

from __future__ import annotations

import datetime
from typing import Any


def parse_date(value: Any) -> datetime.date | None:
    """Parse an ISO date string as written by the models."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> datetime.datetime | None:
    """Parse an ISO timestamp string as written by the models."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value
    return datetime.datetime.fromisoformat(str(value))


def iso(value: datetime.date | datetime.datetime | None) -> str | None:
    """Format a date or timestamp for storage."""
    return value.isoformat() if value is not None else None


def optional_int(value: Any) -> int | None:
    """Coerce a stored id that may be absent."""
    if value is None:
        return None
    return int(value)


def name_sort_key(value: str | None) -> tuple[bool, str]:
    """Sort names case-insensitively with missing names last."""
    return (value is None, (value or "").lower())


def dict_values(raw: Any) -> list[Any]:
    """Return the non-null children of a node stored as an array or a map."""
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [v for v in raw.values() if v is not None]
    return [v for v in raw if v is not None]

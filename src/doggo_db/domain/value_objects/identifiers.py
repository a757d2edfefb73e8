"""Identifiers and reserved names used throughout the document store."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, NewType


EntryId = NewType("EntryId", int)
"""Row identifier. Assigned once at insertion, unique within its table for the table's lifetime."""

INVALID_ENTRY_ID = EntryId(0)

ENTRY_ID_FIELD = "entryId"
"""Name of the reserved row field holding the EntryId."""

RESERVED_FIELDS: frozenset[str] = frozenset({ENTRY_ID_FIELD})
"""Field names clients can never set; stripped from every payload."""

Row = dict[str, Any]
"""A schema-less record: field name to any JSON-shaped value."""


def strip_reserved(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a shallow copy of payload without reserved fields."""
    return {key: value for key, value in payload.items() if key not in RESERVED_FIELDS}


def utc_now() -> datetime:
    """Current timestamp, timezone aware."""
    return datetime.now(timezone.utc)


def invalid_field(payload: dict[str, Any], prefix: str = "") -> str | None:
    """Find the first field whose key or value JSON cannot hold unchanged.

    Keys must be strings. Values may be str, int, finite float, bool, None,
    lists of such values and dicts of such fields.

    Returns:
        Dot-path of the offending field, or None if the payload is valid.
    """
    for key, value in payload.items():
        if not isinstance(key, str):
            return f"{prefix}{key!r}"
        bad = _invalid_value(value, f"{prefix}{key}")
        if bad is not None:
            return bad
    return None


def _invalid_value(value: Any, path: str) -> str | None:
    if value is None or isinstance(value, (str, bool, int)):
        return None
    if isinstance(value, float):
        return None if math.isfinite(value) else path
    if isinstance(value, list):
        for position, item in enumerate(value):
            bad = _invalid_value(item, f"{path}[{position}]")
            if bad is not None:
                return bad
        return None
    if isinstance(value, dict):
        return invalid_field(value, f"{path}.")
    return path

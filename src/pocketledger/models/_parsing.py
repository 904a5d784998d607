"""Lenient coercions shared by wire models and request DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import Any


def coerce_identifier(value: Any) -> Any:
    """Backends may hand out numeric ids; the client treats every id as opaque text."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


def coerce_optional_identifier(value: Any) -> Any:
    """Map blank form values to ``None`` before identifier coercion."""

    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return coerce_identifier(value)


def coerce_timestamp(value: Any) -> Any:
    """Parse ISO strings including bare dates and a trailing ``Z``."""

    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return value
    return value

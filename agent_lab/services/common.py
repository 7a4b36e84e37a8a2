"""Value coercion helpers shared by query filters and services."""

from __future__ import annotations

import uuid


class InvalidInputError(ValueError):
    """Caller-supplied value that cannot be used, reported as HTTP 400."""


def coerce_uuid(value: uuid.UUID | str) -> uuid.UUID:
    """Return ``value`` as a UUID, raising ``InvalidInputError`` when it is malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidInputError(f"Invalid UUID '{value}'.") from exc


def optional_uuid(value: str | None) -> uuid.UUID | None:
    """Parse a query-string UUID, treating empty or malformed input as absent."""
    if not value:
        return None
    try:
        return coerce_uuid(value)
    except ValueError:
        return None


def optional_int(value: str | None) -> int | None:
    """Parse a query-string integer, treating empty or malformed input as absent."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None

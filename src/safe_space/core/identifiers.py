"""Identifier validation shared by every endpoint taking a UUID."""

from __future__ import annotations

import re
import uuid

from safe_space.core.errors import InvalidIdentifier

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(value: object) -> bool:
    """Return True if `value` is a string in 8-4-4-4-12 hex form."""
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def parse_identifier(value: str, field: str = "id") -> str:
    """Validate `value` and return its canonical lowercase form.

    Raises:
        InvalidIdentifier: If `value` is not a UUID string. The message names
            both `field` and the offending value.
    """
    if not is_uuid(value):
        raise InvalidIdentifier(field, str(value))
    return value.lower()


def parse_optional_identifier(value: str | None, field: str) -> str | None:
    """Like `parse_identifier` but passes empty values through as None."""
    if not value:
        return None
    return parse_identifier(value, field)


def new_identifier() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())

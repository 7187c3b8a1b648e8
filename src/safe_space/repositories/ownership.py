"""Compatibility adapter for the two legacy ownership columns.

Rows written before the schema settled carry the owner in `author_id`; newer
rows use `user_id`. Either may be populated, so every ownership read goes
through this module. New rows only ever write `user_id`.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, func, or_

OWNER_COLUMNS = ("author_id", "user_id")


def owner_ids(resource: object) -> frozenset[str]:
    """Return every non-empty owner id recorded on `resource`."""
    found = set()
    for column in OWNER_COLUMNS:
        value = getattr(resource, column, None)
        if value:
            found.add(str(value).lower())
    return frozenset(found)


def is_owned_by(resource: object, user_id: str) -> bool:
    """Return True if `user_id` matches either ownership column."""
    return user_id.lower() in owner_ids(resource)


def owned_by(model: Any, user_id: str) -> ColumnElement[bool]:
    """SQL filter matching rows of `model` owned by `user_id`."""
    return or_(model.author_id == user_id, model.user_id == user_id)


def owner_column(model: Any) -> ColumnElement[str]:
    """The single effective owner id of a row, preferring `user_id`."""
    return func.coalesce(model.user_id, model.author_id)


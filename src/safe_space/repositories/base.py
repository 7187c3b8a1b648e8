"""Shared plumbing for repositories."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safe_space.core.errors import StorageError

logger = logging.getLogger(__name__)


def storage_message(exc: SQLAlchemyError) -> str:
    """Return the driver's own message when there is one."""
    original = getattr(exc, "orig", None)
    return str(original) if original is not None else str(exc)


@contextmanager
def storage_guard(
    session: Session,
    error: type[StorageError] = StorageError,
) -> Iterator[None]:
    """Roll back and re-raise store failures as `error`.

    Non-storage exceptions raised inside the block also roll the session back
    before propagating unchanged.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        message = storage_message(exc)
        logger.error("Storage operation failed: %s", message)
        raise error(message) from exc
    except Exception:
        session.rollback()
        raise

"""Role storage, implementing the policy's `RoleLookup`."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from safe_space.core.errors import RoleLookupError
from safe_space.core.policy import Role
from safe_space.db.time import utcnow
from safe_space.models import UserRole

from .base import storage_guard

__all__ = ["RoleRepository"]

logger = logging.getLogger(__name__)


class RoleRepository:
    """Read and assign rows of `user_roles`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_role(self, user_id: str) -> Role | None:
        """Return the stored role, or None when the user has no row.

        Raises:
            RoleLookupError: If the store cannot be queried.
        """
        with storage_guard(self.session, RoleLookupError):
            value = self.session.scalar(select(UserRole.role).where(UserRole.user_id == user_id))
        if value is None:
            return None
        try:
            return Role(value)
        except ValueError:
            logger.warning("Ignoring unknown role %r for user %s", value, user_id)
            return None

    def assign(self, user_id: str, role: Role, *, granted_by: str | None = None) -> UserRole:
        """Create or replace the role row for `user_id`."""
        with storage_guard(self.session):
            row = self.session.get(UserRole, user_id)
            if row is None:
                row = UserRole(user_id=user_id)
                self.session.add(row)
            row.role = role.value
            row.granted_by = granted_by
            row.granted_at = utcnow()
            self.session.commit()
            self.session.refresh(row)
        return row

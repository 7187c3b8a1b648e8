"""Authorization policy for content ownership and moderator access.

Decisions here are pure functions of the caller, the resource and, for the
admin view, the caller's role. The only I/O is the role lookup, which is
delegated to whatever implements `RoleLookup`.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from safe_space.core.errors import Forbidden
from safe_space.core.identity import Identity
from safe_space.repositories.ownership import is_owned_by

__all__ = [
    "Role",
    "Capability",
    "CAPABILITIES",
    "RoleLookup",
    "can_edit_or_delete",
    "has_capability",
    "can_access_admin_view",
    "require_owner",
    "require_capability",
]


class Role(str, Enum):
    """Closed set of roles a user can hold."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class Capability(str, Enum):
    """Actions gated by role."""

    EDIT_OWN_CONTENT = "edit_own_content"
    VIEW_ADMIN = "view_admin"
    MODERATE_CONTENT = "moderate_content"


CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.USER: frozenset({Capability.EDIT_OWN_CONTENT}),
    Role.MODERATOR: frozenset(
        {Capability.EDIT_OWN_CONTENT, Capability.VIEW_ADMIN, Capability.MODERATE_CONTENT}
    ),
    Role.ADMIN: frozenset(
        {Capability.EDIT_OWN_CONTENT, Capability.VIEW_ADMIN, Capability.MODERATE_CONTENT}
    ),
}


class RoleLookup(Protocol):
    """Anything able to fetch a stored role.

    Implementations return None when the user has no row and raise
    `RoleLookupError` when the store itself cannot be queried.
    """

    def get_role(self, user_id: str) -> Role | None: ...


def can_edit_or_delete(identity: Identity, resource: object) -> bool:
    """Return True iff the caller owns `resource` under either owner column."""
    return is_owned_by(resource, identity.id)


def has_capability(role: Role, capability: Capability) -> bool:
    """Look `capability` up in the role table."""
    return capability in CAPABILITIES[role]


def effective_role(identity: Identity, roles: RoleLookup) -> Role:
    """Return the caller's role, defaulting to `Role.USER` when none is stored."""
    return roles.get_role(identity.id) or Role.USER


def can_access_admin_view(identity: Identity, roles: RoleLookup) -> bool:
    """Return True for admins and moderators."""
    return has_capability(effective_role(identity, roles), Capability.VIEW_ADMIN)


def require_owner(identity: Identity, resource: object, action: str, noun: str) -> None:
    """Raise `Forbidden` unless the caller owns `resource`."""
    if not can_edit_or_delete(identity, resource):
        raise Forbidden(f"Forbidden - You can only {action} your own {noun}")


def require_capability(identity: Identity, roles: RoleLookup, capability: Capability) -> Role:
    """Return the caller's role, raising `Forbidden` if it lacks `capability`."""
    role = effective_role(identity, roles)
    if not has_capability(role, capability):
        raise Forbidden("Forbidden - Admin access required")
    return role

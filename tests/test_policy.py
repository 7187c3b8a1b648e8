# tests/test_policy.py
"""Tests for the ownership and role policy."""

from types import SimpleNamespace

import pytest

from safe_space.core.errors import Forbidden
from safe_space.core.identity import Identity
from safe_space.core.policy import (
    CAPABILITIES,
    Capability,
    Role,
    can_access_admin_view,
    can_edit_or_delete,
    effective_role,
    has_capability,
    require_capability,
    require_owner,
)
from safe_space.repositories.ownership import is_owned_by, owner_ids

ALICE = "11111111-1111-4111-8111-111111111111"
BOB = "22222222-2222-4222-8222-222222222222"


class StaticRoles:
    def __init__(self, roles: dict[str, Role]) -> None:
        self.roles = roles

    def get_role(self, user_id: str) -> Role | None:
        return self.roles.get(user_id)


@pytest.mark.parametrize(
    ("author_id", "user_id", "expected"),
    [
        (ALICE, None, True),
        (None, ALICE, True),
        (BOB, ALICE, True),
        (ALICE, BOB, True),
        (BOB, BOB, False),
        (None, None, False),
    ],
)
def test_either_owner_column_grants_ownership(author_id, user_id, expected) -> None:
    resource = SimpleNamespace(author_id=author_id, user_id=user_id)
    assert can_edit_or_delete(Identity(id=ALICE), resource) is expected


def test_owner_ids_are_compared_case_insensitively() -> None:
    resource = SimpleNamespace(author_id=ALICE.upper(), user_id=None)
    assert owner_ids(resource) == frozenset({ALICE})
    assert is_owned_by(resource, ALICE)


def test_require_owner_message_names_action_and_noun() -> None:
    resource = SimpleNamespace(author_id=None, user_id=BOB)
    with pytest.raises(Forbidden) as exc_info:
        require_owner(Identity(id=ALICE), resource, "edit", "posts")
    assert exc_info.value.message == "Forbidden - You can only edit your own posts"


def test_capability_table() -> None:
    assert CAPABILITIES[Role.USER] == {Capability.EDIT_OWN_CONTENT}
    for role in (Role.MODERATOR, Role.ADMIN):
        assert has_capability(role, Capability.VIEW_ADMIN)
        assert has_capability(role, Capability.MODERATE_CONTENT)
    assert not has_capability(Role.USER, Capability.VIEW_ADMIN)


def test_missing_role_defaults_to_user() -> None:
    roles = StaticRoles({})
    assert effective_role(Identity(id=ALICE), roles) is Role.USER
    assert not can_access_admin_view(Identity(id=ALICE), roles)


@pytest.mark.parametrize("role", [Role.ADMIN, Role.MODERATOR])
def test_admin_view_for_elevated_roles(role) -> None:
    roles = StaticRoles({ALICE: role})
    assert can_access_admin_view(Identity(id=ALICE), roles)
    assert require_capability(Identity(id=ALICE), roles, Capability.VIEW_ADMIN) is role


def test_require_capability_denies_plain_user() -> None:
    with pytest.raises(Forbidden, match="Admin access required"):
        require_capability(Identity(id=BOB), StaticRoles({}), Capability.VIEW_ADMIN)

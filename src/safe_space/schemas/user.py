"""User-facing schemas."""

from pydantic import BaseModel

from safe_space.core.policy import Role


class RoleResponse(BaseModel):
    """The caller's role; `user` when none is stored."""

    role: Role

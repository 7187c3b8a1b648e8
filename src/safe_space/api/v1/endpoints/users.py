# src/safe_space/api/v1/endpoints/users.py
"""Endpoints describing the authenticated caller."""

from fastapi import APIRouter

from safe_space.core.policy import effective_role
from safe_space.models import Post
from safe_space.repositories.post_repo import PostRepository
from safe_space.schemas.post import PostResponse
from safe_space.schemas.user import RoleResponse

from ..dependencies import IdentityDep, PageDep, RolesDep, SessionDep

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/role", response_model=RoleResponse)
async def get_my_role(identity: IdentityDep, roles: RolesDep) -> RoleResponse:
    """Return the caller's role; users without a stored role are `user`."""
    return RoleResponse(role=effective_role(identity, roles))


@router.get("/posts", response_model=list[PostResponse])
async def list_my_posts(identity: IdentityDep, db: SessionDep, page: PageDep) -> list[Post]:
    """List the caller's posts of every status, newest first."""
    return PostRepository(db).list_owned(identity.id, limit=page.limit, offset=page.offset)

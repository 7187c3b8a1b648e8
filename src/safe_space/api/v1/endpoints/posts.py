# src/safe_space/api/v1/endpoints/posts.py
"""Post-related endpoints for the Safe Space API."""

import logging

from fastapi import APIRouter, status

from safe_space.core.policy import require_owner
from safe_space.models import Post
from safe_space.repositories.post_repo import PostRepository
from safe_space.schemas.common import SuccessResponse
from safe_space.schemas.post import PostCreate, PostResponse, PostUpdate

from ..dependencies import (
    IdentityDep,
    PageDep,
    PostIdDep,
    SessionDep,
    SettingsDep,
    StatusFilterDep,
)

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    page: PageDep,
    status_filter: StatusFilterDep,
) -> list[Post]:
    """List posts newest first.

    Args:
        db: Database session
        page: `limit` (default 50) and `offset` (default 0)
        status_filter: Optional `status` to filter on

    Returns:
        List of Post objects ordered by creation time, newest first
    """
    return PostRepository(db).list(status=status_filter, limit=page.limit, offset=page.offset)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    identity: IdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Post:
    """Create a post owned by the authenticated caller.

    Raises:
        Unauthenticated: If no valid token was sent
        InvalidInput: If title or content is empty
    """
    post = PostRepository(db).create(
        identity.id,
        post_data,
        default_category=settings.default_category,
    )
    logger.info("Post %s created by %s", post.id, identity.id)
    return post


@router.get("/{id}", response_model=PostResponse)
async def get_post(post_id: PostIdDep, db: SessionDep) -> Post:
    """Get a specific post by ID.

    Raises:
        InvalidIdentifier: If the id is not a UUID
        NotFound: If no post has this id
    """
    return PostRepository(db).get_or_404(post_id)


@router.put("/{id}", response_model=PostResponse)
async def update_post(
    post_id: PostIdDep,
    changes: PostUpdate,
    identity: IdentityDep,
    db: SessionDep,
) -> Post:
    """Edit title, content, category or anonymity of the caller's own post.

    Raises:
        Forbidden: If the caller owns the post under neither owner column
    """
    repo = PostRepository(db)
    post = repo.get_or_404(post_id)
    require_owner(identity, post, "edit", "posts")
    return repo.update(post, changes.model_dump(exclude_unset=True))


@router.delete("/{id}", response_model=SuccessResponse)
async def delete_post(
    post_id: PostIdDep,
    identity: IdentityDep,
    db: SessionDep,
) -> SuccessResponse:
    """Permanently delete the caller's own post.

    Comments, reactions and reports on the post are removed with it.
    """
    repo = PostRepository(db)
    post = repo.get_or_404(post_id)
    require_owner(identity, post, "delete", "posts")
    repo.delete(post_id)
    logger.info("Post %s deleted by %s", post_id, identity.id)
    return SuccessResponse(message="Post deleted successfully")

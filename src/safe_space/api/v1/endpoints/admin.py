# src/safe_space/api/v1/endpoints/admin.py
"""Moderation endpoints, restricted to moderators and admins."""

import logging

from fastapi import APIRouter, Query

from safe_space.models import Post
from safe_space.repositories.post_repo import PostRepository
from safe_space.repositories.reaction_repo import ReactionRepository
from safe_space.repositories.report_repo import ReportRepository
from safe_space.repositories.targets import Target
from safe_space.schemas.admin import AdminPostDetail, AdminPostResponse, AdminPostUpdate
from safe_space.schemas.comment import CommentResponse
from safe_space.schemas.common import SuccessResponse
from safe_space.schemas.post import PostResponse
from safe_space.schemas.reaction import ReactionResponse
from safe_space.schemas.report import ReportResponse

from ..dependencies import (
    AdminDep,
    ModeratorDep,
    PageDep,
    PostIdDep,
    SessionDep,
    StatusFilterDep,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/posts", response_model=list[AdminPostResponse])
async def list_posts_for_review(
    admin: AdminDep,
    db: SessionDep,
    page: PageDep,
    status_filter: StatusFilterDep,
) -> list[AdminPostResponse]:
    """List posts of every status, each with its author's role."""
    rows = PostRepository(db).list_with_author_roles(
        status=status_filter,
        limit=page.limit,
        offset=page.offset,
    )
    return [
        AdminPostResponse(
            **PostResponse.model_validate(post).model_dump(),
            author_role=role,
        )
        for post, role in rows
    ]


@router.get("/posts/{id}", response_model=AdminPostDetail)
async def get_post_for_review(
    post_id: PostIdDep,
    admin: AdminDep,
    db: SessionDep,
) -> AdminPostDetail:
    """Return a post with all of its comments, reactions and reports.

    Unlike the public thread, comments of every status are included.
    """
    post = PostRepository(db).get_or_404(post_id)
    target = Target.post(post_id)
    return AdminPostDetail(
        **PostResponse.model_validate(post).model_dump(),
        comments=[CommentResponse.model_validate(c) for c in post.comments],
        reactions=[
            ReactionResponse.model_validate(r) for r in ReactionRepository(db).list_for(target)
        ],
        reports=[ReportResponse.model_validate(r) for r in ReportRepository(db).list_for(target)],
    )


@router.put("/posts/{id}", response_model=PostResponse)
async def moderate_post(
    post_id: PostIdDep,
    changes: AdminPostUpdate,
    moderator: ModeratorDep,
    db: SessionDep,
) -> Post:
    """Edit any field of a post, including its moderation status."""
    repo = PostRepository(db)
    post = repo.get_or_404(post_id)
    updated = repo.moderate(post, changes.model_dump(exclude_unset=True), moderator_id=moderator.id)
    logger.info("Post %s moderated by %s (status=%s)", post_id, moderator.id, updated.status)
    return updated


@router.delete("/posts/{id}", response_model=SuccessResponse)
async def remove_post(
    post_id: PostIdDep,
    moderator: ModeratorDep,
    db: SessionDep,
    hard: bool = Query(False, description="Delete the row instead of marking it deleted"),
) -> SuccessResponse:
    """Soft-delete a post, or remove it permanently with `hard=true`."""
    repo = PostRepository(db)
    post = repo.get_or_404(post_id)
    if hard:
        repo.delete(post_id)
        logger.info("Post %s permanently deleted by %s", post_id, moderator.id)
        return SuccessResponse(message="Post permanently deleted")
    repo.soft_delete(post, moderator_id=moderator.id)
    logger.info("Post %s marked deleted by %s", post_id, moderator.id)
    return SuccessResponse(message="Post deleted successfully")

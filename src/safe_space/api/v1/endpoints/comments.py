# src/safe_space/api/v1/endpoints/comments.py
"""Comment, comment upvote and comment reaction endpoints."""

import logging

from fastapi import APIRouter, Query, status

from safe_space.core.errors import InvalidInput, Unauthenticated
from safe_space.core.identifiers import parse_identifier, parse_optional_identifier
from safe_space.core.identity import Identity
from safe_space.core.policy import require_owner
from safe_space.core.settings import Settings
from safe_space.models import Comment, Reaction
from safe_space.repositories.comment_repo import CommentRepository
from safe_space.repositories.reaction_repo import ReactionRepository
from safe_space.repositories.targets import Target
from safe_space.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    UpvoteResponse,
)
from safe_space.schemas.common import SuccessResponse
from safe_space.schemas.reaction import CommentReactionRequest, ReactionResponse, ReactionType
from safe_space.services.toggle import ToggleEngine

from ..dependencies import (
    CommentIdDep,
    IdentityDep,
    OptionalIdentityDep,
    SessionDep,
    SettingsDep,
    UpvoterDep,
    resolve_acting_user,
)

router = APIRouter(prefix="/comments", tags=["comments"])
logger = logging.getLogger(__name__)


def _authorize_comment_change(
    comment: Comment,
    identity: Identity | None,
    settings: Settings,
    action: str,
) -> None:
    if settings.legacy_open_endpoints:
        return
    if identity is None:
        raise Unauthenticated("Authentication required")
    require_owner(identity, comment, action, "comments")


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    db: SessionDep,
    post_id: str | None = Query(None, description="Post whose comments to list"),
) -> list[Comment]:
    """List active and moderated comments of a post, oldest first."""
    if not post_id:
        raise InvalidInput("post_id is required")
    return CommentRepository(db).list_for_post(parse_identifier(post_id, "post_id"))


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    identity: IdentityDep,
    db: SessionDep,
) -> Comment:
    """Reply to a post, or to another comment on the same post."""
    post_id = parse_identifier(comment_data.post_id, "post_id")
    parent_id = parse_optional_identifier(comment_data.parent_comment_id, "parent_comment_id")
    comment = CommentRepository(db).create(
        identity.id,
        post_id,
        comment_data.model_copy(update={"parent_comment_id": parent_id}),
    )
    logger.info("Comment %s created on post %s by %s", comment.id, post_id, identity.id)
    return comment


@router.put("/{id}", response_model=CommentResponse)
async def update_comment(
    comment_id: CommentIdDep,
    changes: CommentUpdate,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Comment:
    """Edit the content or anonymity of the caller's own comment."""
    repo = CommentRepository(db)
    comment = repo.get_or_404(comment_id)
    _authorize_comment_change(comment, identity, settings, "edit")
    return repo.update(comment, changes.model_dump(exclude_unset=True))


@router.delete("/{id}", response_model=CommentResponse)
async def delete_comment(
    comment_id: CommentIdDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> CommentResponse:
    """Permanently delete the caller's own comment and return it."""
    repo = CommentRepository(db)
    comment = repo.get_or_404(comment_id)
    _authorize_comment_change(comment, identity, settings, "delete")
    deleted = CommentResponse.model_validate(comment)
    repo.delete(comment_id)
    return deleted


@router.post("/{id}/upvote", response_model=UpvoteResponse)
async def toggle_comment_upvote(
    comment_id: CommentIdDep,
    user_id: UpvoterDep,
    db: SessionDep,
) -> UpvoteResponse:
    """Upvote a comment, or withdraw the caller's existing upvote."""
    result = ToggleEngine(db).toggle_upvote(comment_id, user_id)
    return UpvoteResponse(upvoted=result.active, upvote_count=result.total)


@router.get("/{id}/reactions", response_model=list[ReactionResponse])
async def list_comment_reactions(comment_id: CommentIdDep, db: SessionDep) -> list[Reaction]:
    """List every reaction on a comment."""
    return ReactionRepository(db).list_for(Target.comment(comment_id))


@router.post(
    "/{id}/reactions",
    response_model=ReactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment_reaction(
    comment_id: CommentIdDep,
    reaction: CommentReactionRequest,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Reaction:
    """React to a comment."""
    user_id = resolve_acting_user(identity, reaction.user_id, "user_id", settings)
    return ToggleEngine(db).add_reaction(
        Target.comment(comment_id),
        user_id,
        reaction.reaction_type,
    )


@router.delete("/{id}/reactions", response_model=SuccessResponse)
async def remove_comment_reaction(
    comment_id: CommentIdDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
    reaction_type: ReactionType = Query(..., description="Reaction to remove"),
    user_id: str | None = Query(None, description="Reacting user, when not authenticated"),
) -> SuccessResponse:
    """Remove the caller's reaction of one type from a comment."""
    acting_user = resolve_acting_user(identity, user_id, "user_id", settings)
    ToggleEngine(db).remove_reaction(Target.comment(comment_id), acting_user, reaction_type)
    return SuccessResponse()

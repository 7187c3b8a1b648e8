# src/safe_space/api/v1/endpoints/reactions.py
"""Reaction endpoints for posts and comments."""

from fastapi import APIRouter, Query, status

from safe_space.models import Reaction
from safe_space.repositories.reaction_repo import ReactionRepository
from safe_space.repositories.targets import Target
from safe_space.schemas.common import SuccessResponse
from safe_space.schemas.reaction import (
    CountResponse,
    ReactionRequest,
    ReactionResponse,
    ToggleResponse,
)
from safe_space.services.toggle import ToggleEngine

from ..dependencies import OptionalIdentityDep, SessionDep, SettingsDep, resolve_acting_user

router = APIRouter(prefix="/reactions", tags=["reactions"])


@router.get("", response_model=list[ReactionResponse] | CountResponse)
async def list_reactions(
    db: SessionDep,
    post_id: str | None = Query(None),
    comment_id: str | None = Query(None),
    count: bool = Query(False, description="Return only the count and per-type tallies"),
) -> list[Reaction] | CountResponse:
    """List reactions on one post or one comment.

    With `count=true` the response is `{count, by_type}` instead of the rows.
    """
    target = Target.from_fields(post_id, comment_id)
    repo = ReactionRepository(db)
    if count:
        return CountResponse(count=repo.count_for(target), by_type=repo.tallies_for(target))
    return repo.list_for(target)


@router.post("", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
async def add_reaction(
    reaction: ReactionRequest,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Reaction:
    """Add a reaction; reacting twice with the same type fails in storage."""
    target = Target.from_fields(reaction.post_id, reaction.comment_id)
    user_id = resolve_acting_user(identity, reaction.user_id, "user_id", settings)
    return ToggleEngine(db).add_reaction(target, user_id, reaction.reaction_type)


@router.delete("", response_model=SuccessResponse)
async def remove_reaction(
    reaction: ReactionRequest,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> SuccessResponse:
    """Remove the caller's reaction. Removing an absent reaction succeeds."""
    target = Target.from_fields(reaction.post_id, reaction.comment_id)
    user_id = resolve_acting_user(identity, reaction.user_id, "user_id", settings)
    removed = ToggleEngine(db).remove_reaction(target, user_id, reaction.reaction_type)
    return SuccessResponse(message=None if removed else "No matching reaction")


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_reaction(
    reaction: ReactionRequest,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> ToggleResponse:
    """Add the reaction if the caller has not made it yet, otherwise remove it."""
    target = Target.from_fields(reaction.post_id, reaction.comment_id)
    user_id = resolve_acting_user(identity, reaction.user_id, "user_id", settings)
    result = ToggleEngine(db).toggle_reaction(target, user_id, reaction.reaction_type)
    return ToggleResponse(active=result.active, total=result.total)

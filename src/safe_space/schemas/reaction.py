"""Reaction-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReactionType = Literal["upvote", "heart", "hug"]


class ReactionRequest(BaseModel):
    """Reaction on a post or a comment.

    `user_id` may be omitted when the caller is authenticated; if present it
    has to match the caller.
    """

    post_id: str | None = None
    comment_id: str | None = None
    user_id: str | None = None
    reaction_type: ReactionType


class CommentReactionRequest(BaseModel):
    """Reaction on the comment named in the path."""

    user_id: str | None = None
    reaction_type: ReactionType


class ReactionResponse(BaseModel):
    """Schema for a stored reaction."""

    id: str
    post_id: str | None
    comment_id: str | None
    user_id: str
    reaction_type: ReactionType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ToggleResponse(BaseModel):
    """State after a toggle, with the tally for that reaction type."""

    active: bool
    total: int


class CountResponse(BaseModel):
    """Row count for a target, optionally broken down by type."""

    count: int
    by_type: dict[str, int] = Field(default_factory=dict)

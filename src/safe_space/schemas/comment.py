"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from safe_space.db.time import as_utc

from .common import reject_null
from .post import ContentStatus


class CommentCreate(BaseModel):
    """Schema for creating a comment under a post."""

    post_id: str = Field(..., description="Post being replied to")
    parent_comment_id: str | None = Field(None, description="Comment being replied to")
    content: str = Field(..., min_length=1)
    is_anonymous: bool = False
    anonymous_username: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class CommentUpdate(BaseModel):
    """Owner-editable comment fields."""

    content: str | None = Field(None, min_length=1)
    is_anonymous: bool | None = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("content", "is_anonymous")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        return reject_null(value)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: str
    post_id: str
    parent_comment_id: str | None
    content: str
    author_id: str | None
    user_id: str | None
    is_anonymous: bool
    anonymous_username: str | None
    status: ContentStatus
    upvote_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _attach_utc(cls, value: datetime) -> datetime | None:
        return as_utc(value)


class UpvoteResponse(BaseModel):
    """Result of toggling an upvote on a comment."""

    upvoted: bool
    upvote_count: int

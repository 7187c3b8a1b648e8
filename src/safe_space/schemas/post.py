"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from safe_space.db.time import as_utc

from .common import reject_null

ContentStatus = Literal["active", "moderated", "deleted"]


class PostCreate(BaseModel):
    """Schema for creating a new post.

    Ownership is never read from the payload; any `author_id` or `user_id`
    sent by the client is ignored.
    """

    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")
    category: str | None = Field(None, description="Category, defaults to the configured one")
    is_anonymous: bool = Field(False, description="Hide the author's identity")
    anonymous_username: str | None = Field(None, description="Display name when anonymous")

    model_config = ConfigDict(str_strip_whitespace=True)


class PostUpdate(BaseModel):
    """Owner-editable post fields; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    category: str | None = None
    is_anonymous: bool | None = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("title", "content", "category", "is_anonymous")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        return reject_null(value)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    category: str
    author_id: str | None
    user_id: str | None
    is_anonymous: bool
    anonymous_username: str | None
    status: ContentStatus
    moderation_reason: str | None = None
    moderated_by: str | None = None
    moderated_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", "moderated_at")
    @classmethod
    def _attach_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

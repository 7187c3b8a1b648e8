"""Schemas for the moderator and admin views."""

from pydantic import BaseModel, Field, field_validator

from .comment import CommentResponse
from .common import reject_null
from .post import ContentStatus, PostResponse
from .reaction import ReactionResponse
from .report import ReportResponse


class AdminPostResponse(PostResponse):
    """Post joined with the author's role."""

    author_role: str = "user"


class AdminPostDetail(PostResponse):
    """Post with every comment, reaction and report attached."""

    comments: list[CommentResponse] = Field(default_factory=list)
    reactions: list[ReactionResponse] = Field(default_factory=list)
    reports: list[ReportResponse] = Field(default_factory=list)


class AdminPostUpdate(BaseModel):
    """Fields a moderator may change, including moderation status."""

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    category: str | None = None
    is_anonymous: bool | None = None
    status: ContentStatus | None = None
    moderation_reason: str | None = None

    @field_validator("title", "content", "category", "is_anonymous", "status")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        return reject_null(value)

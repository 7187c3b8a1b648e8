"""Models for comments and their dedicated upvote records."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from safe_space.core.identifiers import new_identifier
from safe_space.db.session import Base
from safe_space.db.time import utcnow

from .post import CONTENT_STATUS_ACTIVE

if TYPE_CHECKING:
    from .post import Post


class Comment(Base):
    """A reply under a post, optionally threaded under another comment."""

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'moderated', 'deleted')",
            name="ck_comments_status",
        ),
        CheckConstraint("upvote_count >= 0", name="ck_comments_upvote_count"),
        Index("ix_comments_post_id_created_at", "post_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_identifier)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_comment_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    anonymous_username: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=CONTENT_STATUS_ACTIVE,
    )
    moderation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderated_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Denormalized; only ever changed by an atomic server-side increment.
    upvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")


class CommentUpvote(Base):
    """Existence row meaning `user_id` currently upvotes `comment_id`."""

    __tablename__ = "comment_upvotes"

    # Composite primary key prevents duplicate upvotes from the same user.
    comment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

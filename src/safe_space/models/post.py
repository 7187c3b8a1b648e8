"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from safe_space.core.identifiers import new_identifier
from safe_space.db.session import Base
from safe_space.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .reaction import Reaction
    from .report import Report

CONTENT_STATUS_ACTIVE = "active"
CONTENT_STATUS_MODERATED = "moderated"
CONTENT_STATUS_DELETED = "deleted"
CONTENT_STATUSES = (
    CONTENT_STATUS_ACTIVE,
    CONTENT_STATUS_MODERATED,
    CONTENT_STATUS_DELETED,
)


class Post(Base):
    """A topic opened by a member of the community.

    Ownership lives in either `author_id` (older rows) or `user_id`; see
    `safe_space.repositories.ownership` for the read path that checks both.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'moderated', 'deleted')",
            name="ck_posts_status",
        ),
        Index("ix_posts_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_identifier)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="general")

    author_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)

    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Only populated when is_anonymous is true.
    anonymous_username: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=CONTENT_STATUS_ACTIVE,
    )
    moderation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderated_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

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

    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        passive_deletes=True,
        order_by="Comment.created_at",
    )
    reactions: Mapped[list[Reaction]] = relationship(
        "Reaction",
        passive_deletes=True,
        order_by="Reaction.created_at",
    )
    reports: Mapped[list[Report]] = relationship(
        "Report",
        passive_deletes=True,
        order_by="Report.created_at",
    )

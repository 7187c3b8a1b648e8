"""Models for user reports against posts and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from safe_space.core.identifiers import new_identifier
from safe_space.db.session import Base
from safe_space.db.time import utcnow

REPORT_STATUS_PENDING = "pending"
REPORT_STATUSES = (REPORT_STATUS_PENDING, "reviewed", "resolved", "dismissed")


class Report(Base):
    """A flag raised by a reporter on a post or a comment.

    There is no uniqueness constraint: the same reporter may file repeated
    reports against the same target.
    """

    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'reviewed', 'resolved', 'dismissed')",
            name="ck_reports_status",
        ),
        CheckConstraint("(post_id IS NULL) <> (comment_id IS NULL)", name="ck_reports_one_target"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_identifier)
    post_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    comment_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    reporter_id: Mapped[str] = mapped_column(String(36), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=REPORT_STATUS_PENDING)
    reviewed_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

"""Models capturing reactions on posts and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from safe_space.core.identifiers import new_identifier
from safe_space.db.session import Base
from safe_space.db.time import utcnow

REACTION_UPVOTE = "upvote"
REACTION_HEART = "heart"
REACTION_HUG = "hug"
REACTION_TYPES = (REACTION_UPVOTE, REACTION_HEART, REACTION_HUG)

_ONE_TARGET = "(post_id IS NULL) <> (comment_id IS NULL)"


class Reaction(Base):
    """One user's reaction of one type on exactly one post or comment."""

    __tablename__ = "reactions"
    __table_args__ = (
        CheckConstraint(
            "reaction_type IN ('upvote', 'heart', 'hug')",
            name="ck_reactions_type",
        ),
        CheckConstraint(_ONE_TARGET, name="ck_reactions_one_target"),
        UniqueConstraint("post_id", "user_id", "reaction_type", name="uq_reactions_post_user_type"),
        UniqueConstraint(
            "comment_id", "user_id", "reaction_type", name="uq_reactions_comment_user_type"
        ),
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
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    reaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class ReactionTally(Base):
    """Denormalized count of reactions per target and reaction type."""

    __tablename__ = "reaction_tallies"
    __table_args__ = (
        CheckConstraint(_ONE_TARGET, name="ck_reaction_tallies_one_target"),
        CheckConstraint("total >= 0", name="ck_reaction_tallies_total"),
        UniqueConstraint("post_id", "reaction_type", name="uq_reaction_tallies_post_type"),
        UniqueConstraint("comment_id", "reaction_type", name="uq_reaction_tallies_comment_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    reaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

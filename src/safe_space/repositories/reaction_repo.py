"""Read access for reactions and their tallies.

Writes go through `safe_space.services.toggle.ToggleEngine`, which keeps the
tallies consistent with the reaction rows.
"""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from safe_space.models import Reaction, ReactionTally

from .base import storage_guard
from .targets import Target

__all__ = ["ReactionRepository"]


class ReactionRepository:
    """Queries over reactions on a single target."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for(self, target: Target) -> list[Reaction]:
        """Return the reactions on `target`, oldest first."""
        stmt = (
            select(Reaction)
            .where(target.matches(Reaction))
            .order_by(Reaction.created_at.asc(), Reaction.id.asc())
        )
        with storage_guard(self.session):
            return list(self.session.scalars(stmt))

    def count_for(self, target: Target) -> int:
        """Return the number of reaction rows on `target`."""
        stmt = select(func.count()).select_from(Reaction).where(target.matches(Reaction))
        with storage_guard(self.session):
            return int(self.session.scalar(stmt) or 0)

    def tallies_for(self, target: Target) -> dict[str, int]:
        """Return the denormalized count per reaction type on `target`."""
        stmt = select(ReactionTally.reaction_type, ReactionTally.total).where(
            target.matches(ReactionTally),
            ReactionTally.total > 0,
        )
        with storage_guard(self.session):
            return {reaction_type: total for reaction_type, total in self.session.execute(stmt)}

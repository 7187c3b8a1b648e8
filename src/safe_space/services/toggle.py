"""Toggle semantics for comment upvotes and generic reactions.

Every operation runs in one transaction:

1. lock the target post/comment row (`SELECT ... FOR UPDATE`), which both
   proves the target exists and serializes concurrent toggles on it;
2. look up the existence row for (target, user, type);
3. delete or insert that row;
4. adjust the denormalized counter with a server-side `n = n + delta`.

Counter values are never computed in Python, so two racing requests can at
worst fail on a unique constraint; they cannot leave the existence rows and
the counter disagreeing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session

from safe_space.core.errors import NotFound
from safe_space.core.identifiers import new_identifier
from safe_space.db.time import utcnow
from safe_space.models import Comment, CommentUpvote, Reaction, ReactionTally
from safe_space.repositories.base import storage_guard
from safe_space.repositories.targets import Target

__all__ = ["ToggleEngine", "ToggleResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    """Existence state after the call and the counter it maintains."""

    active: bool
    total: int


class ToggleEngine:
    """Flip or set per-user existence rows together with their counters."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # Comment upvotes (dedicated table, single counter column)

    def toggle_upvote(self, comment_id: str, user_id: str) -> ToggleResult:
        """Upvote `comment_id` for `user_id`, or withdraw an existing upvote.

        Raises:
            NotFound: If the comment does not exist.
            StorageError: If the store rejects any step.
        """
        with storage_guard(self.session):
            self._lock(Target.comment(comment_id))
            match = (CommentUpvote.comment_id == comment_id, CommentUpvote.user_id == user_id)
            existing = self.session.scalar(select(CommentUpvote.user_id).where(*match))

            if existing is not None:
                removed = self.session.execute(
                    delete(CommentUpvote)
                    .where(*match)
                    .execution_options(synchronize_session=False)
                ).rowcount
                active, delta = False, -removed
            else:
                self.session.execute(
                    insert(CommentUpvote).values(
                        comment_id=comment_id,
                        user_id=user_id,
                        created_at=utcnow(),
                    )
                )
                active, delta = True, 1

            if delta:
                self.session.execute(
                    update(Comment)
                    .where(Comment.id == comment_id)
                    .values(upvote_count=Comment.upvote_count + delta)
                    .execution_options(synchronize_session=False)
                )
            total = self.session.scalar(
                select(Comment.upvote_count).where(Comment.id == comment_id)
            )
            self.session.commit()

        logger.debug("Upvote on comment %s by %s -> %s", comment_id, user_id, active)
        return ToggleResult(active=active, total=int(total or 0))

    # Generic reactions (post or comment, tally per type)

    def toggle_reaction(self, target: Target, user_id: str, reaction_type: str) -> ToggleResult:
        """Add the reaction if absent, remove it if present.

        Raises:
            NotFound: If the target does not exist.
            StorageError: If the store rejects any step.
        """
        with storage_guard(self.session):
            self._lock(target)
            existing_id = self._find_reaction(target, user_id, reaction_type)
            if existing_id is not None:
                removed = self.session.execute(
                    delete(Reaction)
                    .where(Reaction.id == existing_id)
                    .execution_options(synchronize_session=False)
                ).rowcount
                active = False
                self._bump_tally(target, reaction_type, -removed)
            else:
                self._insert_reaction(target, user_id, reaction_type)
                active = True
                self._bump_tally(target, reaction_type, 1)
            total = self._tally(target, reaction_type)
            self.session.commit()

        logger.debug(
            "Reaction %s on %s %s by %s -> %s",
            reaction_type, target.kind, target.id, user_id, active,
        )
        return ToggleResult(active=active, total=total)

    def add_reaction(self, target: Target, user_id: str, reaction_type: str) -> Reaction:
        """Insert a reaction; a duplicate violates the unique constraint.

        Raises:
            NotFound: If the target does not exist.
            StorageError: On a duplicate or any other store failure.
        """
        with storage_guard(self.session):
            self._lock(target)
            reaction_id = self._insert_reaction(target, user_id, reaction_type)
            self._bump_tally(target, reaction_type, 1)
            self.session.commit()
            return self.session.get(Reaction, reaction_id)

    def remove_reaction(self, target: Target, user_id: str, reaction_type: str) -> bool:
        """Delete a reaction if it exists; return whether one was removed.

        Raises:
            NotFound: If the target does not exist.
            StorageError: If the store rejects any step.
        """
        with storage_guard(self.session):
            self._lock(target)
            removed = self.session.execute(
                delete(Reaction).where(
                    target.matches(Reaction),
                    Reaction.user_id == user_id,
                    Reaction.reaction_type == reaction_type,
                )
                .execution_options(synchronize_session=False)
            ).rowcount
            self._bump_tally(target, reaction_type, -removed)
            self.session.commit()
        return removed > 0

    # Internals

    def _lock(self, target: Target) -> None:
        model = target.model
        row = self.session.execute(
            select(model.id).where(model.id == target.id).with_for_update()
        ).first()
        if row is None:
            raise NotFound(f"{target.label} not found")

    def _find_reaction(self, target: Target, user_id: str, reaction_type: str) -> str | None:
        return self.session.scalar(
            select(Reaction.id).where(
                target.matches(Reaction),
                Reaction.user_id == user_id,
                Reaction.reaction_type == reaction_type,
            )
        )

    def _insert_reaction(self, target: Target, user_id: str, reaction_type: str) -> str:
        reaction_id = new_identifier()
        self.session.execute(
            insert(Reaction).values(
                id=reaction_id,
                **target.columns(),
                user_id=user_id,
                reaction_type=reaction_type,
                created_at=utcnow(),
            )
        )
        return reaction_id

    def _bump_tally(self, target: Target, reaction_type: str, delta: int) -> None:
        if not delta:
            return
        changed = self.session.execute(
            update(ReactionTally)
            .where(target.matches(ReactionTally), ReactionTally.reaction_type == reaction_type)
            .values(total=ReactionTally.total + delta)
            .execution_options(synchronize_session=False)
        ).rowcount
        if changed == 0 and delta > 0:
            # First reaction of this type on the target; the target row lock
            # keeps a concurrent first insert from racing this one.
            self.session.execute(
                insert(ReactionTally).values(
                    **target.columns(),
                    reaction_type=reaction_type,
                    total=delta,
                )
            )

    def _tally(self, target: Target, reaction_type: str) -> int:
        total = self.session.scalar(
            select(ReactionTally.total).where(
                target.matches(ReactionTally),
                ReactionTally.reaction_type == reaction_type,
            )
        )
        return int(total or 0)

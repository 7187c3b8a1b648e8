"""Data access helpers for working with posts."""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from safe_space.core.errors import NotFound
from safe_space.db.time import utcnow
from safe_space.models import Post, UserRole
from safe_space.schemas.post import PostCreate

from .base import storage_guard
from .ownership import owned_by, owner_column

__all__ = ["PostRepository", "OWNER_EDITABLE_FIELDS"]

OWNER_EDITABLE_FIELDS = frozenset({"title", "content", "category", "is_anonymous"})
MODERATOR_EDITABLE_FIELDS = OWNER_EDITABLE_FIELDS | {"status", "moderation_reason"}


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        with storage_guard(self.session):
            return self.session.get(Post, post_id)

    def get_or_404(self, post_id: str) -> Post:
        """Return a post or raise `NotFound`."""
        post = self.get(post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def list(
        self,
        *,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Post]:
        """Return posts newest first, optionally filtered by status."""
        stmt = select(Post)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).offset(offset).limit(limit)
        with storage_guard(self.session):
            return list(self.session.scalars(stmt))

    def list_owned(self, user_id: str, *, limit: int = 50, offset: int = 0) -> list[Post]:
        """Return posts owned by `user_id` under either ownership column."""
        stmt = (
            select(Post)
            .where(owned_by(Post, user_id))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        with storage_guard(self.session):
            return list(self.session.scalars(stmt))

    def list_with_author_roles(
        self,
        *,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[tuple[Post, str]]:
        """Return posts newest first, each paired with its author's role."""
        stmt = select(Post, func.coalesce(UserRole.role, "user")).outerjoin(
            UserRole,
            UserRole.user_id == owner_column(Post),
        )
        if status is not None:
            stmt = stmt.where(Post.status == status)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).offset(offset).limit(limit)
        with storage_guard(self.session):
            return [(post, role) for post, role in self.session.execute(stmt)]

    def create(self, owner_id: str, data: PostCreate, *, default_category: str) -> Post:
        """Insert a new post owned by `owner_id` and return it.

        Args:
            owner_id: Verified caller id, stored in `user_id`.
            data: Validated request payload.
            default_category: Used when the payload has no category.
        """
        post = Post(
            title=data.title,
            content=data.content,
            category=data.category or default_category,
            user_id=owner_id,
            is_anonymous=data.is_anonymous,
            anonymous_username=data.anonymous_username if data.is_anonymous else None,
            status="active",
        )
        with storage_guard(self.session):
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

    def update(self, post: Post, changes: dict[str, Any]) -> Post:
        """Apply owner edits; fields outside the owner whitelist are ignored."""
        return self._apply(post, changes, OWNER_EDITABLE_FIELDS)

    def moderate(self, post: Post, changes: dict[str, Any], *, moderator_id: str) -> Post:
        """Apply moderator edits, stamping moderation metadata when hiding."""
        if changes.get("status") == "moderated":
            changes = {
                **changes,
                "moderation_reason": changes.get("moderation_reason")
                or "Content moderated by admin",
            }
            post.moderated_by = moderator_id
            post.moderated_at = utcnow()
        return self._apply(post, changes, MODERATOR_EDITABLE_FIELDS)

    def soft_delete(self, post: Post, *, moderator_id: str) -> Post:
        """Mark a post deleted without removing the row."""
        post.moderated_by = moderator_id
        post.moderated_at = utcnow()
        return self._apply(
            post,
            {"status": "deleted", "moderation_reason": "Post deleted by admin"},
            MODERATOR_EDITABLE_FIELDS,
        )

    def delete(self, post_id: str) -> None:
        """Hard-delete a post; dependent rows cascade in the store."""
        with storage_guard(self.session):
            self.session.execute(
                delete(Post).where(Post.id == post_id).execution_options(synchronize_session=False)
            )
            self.session.commit()
        self.session.expunge_all()

    def _apply(self, post: Post, changes: dict[str, Any], allowed: frozenset[str]) -> Post:
        for key, value in changes.items():
            if key in allowed:
                setattr(post, key, value)
        if not post.is_anonymous:
            post.anonymous_username = None
        post.updated_at = utcnow()
        with storage_guard(self.session):
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

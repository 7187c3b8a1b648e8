"""Data access helpers for working with comments."""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from safe_space.core.errors import InvalidInput, NotFound
from safe_space.db.time import utcnow
from safe_space.models import Comment, Post
from safe_space.schemas.comment import CommentCreate

from .base import storage_guard

__all__ = ["CommentRepository", "VISIBLE_COMMENT_STATUSES"]

OWNER_EDITABLE_FIELDS = frozenset({"content", "is_anonymous"})
# Moderated comments stay in the thread so replies keep their context.
VISIBLE_COMMENT_STATUSES = ("active", "moderated")


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: str) -> Comment | None:
        with storage_guard(self.session):
            return self.session.get(Comment, comment_id)

    def get_or_404(self, comment_id: str) -> Comment:
        """Return a comment or raise `NotFound`."""
        comment = self.get(comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    def list_for_post(self, post_id: str) -> list[Comment]:
        """Return the visible comments of a post, oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.status.in_(VISIBLE_COMMENT_STATUSES))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        with storage_guard(self.session):
            return list(self.session.scalars(stmt))

    def create(self, owner_id: str, post_id: str, data: CommentCreate) -> Comment:
        """Insert a comment owned by `owner_id`.

        Raises:
            NotFound: If the post or the parent comment does not exist.
            InvalidInput: If the parent comment belongs to another post.
        """
        with storage_guard(self.session):
            if self.session.get(Post, post_id) is None:
                raise NotFound("Post not found")
            if data.parent_comment_id is not None:
                parent = self.session.get(Comment, data.parent_comment_id)
                if parent is None:
                    raise NotFound("Parent comment not found")
                if parent.post_id != post_id:
                    raise InvalidInput("parent_comment_id belongs to a different post")

            comment = Comment(
                post_id=post_id,
                parent_comment_id=data.parent_comment_id,
                content=data.content,
                user_id=owner_id,
                is_anonymous=data.is_anonymous,
                anonymous_username=data.anonymous_username if data.is_anonymous else None,
                status="active",
            )
            self.session.add(comment)
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def update(self, comment: Comment, changes: dict[str, Any]) -> Comment:
        """Apply owner edits; other fields are ignored."""
        for key, value in changes.items():
            if key in OWNER_EDITABLE_FIELDS:
                setattr(comment, key, value)
        if not comment.is_anonymous:
            comment.anonymous_username = None
        comment.updated_at = utcnow()
        with storage_guard(self.session):
            self.session.add(comment)
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def delete(self, comment_id: str) -> None:
        """Hard-delete a comment; replies, upvotes and reactions cascade."""
        with storage_guard(self.session):
            self.session.execute(
                delete(Comment)
                .where(Comment.id == comment_id)
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        self.session.expunge_all()

"""The post-or-comment target shared by reactions and reports."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import ColumnElement

from safe_space.core.errors import InvalidInput
from safe_space.core.identifiers import parse_optional_identifier
from safe_space.models import Comment, Post

TargetKind = Literal["post", "comment"]


@dataclass(frozen=True)
class Target:
    """Exactly one post or one comment."""

    kind: TargetKind
    id: str

    @classmethod
    def from_fields(cls, post_id: str | None, comment_id: str | None) -> Target:
        """Build a target from the two optional payload fields.

        Raises:
            InvalidIdentifier: If a supplied id is not a UUID.
            InvalidInput: Unless exactly one of the two is supplied.
        """
        post = parse_optional_identifier(post_id, "post_id")
        comment = parse_optional_identifier(comment_id, "comment_id")
        if post is None and comment is None:
            raise InvalidInput("post_id or comment_id is required")
        if post is not None and comment is not None:
            raise InvalidInput("Only one of post_id or comment_id may be given")
        if post is not None:
            return cls("post", post)
        return cls("comment", comment)  # type: ignore[arg-type]

    @classmethod
    def post(cls, post_id: str) -> Target:
        return cls("post", post_id)

    @classmethod
    def comment(cls, comment_id: str) -> Target:
        return cls("comment", comment_id)

    @property
    def model(self) -> type[Post] | type[Comment]:
        """ORM class of the target row."""
        return Post if self.kind == "post" else Comment

    @property
    def label(self) -> str:
        return self.kind.capitalize()

    def columns(self) -> dict[str, str | None]:
        """Foreign-key column values for a row pointing at this target."""
        return {
            "post_id": self.id if self.kind == "post" else None,
            "comment_id": self.id if self.kind == "comment" else None,
        }

    def matches(self, model: Any) -> ColumnElement[bool]:
        """SQL filter selecting rows of `model` that point at this target."""
        if self.kind == "post":
            return model.post_id == self.id
        return model.comment_id == self.id

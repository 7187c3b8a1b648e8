# src/safe_space/models/__init__.py
"""SQLAlchemy models for the Safe Space application."""

from .comment import Comment, CommentUpvote
from .post import Post
from .reaction import Reaction, ReactionTally
from .report import Report
from .user_role import UserRole

__all__ = [
    "Comment", "CommentUpvote",
    "Post",
    "Reaction", "ReactionTally",
    "Report",
    "UserRole",
]

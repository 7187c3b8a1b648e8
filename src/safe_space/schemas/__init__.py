"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import AdminPostDetail, AdminPostResponse, AdminPostUpdate
from .comment import CommentCreate, CommentResponse, CommentUpdate, UpvoteResponse
from .common import ErrorResponse, SuccessResponse
from .post import PostCreate, PostResponse, PostUpdate
from .reaction import (
    CommentReactionRequest,
    CountResponse,
    ReactionRequest,
    ReactionResponse,
    ToggleResponse,
)
from .report import ReportCreate, ReportResponse
from .user import RoleResponse

__all__ = [
    "AdminPostDetail", "AdminPostResponse", "AdminPostUpdate",
    "CommentCreate", "CommentResponse", "CommentUpdate", "UpvoteResponse",
    "ErrorResponse", "SuccessResponse",
    "PostCreate", "PostResponse", "PostUpdate",
    "CommentReactionRequest", "CountResponse", "ReactionRequest",
    "ReactionResponse", "ToggleResponse",
    "ReportCreate", "ReportResponse",
    "RoleResponse",
]

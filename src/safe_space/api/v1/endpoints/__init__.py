# src/safe_space/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .comments import router as comments_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .reports import router as reports_router
from .users import router as users_router

__all__ = [
    "posts_router",
    "comments_router",
    "reactions_router",
    "reports_router",
    "admin_router",
    "users_router",
]

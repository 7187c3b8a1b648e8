# src/safe_space/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    comments_router,
    posts_router,
    reactions_router,
    reports_router,
    users_router,
)

__all__ = [
    "posts_router",
    "comments_router",
    "reactions_router",
    "reports_router",
    "admin_router",
    "users_router",
]

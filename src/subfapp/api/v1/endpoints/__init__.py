"""API endpoint modules for version 1."""

from .communities import router as communities_router
from .posts import router as posts_router
from .uploads import router as uploads_router
from .users import router as users_router

__all__ = [
    "communities_router",
    "posts_router",
    "uploads_router",
    "users_router",
]

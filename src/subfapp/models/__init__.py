# src/subfapp/models/__init__.py
"""SQLAlchemy models for the Subfapp application."""

from .community import Community, CommunityMember
from .post import Post
from .vote import PostVote

__all__ = [
    "Community", "CommunityMember",
    "Post", "PostVote",
]

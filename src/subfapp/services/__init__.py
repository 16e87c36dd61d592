"""Business logic services for the Subfapp application."""

from .counter import MemberCounter
from .membership import MembershipLedger
from .visibility import can_create_post, can_view_posts

__all__ = [
    "MemberCounter",
    "MembershipLedger",
    "can_create_post",
    "can_view_posts",
]

"""Visibility gate deciding who may read and write a community's posts."""
from __future__ import annotations

from sqlalchemy.orm import Session

from subfapp.models import Community
from subfapp.schemas.identity import Identity
from subfapp.services.membership import MembershipLedger

__all__ = ["can_view_posts", "can_create_post"]


def can_view_posts(db: Session, community: Community, identity: Identity | None) -> bool:
    """Return True if ``identity`` may list or read the community's posts.

    Public communities are readable by anyone, including anonymous callers.
    Private communities are readable by members only. Evaluated against
    current ledger state on every call.
    """
    if community.is_public:
        return True
    if identity is None:
        return False
    return MembershipLedger(db).is_member(community.id, identity.id)


def can_create_post(db: Session, community: Community, identity: Identity | None) -> bool:
    """Return True if ``identity`` may post in the community.

    Posting always requires membership, even where the community is public
    and anyone can read.
    """
    if identity is None:
        return False
    return MembershipLedger(db).is_member(community.id, identity.id)

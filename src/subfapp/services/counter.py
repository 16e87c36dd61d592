"""Denormalized member counter kept alongside the membership ledger."""
from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from subfapp.models import Community, CommunityMember
from subfapp.services.errors import CommunityNotFoundError

# Configure logger for this module
logger = logging.getLogger(__name__)

__all__ = ["MemberCounter"]


class MemberCounter:
    """Maintains ``Community.member_count`` as a display cache.

    ``increment`` and ``decrement`` only flush; the membership ledger commits
    them in the same transaction as the record change they mirror. The
    ledger stays authoritative and ``recount`` rebuilds the cache from it.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the counter with a SQLAlchemy session."""
        self.session = session

    def increment(self, community_id: int) -> None:
        """Add one to the stored member count."""
        self.session.execute(
            update(Community)
            .where(Community.id == community_id)
            .values(member_count=Community.member_count + 1)
        )
        self.session.flush()

    def decrement(self, community_id: int) -> None:
        """Subtract one from the stored member count, never going below zero."""
        self.session.execute(
            update(Community)
            .where(Community.id == community_id, Community.member_count > 0)
            .values(member_count=Community.member_count - 1)
        )
        self.session.flush()

    def count_records(self, community_id: int) -> int:
        """Return the number of membership records for a community."""
        return self.session.scalar(
            select(func.count())
            .select_from(CommunityMember)
            .where(CommunityMember.community_id == community_id)
        ) or 0

    def recount(self, community_id: int) -> int:
        """Overwrite the stored count with the true ledger size and return it.

        A disagreement between the stored and true value is logged but never
        raised; the corrected value is committed either way.

        Raises:
            CommunityNotFoundError: If the community does not exist.
        """
        community = self.session.get(Community, community_id)
        if community is None:
            raise CommunityNotFoundError(community_id)

        actual = self.count_records(community_id)
        if community.member_count != actual:
            logger.warning(
                "Member counter diverged for community %s: stored=%d actual=%d",
                community_id,
                community.member_count,
                actual,
            )
            community.member_count = actual
        self.session.commit()
        return actual

    def recount_all(self) -> dict[int, int]:
        """Run ``recount`` for every community and return the corrected counts."""
        community_ids = self.session.scalars(select(Community.id).order_by(Community.id)).all()
        results: dict[int, int] = {}
        for community_id in community_ids:
            results[community_id] = self.recount(community_id)
        logger.info("Recounted members for %d communities", len(results))
        return results

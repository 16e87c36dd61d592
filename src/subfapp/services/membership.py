"""Membership ledger: the authoritative record of who belongs where."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from subfapp.models import Community, CommunityMember
from subfapp.models.community import ROLE_ADMIN, ROLE_MEMBER
from subfapp.services.counter import MemberCounter
from subfapp.services.errors import AlreadyMemberError, CommunityNotFoundError, NotAMemberError

# Configure logger for this module
logger = logging.getLogger(__name__)

__all__ = ["MembershipLedger"]


class MembershipLedger:
    """Add, remove and look up membership records.

    ``join`` and ``leave`` adjust the member counter inside the same
    transaction as the record change, so both commit or neither does.
    """

    def __init__(self, session: Session, counter: MemberCounter | None = None) -> None:
        """Initialize the ledger with a SQLAlchemy session."""
        self.session = session
        self.counter = counter or MemberCounter(session)

    def get(self, community_id: int, identity_id: str | None) -> CommunityMember | None:
        """Return the membership record for a pair, if any."""
        if not identity_id:
            return None
        return self.session.get(CommunityMember, (community_id, identity_id))

    def is_member(self, community_id: int, identity_id: str | None) -> bool:
        """Return True when the identity holds a membership in the community.

        Unknown communities, unknown identities and a missing identity all
        yield False.
        """
        return self.get(community_id, identity_id) is not None

    def join(self, community_id: int, identity_id: str) -> CommunityMember:
        """Admit an identity as an ordinary member.

        Raises:
            CommunityNotFoundError: If the community does not exist.
            AlreadyMemberError: If a record for the pair already exists.
        """
        if self.session.get(Community, community_id) is None:
            raise CommunityNotFoundError(community_id)
        if self.is_member(community_id, identity_id):
            raise AlreadyMemberError(community_id, identity_id)

        membership = CommunityMember(
            community_id=community_id,
            identity_id=identity_id,
            role=ROLE_MEMBER,
        )
        try:
            self.session.add(membership)
            self.session.flush()
            self.counter.increment(community_id)
            self.session.commit()
        except IntegrityError as err:
            # A concurrent join for the same pair committed first.
            self.session.rollback()
            raise AlreadyMemberError(community_id, identity_id) from err

        self.session.refresh(membership)
        logger.info("Identity %s joined community %s", identity_id, community_id)
        return membership

    def leave(self, community_id: int, identity_id: str) -> None:
        """Remove an identity's membership.

        The record is removed with a single DELETE and the counter only moves
        when that statement matched a row, so a concurrent leave for the same
        pair loses cleanly.

        Raises:
            NotAMemberError: If no record exists for the pair.
        """
        result = self.session.execute(
            delete(CommunityMember).where(
                CommunityMember.community_id == community_id,
                CommunityMember.identity_id == identity_id,
            )
        )
        if result.rowcount != 1:
            self.session.rollback()
            raise NotAMemberError(community_id, identity_id)

        self.counter.decrement(community_id)
        self.session.commit()
        logger.info("Identity %s left community %s", identity_id, community_id)

    def create_with_creator(self, community_id: int, identity_id: str) -> CommunityMember:
        """Record the creator as the community's first, admin member.

        Only called while creating the community; the caller commits so the
        community row, this record and the counter land together.
        """
        membership = CommunityMember(
            community_id=community_id,
            identity_id=identity_id,
            role=ROLE_ADMIN,
        )
        self.session.add(membership)
        self.session.flush()
        self.counter.increment(community_id)
        return membership

    def list_members(self, community_id: int) -> list[CommunityMember]:
        """Return a community's members, earliest first."""
        result = self.session.scalars(
            select(CommunityMember)
            .where(CommunityMember.community_id == community_id)
            .order_by(CommunityMember.joined_at, CommunityMember.identity_id)
        )
        return list(result)

    def list_for_identity(self, identity_id: str) -> list[CommunityMember]:
        """Return every membership held by an identity, most recent first."""
        result = self.session.scalars(
            select(CommunityMember)
            .where(CommunityMember.identity_id == identity_id)
            .order_by(CommunityMember.joined_at.desc(), CommunityMember.community_id)
        )
        return list(result)

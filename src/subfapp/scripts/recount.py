# src/subfapp/scripts/recount.py
"""
Job to rebuild community member counters from the membership ledger.

Run periodically (or on demand after an incident) to correct any drift
between ``community.member_count`` and the actual membership records.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from subfapp.core.settings import settings
from subfapp.db.session import SessionLocal
from subfapp.services.counter import MemberCounter
from subfapp.services.errors import CommunityNotFoundError

logger = logging.getLogger(__name__)


def recount_communities(db: Session, community_ids: list[int] | None = None) -> dict[int, int]:
    """Recount the given communities, or every community when none are given.

    Args:
        db: Database session
        community_ids: Optional subset of community ids

    Returns:
        Mapping of community id to corrected member count
    """
    counter = MemberCounter(db)
    if not community_ids:
        return counter.recount_all()
    return {community_id: counter.recount(community_id) for community_id in community_ids}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rebuild community member counters.")
    parser.add_argument(
        "community_ids",
        metavar="ID",
        type=int,
        nargs="*",
        help="Community ids to recount (default: all)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    db = SessionLocal()
    try:
        results = recount_communities(db, args.community_ids)
    except CommunityNotFoundError as exc:
        print(f"Community not found: {exc.ref}", file=sys.stderr)
        return 1
    finally:
        db.close()

    for community_id, count in results.items():
        print(f"community={community_id} members={count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

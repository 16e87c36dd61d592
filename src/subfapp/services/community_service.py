"""Service-level helpers for creating, finding and editing communities."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from subfapp.models import Community
from subfapp.schemas.community import CommunityCreate
from subfapp.schemas.identity import Identity
from subfapp.services.errors import (
    CommunityNotFoundError,
    NotCommunityCreatorError,
    SlugTakenError,
)
from subfapp.services.membership import MembershipLedger
from subfapp.services.slug import slugify

# Configure logger for this module
logger = logging.getLogger(__name__)

__all__ = [
    "create_community",
    "get_community",
    "get_community_by_slug",
    "list_communities",
    "update_community_images",
]


def create_community(db: Session, data: CommunityCreate, creator: Identity) -> Community:
    """Create a community with its creator as the first, admin member.

    The community row, the creator's membership and the counter update are
    committed in one transaction.

    Raises:
        ValueError: If the name yields an empty slug.
        SlugTakenError: If another community already owns the slug.
    """
    slug = slugify(data.name)
    existing = db.scalar(select(Community.id).where(Community.slug == slug))
    if existing is not None:
        raise SlugTakenError(slug)

    community = Community(
        name=data.name,
        slug=slug,
        description=data.description,
        is_public=data.is_public,
        image_url=data.image_url,
        creator_id=creator.id,
        member_count=0,
    )
    try:
        db.add(community)
        db.flush()
        MembershipLedger(db).create_with_creator(community.id, creator.id)
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise SlugTakenError(slug) from err

    db.refresh(community)
    logger.info("Identity %s created community %s (%s)", creator.id, community.id, slug)
    return community


def get_community(db: Session, community_id: int) -> Community:
    """Return a community by id.

    Raises:
        CommunityNotFoundError: If no community has that id.
    """
    community = db.get(Community, community_id)
    if community is None:
        raise CommunityNotFoundError(community_id)
    return community


def get_community_by_slug(db: Session, slug: str) -> Community:
    """Return a community by slug.

    The input is normalized with ``slugify`` first, so a display name such
    as ``"Rust Fans"`` resolves to ``rust-fans``.

    Raises:
        CommunityNotFoundError: If no community has that slug.
    """
    try:
        normalized = slugify(slug)
    except ValueError as err:
        raise CommunityNotFoundError(slug) from err
    community = db.scalar(select(Community).where(Community.slug == normalized))
    if community is None:
        raise CommunityNotFoundError(slug)
    return community


def list_communities(db: Session, limit: int = 100) -> Sequence[Community]:
    """Return communities, most members first."""
    return db.scalars(
        select(Community)
        .order_by(Community.member_count.desc(), Community.created_at, Community.id)
        .limit(limit)
    ).all()


def update_community_images(
    db: Session,
    community: Community,
    identity: Identity,
    *,
    image_url: str | None = None,
    banner_url: str | None = None,
) -> Community:
    """Replace the community's avatar and/or banner image.

    Raises:
        NotCommunityCreatorError: If ``identity`` did not create the community.
    """
    if identity.id != community.creator_id:
        raise NotCommunityCreatorError()

    if image_url is not None:
        community.image_url = image_url
    if banner_url is not None:
        community.banner_url = banner_url
    db.commit()
    db.refresh(community)
    return community

"""Community-related endpoints for the Subfapp API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from subfapp.api.v1.dependencies import (
    CommunityDep,
    CurrentIdentityDep,
    OptionalIdentityDep,
    SessionDep,
)
from subfapp.core.settings import settings
from subfapp.models import Community, CommunityMember
from subfapp.schemas.community import (
    CommunityCreate,
    CommunityImagesUpdate,
    CommunityResponse,
    MembershipResponse,
    MembershipStatus,
    RecountResponse,
)
from subfapp.services import community_service
from subfapp.services.counter import MemberCounter
from subfapp.services.errors import (
    AlreadyMemberError,
    CommunityNotFoundError,
    NotAMemberError,
    NotCommunityCreatorError,
    SlugTakenError,
)
from subfapp.services.membership import MembershipLedger
from subfapp.services.visibility import can_create_post, can_view_posts

router = APIRouter(prefix="/communities", tags=["communities"])


@router.get("/", response_model=list[CommunityResponse])
async def list_communities(
    db: SessionDep,
    limit: int = Query(50, ge=1, description="Maximum number of communities to return"),
) -> list[Community]:
    """List communities, most members first."""
    limit = min(limit, settings.community_list_limit)
    return list(community_service.list_communities(db, limit=limit))


@router.get("/slug/{slug}", response_model=CommunityResponse)
async def get_community_by_slug(slug: str, db: SessionDep) -> Community:
    """Get a specific community by slug."""
    try:
        return community_service.get_community_by_slug(db, slug)
    except CommunityNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Community not found"
        ) from err


@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(community: CommunityDep) -> Community:
    """Get a specific community by ID."""
    return community


@router.post("/",
          response_model=CommunityResponse,
          status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> Community:
    """Create a new community; the caller becomes its admin member."""
    try:
        return community_service.create_community(db, community_data, current_identity)
    except SlugTakenError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(err)
        ) from err
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err)
        ) from err


@router.post("/{community_id}/join",
          response_model=MembershipResponse,
          status_code=status.HTTP_201_CREATED)
async def join_community(
    community: CommunityDep,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> CommunityMember:
    """Join a community."""
    try:
        return MembershipLedger(db).join(community.id, current_identity.id)
    except AlreadyMemberError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(err)
        ) from err


@router.delete(
    "/{community_id}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def leave_community(
    community_id: int,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> Response:
    """Leave a community."""
    try:
        MembershipLedger(db).leave(community_id, current_identity.id)
    except NotAMemberError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err)
        ) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{community_id}/membership", response_model=MembershipStatus)
async def get_membership_status(
    community: CommunityDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
) -> MembershipStatus:
    """Report the caller's membership and what the visibility gate allows them."""
    record = MembershipLedger(db).get(community.id, identity.id if identity else None)
    return MembershipStatus(
        is_member=record is not None,
        role=record.role if record else None,
        can_view_posts=can_view_posts(db, community, identity),
        can_create_post=can_create_post(db, community, identity),
    )


@router.get("/{community_id}/members", response_model=list[MembershipResponse])
async def list_members(
    community: CommunityDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
) -> list[CommunityMember]:
    """List a community's members; private rosters are visible to members only."""
    if not can_view_posts(db, community, identity):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Join this community to see its members"
        )
    return MembershipLedger(db).list_members(community.id)


@router.patch("/{community_id}/images", response_model=CommunityResponse)
async def update_images(
    payload: CommunityImagesUpdate,
    community: CommunityDep,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> Community:
    """Replace the community avatar and/or banner (creator only)."""
    try:
        return community_service.update_community_images(
            db,
            community,
            current_identity,
            image_url=payload.image_url,
            banner_url=payload.banner_url,
        )
    except NotCommunityCreatorError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err)
        ) from err


@router.post("/{community_id}/recount", response_model=RecountResponse)
async def recount_members(
    community: CommunityDep,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> RecountResponse:
    """Rebuild the member counter from the membership ledger (creator only)."""
    if current_identity.id != community.creator_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(NotCommunityCreatorError())
        )
    previous = community.member_count
    actual = MemberCounter(db).recount(community.id)
    return RecountResponse(
        community_id=community.id,
        previous_count=previous,
        member_count=actual,
        diverged=previous != actual,
    )

"""Endpoints describing the calling identity."""

from fastapi import APIRouter

from subfapp.api.v1.dependencies import CurrentIdentityDep, SessionDep
from subfapp.models import CommunityMember
from subfapp.schemas.community import MembershipResponse
from subfapp.schemas.identity import Identity
from subfapp.services.membership import MembershipLedger

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=Identity)
async def read_me(current_identity: CurrentIdentityDep) -> Identity:
    """Return the identity carried by the bearer token."""
    return current_identity


@router.get("/me/communities", response_model=list[MembershipResponse])
async def my_communities(
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> list[CommunityMember]:
    """List the communities the caller has joined, derived from the ledger."""
    return MembershipLedger(db).list_for_identity(current_identity.id)

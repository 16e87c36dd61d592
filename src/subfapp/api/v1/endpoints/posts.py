"""Post-related endpoints for the Subfapp API.

Posts are always addressed through their community so that the visibility
gate runs on every request.
"""

from fastapi import APIRouter, HTTPException, Query, status

from subfapp.api.v1.dependencies import (
    CommunityDep,
    CurrentIdentityDep,
    OptionalIdentityDep,
    SessionDep,
)
from subfapp.models import Post
from subfapp.schemas.post import PostCreate, PostResponse, VoteCreate
from subfapp.services import post_service
from subfapp.services.errors import (
    PostingNotAllowedError,
    PostNotFoundError,
    PostsNotVisibleError,
)

router = APIRouter(prefix="/communities/{community_id}/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    community: CommunityDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    before: int | None = Query(None, description="Return posts with an id below this one"),
) -> list[Post]:
    """List a community's posts, newest first.

    Raises:
        HTTPException: 403 if the community is private and the caller is not a member.
    """
    try:
        return post_service.list_posts(db, community, identity, limit=limit, before=before)
    except PostsNotVisibleError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err)
        ) from err


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    community: CommunityDep,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> Post:
    """Create a post in a community the caller belongs to."""
    try:
        return post_service.create_post(db, community, current_identity, post_data)
    except PostingNotAllowedError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err)
        ) from err


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    community: CommunityDep,
    identity: OptionalIdentityDep,
    db: SessionDep,
) -> Post:
    """Get a specific post from a community."""
    try:
        return post_service.get_post(db, community, post_id, identity)
    except PostsNotVisibleError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err)
        ) from err
    except PostNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err)
        ) from err


@router.post("/{post_id}/vote", response_model=PostResponse)
async def vote_post(
    post_id: int,
    payload: VoteCreate,
    community: CommunityDep,
    current_identity: CurrentIdentityDep,
    db: SessionDep,
) -> Post:
    """Up- or down-vote a post (members only)."""
    try:
        return post_service.vote(db, community, post_id, current_identity, payload.direction)
    except PostingNotAllowedError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err)
        ) from err
    except PostNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err)
        ) from err

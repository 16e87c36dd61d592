"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from subfapp.core.security import InvalidTokenError, decode_identity
from subfapp.db.session import get_db
from subfapp.models import Community
from subfapp.schemas.identity import Identity
from subfapp.services.community_service import get_community
from subfapp.services.errors import CommunityNotFoundError

# HTTP Bearer schemes; the optional one lets anonymous callers through.
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> Identity:
    """Get the authenticated identity from the bearer token.

    Raises:
        HTTPException: If the token is invalid.
    """
    try:
        return decode_identity(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_optional_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
) -> Identity | None:
    """Return the caller's identity, or None when no token is supplied.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    try:
        return decode_identity(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_community_or_404(community_id: int, db: SessionDep) -> Community:
    """Resolve a community path parameter."""
    try:
        return get_community(db, community_id)
    except CommunityNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Community not found",
        ) from err


# Type aliases for identity and community dependencies
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
CommunityDep = Annotated[Community, Depends(get_community_or_404)]

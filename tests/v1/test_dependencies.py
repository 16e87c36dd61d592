# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from subfapp.api.v1.dependencies import (
    get_community_or_404,
    get_current_identity,
    get_optional_identity,
)
from subfapp.core.security import InvalidTokenError, create_access_token, decode_identity


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestDecodeIdentity:
    """Test the token decoding helper."""

    def test_round_trip_claims(self):
        token = create_access_token("user-42", "Forty Two")

        identity = decode_identity(token)
        assert identity.id == "user-42"
        assert identity.display_name == "Forty Two"

    def test_display_name_optional(self):
        identity = decode_identity(create_access_token("user-43"))
        assert identity.display_name is None

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            decode_identity("not.a.token")


class TestGetCurrentIdentity:
    """Test the get_current_identity dependency function."""

    def test_valid_token(self):
        identity = get_current_identity(_credentials(create_access_token("user-1", "One")))
        assert identity.id == "user-1"

    def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            get_current_identity(_credentials("invalid"))

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Could not validate credentials" in exc_info.value.detail


class TestGetOptionalIdentity:
    """Test the get_optional_identity dependency function."""

    def test_missing_credentials(self):
        assert get_optional_identity(None) is None

    def test_valid_token(self):
        identity = get_optional_identity(_credentials(create_access_token("user-2")))
        assert identity is not None
        assert identity.id == "user-2"

    def test_invalid_token_still_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            get_optional_identity(_credentials("invalid"))
        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED


class TestGetCommunityOr404:
    """Test community path resolution."""

    def test_existing(self, db_session, public_community):
        assert get_community_or_404(public_community.id, db_session).id == public_community.id

    def test_missing(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            get_community_or_404(999, db_session)
        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND

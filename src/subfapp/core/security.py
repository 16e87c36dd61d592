"""Bearer token helpers for identities issued by the identity provider."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from subfapp.core.settings import settings
from subfapp.schemas.identity import Identity


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


def create_access_token(
    identity_id: str,
    display_name: str | None = None,
    extra_claims: dict[str, str] | None = None,
) -> str:
    """Create a signed JWT carrying an identity.

    Used by tests and local tooling; production tokens come from the
    identity provider and share the same secret and claim layout.
    """
    to_encode: dict[str, object] = {"sub": identity_id}
    if display_name:
        to_encode["name"] = display_name
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_identity(token: str) -> Identity:
    """Verify a bearer token and return the identity it names.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Could not validate credentials")
    return Identity(id=str(subject), display_name=payload.get("name"))

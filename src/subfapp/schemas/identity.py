"""Identity supplied by the external identity provider."""

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Authenticated caller identity.

    Built from the verified bearer token and passed explicitly into every
    membership and visibility call.
    """

    id: str = Field(..., min_length=1, max_length=128, description="Stable identity id")
    display_name: str | None = Field(None, description="Optional display name")

# src/subfapp/schemas/community.py
"""Community-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subfapp.utils.data_url import validate_image_reference


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=2000)
    is_public: bool = True
    image_url: str | None = Field(None, description="Path returned by an upload endpoint")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject names that are blank once surrounding whitespace is removed."""
        v = v.strip()
        if not v:
            raise ValueError("Community name must not be blank")
        return v

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Only upload paths and inline image data URLs are accepted."""
        return None if v is None else validate_image_reference(v)


class CommunityImagesUpdate(BaseModel):
    """Schema for replacing a community's avatar or banner image."""

    image_url: str | None = None
    banner_url: str | None = None

    @field_validator("image_url", "banner_url")
    @classmethod
    def validate_image_refs(cls, v: str | None) -> str | None:
        return None if v is None else validate_image_reference(v)


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: int
    name: str
    slug: str
    description: str
    is_public: bool
    member_count: int
    created_at: datetime
    creator_id: str
    image_url: str | None
    banner_url: str | None

    model_config = ConfigDict(from_attributes=True)


class MembershipResponse(BaseModel):
    """Schema for a single membership ledger record."""

    community_id: int
    identity_id: str
    role: Literal["member", "admin"]
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MembershipStatus(BaseModel):
    """The caller's standing in a community as decided by the visibility gate."""

    is_member: bool
    role: Literal["member", "admin"] | None = None
    can_view_posts: bool
    can_create_post: bool


class RecountResponse(BaseModel):
    """Result of reconciling a community's member counter."""

    community_id: int
    previous_count: int
    member_count: int
    diverged: bool

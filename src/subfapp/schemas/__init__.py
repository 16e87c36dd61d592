"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .community import (
    CommunityCreate,
    CommunityImagesUpdate,
    CommunityResponse,
    MembershipResponse,
    MembershipStatus,
    RecountResponse,
)
from .identity import Identity
from .post import PostCreate, PostResponse, VoteCreate
from .upload import Base64ImageUpload, Base64ImageUploadResponse, BannerUploadResponse

__all__ = [
    "CommunityCreate", "CommunityImagesUpdate", "CommunityResponse",
    "MembershipResponse", "MembershipStatus", "RecountResponse",
    "Identity",
    "PostCreate", "PostResponse", "VoteCreate",
    "Base64ImageUpload", "Base64ImageUploadResponse", "BannerUploadResponse",
]

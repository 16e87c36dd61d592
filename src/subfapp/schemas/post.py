# src/subfapp/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subfapp.core.settings import settings
from subfapp.utils.data_url import validate_image_reference


class PostCreate(BaseModel):
    """Schema for creating a new post inside a community."""

    title: str = Field(..., min_length=1, description="Post title")
    body: str = Field(..., min_length=1, description="Post body text")
    images: list[str] = Field(default_factory=list, description="Ordered image references")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        if len(v) > settings.post_title_max_length:
            raise ValueError(
                f"Title must be at most {settings.post_title_max_length} characters"
            )
        return v

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if len(v) > settings.post_body_max_length:
            raise ValueError(
                f"Body must be at most {settings.post_body_max_length} characters"
            )
        return v

    @field_validator("images")
    @classmethod
    def validate_images(cls, v: list[str]) -> list[str]:
        """Bound the image count and the size of each inline image.

        Each entry is either a relative path returned by an upload endpoint
        or an inline ``data:image/...;base64,`` URL.
        """
        if len(v) > settings.post_max_images:
            raise ValueError(f"A post may carry at most {settings.post_max_images} images")

        for ref in v:
            validate_image_reference(ref)
        return v


class VoteCreate(BaseModel):
    """Schema for casting a vote on a post."""

    direction: Literal[1, -1] = Field(..., description="+1 for upvote, -1 for downvote")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    body: str
    images: list[str]
    author_id: str
    author_name: str
    community_id: int
    community_name: str
    created_at: datetime
    votes: int
    comment_count: int

    model_config = ConfigDict(from_attributes=True)

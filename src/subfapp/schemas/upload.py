"""Upload endpoint schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Base64ImageUpload(BaseModel):
    """JSON body carrying an inline base64 image."""

    image: str = Field(..., description="data:image/<type>;base64,<payload>")
    file_name: str = Field(..., alias="fileName", min_length=1)
    directory: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class Base64ImageUploadResponse(BaseModel):
    """Result of storing an inline image."""

    success: bool
    message: str
    path: str


class BannerUploadResponse(BaseModel):
    """Result of storing a multipart banner upload."""

    image_url: str = Field(..., serialization_alias="imageUrl")

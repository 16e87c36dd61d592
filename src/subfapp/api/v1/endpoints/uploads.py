"""Image upload endpoints.

Two request styles are accepted, multipart and inline base64, and both are
stored through the same service and return a relative path.
"""

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from subfapp.api.v1.dependencies import CurrentIdentityDep
from subfapp.core.settings import settings
from subfapp.schemas.upload import (
    Base64ImageUpload,
    Base64ImageUploadResponse,
    BannerUploadResponse,
)
from subfapp.services.errors import UploadError
from subfapp.services.uploads import store_base64_image, store_upload

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/banner", response_model=BannerUploadResponse)
async def upload_banner(
    _current_identity: CurrentIdentityDep,
    file: UploadFile = File(...),
) -> BannerUploadResponse:
    """Store a multipart banner image and return its path."""
    # Read one byte past the limit so oversized files are detected without
    # buffering them completely.
    data = await file.read(settings.upload_max_bytes + 1)
    try:
        path = store_upload("banners", file.filename, file.content_type, data)
    except UploadError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err)
        ) from err
    return BannerUploadResponse(image_url=path)


@router.post("/image", response_model=Base64ImageUploadResponse)
async def upload_image(
    payload: Base64ImageUpload,
    _current_identity: CurrentIdentityDep,
) -> Base64ImageUploadResponse:
    """Store an inline base64 image and return its path."""
    try:
        path = store_base64_image(payload.directory, payload.file_name, payload.image)
    except UploadError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err)
        ) from err
    return Base64ImageUploadResponse(
        success=True,
        message="Image uploaded successfully",
        path=path,
    )

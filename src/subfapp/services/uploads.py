"""Local image storage backing the upload endpoints.

Both upload styles (multipart file and inline base64) share one contract:
the image is written below ``settings.upload_dir/<category>/`` under a
generated unique name, and the returned relative path is what communities
and posts store.
"""
from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from subfapp.core.settings import settings
from subfapp.services.errors import UploadError
from subfapp.services.slug import slugify
from subfapp.utils.data_url import decode_image_data_url

# Configure logger for this module
logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

__all__ = ["IMAGE_EXTENSIONS", "store_upload", "store_base64_image"]


def _target_name(filename: str | None, content_type: str) -> str:
    stem = Path(filename or "").stem
    try:
        prefix = slugify(stem)[:40]
    except ValueError:
        prefix = "image"
    return f"{prefix}-{uuid.uuid4().hex}{IMAGE_EXTENSIONS[content_type]}"


def _validate(category: str, content_type: str | None, size: int) -> str:
    if category not in settings.upload_categories:
        raise UploadError(f"Unknown upload directory: {category}")
    normalized = (content_type or "").split(";")[0].strip().lower()
    if normalized not in IMAGE_EXTENSIONS:
        raise UploadError("Please upload an image file")
    if size == 0:
        raise UploadError("No file uploaded")
    if size > settings.upload_max_bytes:
        raise UploadError("Image size should be less than 5MB")
    return normalized


def store_upload(
    category: str,
    filename: str | None,
    content_type: str | None,
    data: bytes,
) -> str:
    """Persist raw image bytes and return their public relative path.

    Raises:
        UploadError: If the category, type or size is rejected or the write fails.
    """
    try:
        normalized = _validate(category, content_type, len(data))
    except UploadError as exc:
        logger.warning("Rejected upload %r into %s: %s", filename, category, exc)
        raise

    base_dir = Path(settings.upload_dir) / category
    name = _target_name(filename, normalized)
    try:
        os.makedirs(base_dir, exist_ok=True)
        (base_dir / name).write_bytes(data)
    except OSError as exc:
        logger.error("Failed to write upload %s: %s", base_dir / name, exc)
        raise UploadError("Failed to write file") from exc

    logger.info("Stored upload %s/%s (%d bytes)", category, name, len(data))
    return f"{settings.upload_url_prefix.rstrip('/')}/{category}/{name}"


def store_base64_image(category: str, filename: str | None, data_url: str) -> str:
    """Decode a ``data:image/...;base64,`` payload and persist it.

    Raises:
        UploadError: If the payload is malformed or rejected.
    """
    try:
        content_type, data = decode_image_data_url(data_url)
    except ValueError as exc:
        logger.warning("Rejected base64 upload %r: %s", filename, exc)
        raise UploadError(str(exc)) from exc
    return store_upload(category, filename, content_type, data)

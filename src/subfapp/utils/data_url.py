# src/subfapp/utils/data_url.py
"""Helpers for ``data:image/...;base64,`` payloads."""

from __future__ import annotations

import base64
import binascii
import re

from subfapp.core.settings import settings

_DATA_URL_RE = re.compile(r"^data:(image/[A-Za-z0-9.+-]+);base64,(.*)$", re.DOTALL)


def is_data_url(value: str) -> bool:
    """Return True when ``value`` looks like an inline base64 image."""
    return value.startswith("data:")


def decode_image_data_url(value: str) -> tuple[str, bytes]:
    """Split an image data URL into its content type and decoded bytes.

    Args:
        value: String of the form ``data:image/<subtype>;base64,<payload>``.

    Returns:
        Tuple of ``(content_type, payload_bytes)``.

    Raises:
        ValueError: If the prefix is not an image data URL or the payload is
            not valid base64.
    """
    match = _DATA_URL_RE.match(value.strip())
    if match is None:
        raise ValueError("Invalid image format")
    content_type, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as err:
        raise ValueError("Image payload is not valid base64") from err
    return content_type.lower(), data


def validate_image_reference(ref: str) -> str:
    """Accept an upload path or an inline image data URL, else raise.

    Upload paths are absolute (``/uploads/...``) and may not climb with
    ``..``. Inline images are bounded by ``settings.upload_max_bytes``.

    Raises:
        ValueError: If ``ref`` is neither form or the image is too large.
    """
    if is_data_url(ref):
        _, data = decode_image_data_url(ref)
        if len(data) > settings.upload_max_bytes:
            raise ValueError("Image size should be less than 5MB")
    elif not ref.startswith("/") or ref.startswith("//") or ".." in ref.split("/"):
        raise ValueError("Image reference must be an upload path or data URL")
    return ref

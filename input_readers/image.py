"""
IMAGE READER
------------
Detect label image types and encode them for the vision call.
"""

from __future__ import annotations

import base64
import mimetypes

from config import DEFAULT_IMAGE_MIME


def guess_mime_type(filename: str) -> str:
    """Guess an image MIME type from a file name, falling back to PNG."""
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None or not mime_type.startswith("image/"):
        return DEFAULT_IMAGE_MIME
    return mime_type


def bytes_to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """
    Convert raw image bytes to data URL format for API calls.

    Returns:
        Data URL string (data:image/png;base64,...)
    """
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type or DEFAULT_IMAGE_MIME};base64,{encoded}"

"""
utils/data_url.py — Data-URL helpers for passing images between widgets and API calls.
"""

from __future__ import annotations

import base64
from typing import Tuple

DEFAULT_IMAGE_MIME = "image/png"

# Leading bytes of the image formats the studio handles
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a ``data:<mime>;base64,<payload>`` URL."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_url(url: str) -> Tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and decoded bytes.

    Raises:
        ValueError: The string is not a base64 data URL.
    """
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URL")
    mime_type = header[len("data:"):-len(";base64")] or DEFAULT_IMAGE_MIME
    try:
        data = base64.b64decode(payload, validate=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return mime_type, data


def sniff_image_mime(data: bytes) -> str:
    """Guess an image MIME type from its signature, defaulting to PNG."""
    for signature, mime_type in _SIGNATURES:
        if data.startswith(signature):
            return mime_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_IMAGE_MIME

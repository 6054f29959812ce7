"""MIME type detection from file signatures."""

from collections.abc import Mapping

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}


def detect_mime_type(file_data: bytes) -> str | None:
    """Return the MIME type implied by the leading bytes, or None if unknown."""
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # WebP is a RIFF container; the format tag sits at offset 8.
    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"

    return None

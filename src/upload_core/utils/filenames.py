"""Helpers for naming and validating uploaded files."""

import re
import secrets
import string

from upload_core.utils.constants import (
    ALLOWED_EXTENSIONS,
    MAX_FILE_SIZE,
    RANDOM_SUFFIX_LENGTH,
    UPLOAD_PATH_PREFIX,
)
from upload_core.utils.time import utc_now_millis

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_ALPHANUMERIC = string.ascii_letters + string.digits


def sanitize_filename(filename: str) -> str:
    """Strip any directory part and replace unsafe characters with underscores."""
    basename = re.split(r"[\\/]", filename)[-1]
    return _UNSAFE_CHARS.sub("_", basename)


def get_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or an empty string."""
    name = sanitize_filename(filename)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def generate_secure_path(original_name: str, user_id: str | int) -> tuple[str, str, str]:
    """Build a collision-resistant storage name for an upload.

    Returns:
        (filename, path, extension), e.g.
        ("1700000000000-aB3dE9.png", "images/u1/1700000000000-aB3dE9.png", "png")
    """
    extension = get_extension(original_name)
    suffix = "".join(secrets.choice(_ALPHANUMERIC) for _ in range(RANDOM_SUFFIX_LENGTH))
    filename = f"{utc_now_millis()}-{suffix}.{extension}"
    owner = sanitize_filename(str(user_id))

    return filename, f"{UPLOAD_PATH_PREFIX}/{owner}/{filename}", extension


def validate_file_extension(extension: str) -> bool:
    return extension.lower() in ALLOWED_EXTENSIONS


def validate_file_size(size: int, max_size: int = MAX_FILE_SIZE) -> bool:
    return size <= max_size

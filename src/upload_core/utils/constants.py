"""Global constants used throughout the package.

This module centralizes error codes, upload constraints, storage defaults,
AI request settings and environment variable names so they can be changed
in one place.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FILE_EXTENSION = "INVALID_FILE_EXTENSION"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_NOT_AN_IMAGE = "NOT_AN_IMAGE"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
ERROR_CODE_STORAGE_ALREADY_EXISTS = "STORAGE_ALREADY_EXISTS"
ERROR_CODE_STORAGE_DELETE_FAILED = "STORAGE_DELETE_FAILED"
ERROR_CODE_STORAGE_BULK_DELETE_FAILED = "STORAGE_BULK_DELETE_FAILED"

# AI Errors
ERROR_CODE_AI_SERVICE = "AI_SERVICE_ERROR"
ERROR_CODE_AI_ANALYSIS_FAILED = "AI_ANALYSIS_FAILED"

# Configuration Errors
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE = MAX_FILE_SIZE_MB * 1024 * 1024  # 10MB in bytes
BYTES_PER_MEGABYTE = 1024 * 1024

ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"jpg", "jpeg", "png", "gif", "webp"}
)

IMAGE_MIME_PREFIX = "image/"
UPLOAD_PATH_PREFIX = "images"
RANDOM_SUFFIX_LENGTH = 6


# ============================================================================
# Storage Defaults
# ============================================================================

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_CACHE_CONTROL_SECONDS = "3600"
DEFAULT_UPSERT = False
DEFAULT_AWS_REGION = "us-east-1"


# ============================================================================
# AI Service Settings
# ============================================================================

DEFAULT_VISION_MODEL = "gpt-4o-mini"
VISION_MAX_TOKENS = 500
TAGS_PER_IMAGE = 5

TAG_STYLE_NEUTRAL = "neutral"
TAG_STYLE_PLAYFUL = "playful"
TAG_STYLE_SEO = "seo"
DEFAULT_TAG_STYLE = TAG_STYLE_NEUTRAL

AI_ERROR_INVALID_IMAGE_URL = "Invalid image URL"
AI_ERROR_UNPARSEABLE_RESPONSE = "Could not parse AI response"
AI_ERROR_EMPTY_RESPONSE = "AI service returned an empty response"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_STORAGE_S3_BUCKET_NAME = "STORAGE_S3_BUCKET_NAME"
ENV_STORAGE_PUBLIC_BASE_URL = "STORAGE_PUBLIC_BASE_URL"
ENV_OPENAI_VISION_MODEL = "OPENAI_VISION_MODEL"
ENV_AI_ALLOWED_IMAGE_DOMAIN = "AI_ALLOWED_IMAGE_DOMAIN"


# ============================================================================
# Helper Functions
# ============================================================================


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"

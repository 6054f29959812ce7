"""File upload core package."""

__version__ = "1.0.0"
__description__ = (
    "File uploads to S3-compatible object storage with optional AI image annotation"
)

__all__ = ["models", "repositories", "infrastructure", "services", "utils"]

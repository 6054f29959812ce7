"""Custom exception classes for the upload core."""

from typing import Any

from upload_core.utils.constants import (
    ERROR_CODE_AI_SERVICE,
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_STORAGE,
    ERROR_CODE_VALIDATION_FAILED,
)


class UploadCoreError(Exception):
    """
    Base exception for all upload core errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(UploadCoreError):
    """Raised when upload input validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(UploadCoreError):
    """Raised when the storage backend rejects an operation.

    The message carries the backend's own error message.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class AIServiceError(UploadCoreError):
    """Raised by the upload service when an explicitly requested analysis fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_AI_SERVICE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(UploadCoreError):
    """Raised when required configuration is missing."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )

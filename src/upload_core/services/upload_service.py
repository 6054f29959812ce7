"""Business logic for file uploads and AI annotation.

This module coordinates validation, storage and optional AI analysis for
uploaded files. Storage failures propagate; AI annotation during upload is
best-effort and never aborts the upload.
"""

from collections.abc import Sequence

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict

from upload_core.models.analysis import ImageAnalysis
from upload_core.models.errors import AIServiceError, ConfigurationError, ValidationError
from upload_core.models.file import File, FileStatus
from upload_core.models.storage import UploadOptions
from upload_core.repositories.ai_service import AIService
from upload_core.repositories.storage_repository import StorageProvider
from upload_core.utils.constants import (
    DEFAULT_CACHE_CONTROL_SECONDS,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_TAG_STYLE,
    ERROR_CODE_AI_ANALYSIS_FAILED,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_INVALID_FILE_EXTENSION,
    ERROR_CODE_NOT_AN_IMAGE,
    IMAGE_MIME_PREFIX,
    MAX_FILE_SIZE,
    format_file_size,
)
from upload_core.utils.filenames import (
    generate_secure_path,
    validate_file_extension,
    validate_file_size,
)
from upload_core.utils.mime import detect_mime_type
from upload_core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class UploadOutcome(BaseModel):
    """File record produced by an upload, plus the AI result if one ran."""

    model_config = ConfigDict(frozen=True)

    file: File
    ai_result: ImageAnalysis | None = None


class UploadService:
    """Application service responsible for file uploads.

    This service orchestrates:
    - Name sanitising and upload validation
    - Uploading file content to storage
    - Building the File record
    - Optional AI description and tagging of images
    """

    def __init__(self, storage: StorageProvider, ai_service: AIService | None = None) -> None:
        self.storage = storage
        self.ai_service = ai_service

    def upload_file(
        self,
        data: bytes,
        *,
        filename: str,
        user_id: str | int,
        mime_type: str | None = None,
        tag_style: str = DEFAULT_TAG_STYLE,
        analyze_with_ai: bool = True,
    ) -> UploadOutcome:
        """Upload a file and, for images, annotate it with AI.

        The upload flow is:
        1. Build a safe storage path and validate extension and size
        2. Upload the bytes to storage
        3. Build the File record
        4. Analyze images with AI (failure marks the record failed)

        Args:
            data: Raw file bytes
            filename: Original file name supplied by the client
            user_id: Owner of the file
            mime_type: Declared MIME type; detected from content when omitted
            tag_style: Tag preset for AI analysis
            analyze_with_ai: Whether to run AI analysis on images

        Returns:
            UploadOutcome with the File record and the AI result, if any

        Raises:
            ValidationError: If the extension or size is not allowed
            StorageError: If the storage upload fails
        """
        stored_name, path, extension = generate_secure_path(filename, user_id)

        if not validate_file_extension(extension):
            logger.warning("Invalid file extension", extra={"user_id": user_id, "extension": extension})
            raise ValidationError(
                message="Invalid file extension",
                error_code=ERROR_CODE_INVALID_FILE_EXTENSION,
                details={"extension": extension},
            )

        if not validate_file_size(len(data)):
            logger.warning("File too large", extra={"user_id": user_id, "size": len(data)})
            raise ValidationError(
                message="File size exceeds limit",
                error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
                details={"size": len(data), "max_size": format_file_size(MAX_FILE_SIZE)},
            )

        content_type = mime_type or detect_mime_type(data) or DEFAULT_CONTENT_TYPE
        annotate = (
            analyze_with_ai
            and self.ai_service is not None
            and content_type.startswith(IMAGE_MIME_PREFIX)
        )

        logger.debug(
            "Starting file upload",
            extra={"user_id": user_id, "path": path, "size": len(data), "content_type": content_type},
        )

        upload = self.storage.upload_file(
            data,
            path,
            UploadOptions(content_type=content_type, cache_control=DEFAULT_CACHE_CONTROL_SECONDS),
        )

        timestamp = utc_now_iso()
        file = File(
            filename=filename,
            file_path=upload.path,
            file_size=len(data),
            mime_type=content_type,
            public_url=upload.public_url,
            user_id=user_id,
            status=FileStatus.PROCESSING if annotate else FileStatus.UPLOADED,
            uploaded_at=timestamp,
            updated_at=timestamp,
        )

        logger.info(
            "File uploaded successfully",
            extra={"user_id": user_id, "path": upload.path, "stored_name": stored_name},
        )

        if not annotate or self.ai_service is None:
            return UploadOutcome(file=file)

        analysis = self.ai_service.analyze_image(upload.public_url, tag_style)
        if not analysis.success:
            logger.warning(
                "AI analysis failed, keeping un-annotated file",
                extra={"path": upload.path, "error": analysis.error},
            )

        return UploadOutcome(file=file.with_analysis(analysis), ai_result=analysis)

    def bulk_upload_files(
        self,
        uploads: Sequence[tuple[bytes, str]],
        *,
        user_id: str | int,
        tag_style: str = DEFAULT_TAG_STYLE,
        analyze_with_ai: bool = True,
    ) -> tuple[list[UploadOutcome], list[dict[str, str]]]:
        """Upload several files one after another.

        A failure on one file does not stop the others.

        Args:
            uploads: (data, filename) pairs

        Returns:
            (successful outcomes, [{"filename": ..., "error": ...}] for failures)
        """
        results: list[UploadOutcome] = []
        errors: list[dict[str, str]] = []

        for index, (data, filename) in enumerate(uploads):
            try:
                results.append(
                    self.upload_file(
                        data,
                        filename=filename,
                        user_id=user_id,
                        tag_style=tag_style,
                        analyze_with_ai=analyze_with_ai,
                    )
                )
            except Exception as exc:
                logger.exception(
                    "Bulk upload item failed",
                    extra={"user_id": user_id, "original_name": filename, "index": index},
                )
                errors.append({"filename": filename, "error": str(exc)})

        return results, errors

    def analyze_existing_file(self, file: File, tag_style: str = DEFAULT_TAG_STYLE) -> UploadOutcome:
        """Run AI analysis on a stored image using a freshly derived URL.

        Unlike the upload path, failure here is raised because analysis
        was explicitly requested.

        Raises:
            ValidationError: If the file is not a stored image
            ConfigurationError: If no AI service is configured
            AIServiceError: If the analysis fails
        """
        if not file.is_image() or not file.file_path:
            raise ValidationError(
                message="File is not an image",
                error_code=ERROR_CODE_NOT_AN_IMAGE,
                details={"file_id": file.id, "mime_type": file.mime_type},
            )

        if self.ai_service is None:
            raise ConfigurationError(message="No AI service is configured")

        fresh_url = self.storage.get_public_url(file.file_path)
        logger.info("AI analysis requested", extra={"file_id": file.id, "tag_style": tag_style})

        analysis = self.ai_service.analyze_image(fresh_url, tag_style)
        if not analysis.success:
            logger.error("AI analysis failed", extra={"file_id": file.id, "error": analysis.error})
            raise AIServiceError(
                message=analysis.error or "AI analysis failed",
                error_code=ERROR_CODE_AI_ANALYSIS_FAILED,
                details={"file_id": file.id},
            )

        updated = file.with_analysis(analysis).model_copy(update={"public_url": fresh_url}, deep=True)
        return UploadOutcome(file=updated, ai_result=analysis)

    def refresh_file_url(self, file: File) -> File:
        """Return a copy of `file` with a freshly derived public URL."""
        if not file.file_path:
            raise ValidationError(message="File has no storage path", details={"file_id": file.id})

        return file.model_copy(
            update={
                "public_url": self.storage.get_public_url(file.file_path),
                "updated_at": utc_now_iso(),
            },
            deep=True,
        )

    def refresh_file_urls(self, files: Sequence[File]) -> list[File]:
        """Refresh public URLs for several files.

        Files whose URL cannot be refreshed are logged and left out of the
        result.
        """
        refreshed: list[File] = []

        for file in files:
            try:
                refreshed.append(self.refresh_file_url(file))
            except Exception:
                logger.exception("Failed to refresh file URL", extra={"file_id": file.id})

        return refreshed

    def delete_file(self, file: File) -> bool:
        """Remove a file's object from storage."""
        if not file.file_path:
            raise ValidationError(message="File has no storage path", details={"file_id": file.id})

        self.storage.delete_file(file.file_path)
        logger.info("File deleted", extra={"file_id": file.id, "path": file.file_path})
        return True

    def bulk_delete_files(self, files: Sequence[File]) -> int:
        """Remove several files' objects with one bulk request.

        Returns:
            Number of objects requested for deletion

        Raises:
            ValidationError: If none of the files has a storage path
            StorageError: If the backend reports an error for the batch
        """
        paths = [file.file_path for file in files if file.file_path]
        if not paths:
            raise ValidationError(message="No valid files to delete")

        self.storage.delete_files(paths)
        logger.info("Bulk delete completed", extra={"count": len(paths)})
        return len(paths)

"""S3-backed implementation of StorageProvider."""

from collections.abc import Mapping, Sequence
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from upload_core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from upload_core.models.errors import StorageError
from upload_core.models.storage import UploadOptions, UploadResult
from upload_core.repositories.storage_repository import StorageProvider
from upload_core.utils.constants import (
    ERROR_CODE_STORAGE_ALREADY_EXISTS,
    ERROR_CODE_STORAGE_BULK_DELETE_FAILED,
    ERROR_CODE_STORAGE_DELETE_FAILED,
    ERROR_CODE_STORAGE_UPLOAD_FAILED,
)

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _backend_message(exc: Exception) -> str:
    """Return the message reported by the storage backend."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return str(error.get("Message") or error.get("Code") or exc)
    return str(exc)


class S3StorageProvider(StorageProvider):
    """Storage provider backed by Amazon S3 or an S3-compatible service."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create a provider using the given S3 adapter."""
        self._s3 = adapter or S3Adapter()

    def upload_file(
        self,
        data: bytes,
        path: str,
        options: UploadOptions | Mapping[str, Any] | None = None,
    ) -> UploadResult:
        """Upload bytes to S3 and return the path with its public URL."""
        opts = UploadOptions.coerce(options)

        logger.debug(
            "Uploading file",
            extra={
                "path": path,
                "size": len(data),
                "content_type": opts.content_type,
                "upsert": opts.upsert,
            },
        )

        try:
            if not opts.upsert and self._object_exists(path):
                raise StorageError(
                    message="Storage upload failed: The resource already exists",
                    error_code=ERROR_CODE_STORAGE_ALREADY_EXISTS,
                    details={"path": path},
                )

            self._s3.put_object(
                key=path,
                body=data,
                content_type=opts.content_type,
                cache_control=opts.cache_control_header(),
            )

        except StorageError:
            logger.warning("Upload rejected, object already exists", extra={"path": path})
            raise

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"path": path})
            raise StorageError(
                message=f"Storage upload failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_UPLOAD_FAILED,
                details={"path": path},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading file")
            raise StorageError(
                message=f"Storage upload failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_UPLOAD_FAILED,
                details={"path": path},
            ) from exc

        logger.info("File uploaded successfully", extra={"path": path})
        return UploadResult(path=path, public_url=self.get_public_url(path))

    def delete_file(self, path: str) -> bool:
        """Delete one object from S3."""
        logger.debug("Deleting file", extra={"path": path})

        try:
            self._s3.delete_object(key=path)

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"path": path})
            raise StorageError(
                message=f"Storage delete failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_DELETE_FAILED,
                details={"path": path},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting file")
            raise StorageError(
                message=f"Storage delete failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_DELETE_FAILED,
                details={"path": path},
            ) from exc

        logger.info("File deleted successfully", extra={"path": path})
        return True

    def delete_files(self, paths: Sequence[str]) -> bool:
        """Delete several objects with a single DeleteObjects request.

        S3 reports per-key failures in the response body. Any such entry
        fails the whole batch; keys S3 did remove are not restored.
        """
        batch = list(paths)
        if not batch:
            return True

        logger.debug("Deleting files", extra={"count": len(batch)})

        try:
            response = self._s3.delete_objects(keys=batch)

        except ClientError as exc:
            logger.error("S3 bulk deletion failed", extra={"count": len(batch)})
            raise StorageError(
                message=f"Bulk storage delete failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_BULK_DELETE_FAILED,
                details={"paths": batch},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting files")
            raise StorageError(
                message=f"Bulk storage delete failed: {_backend_message(exc)}",
                error_code=ERROR_CODE_STORAGE_BULK_DELETE_FAILED,
                details={"paths": batch},
            ) from exc

        errors = list(response.get("Errors", []))
        if errors:
            logger.error(
                "S3 bulk deletion reported errors",
                extra={"count": len(batch), "failed": len(errors)},
            )
            first = errors[0]
            raise StorageError(
                message=f"Bulk storage delete failed: {first.get('Message') or first.get('Code')}",
                error_code=ERROR_CODE_STORAGE_BULK_DELETE_FAILED,
                details={
                    "paths": batch,
                    "errors": [
                        {"path": err.get("Key"), "code": err.get("Code"), "message": err.get("Message")}
                        for err in errors
                    ],
                },
            )

        logger.info("Files deleted successfully", extra={"count": len(batch)})
        return True

    def get_public_url(self, path: str) -> str:
        """Derive the public URL for `path`."""
        return self._s3.public_url(key=path)

    def file_exists(self, path: str) -> bool:
        """Check for `path` by listing its parent prefix.

        Listing failures of any kind are reported as False rather than
        raised, so callers get a plain yes/no answer.
        """
        parent, _, name = path.rpartition("/")
        prefix = f"{parent}/" if parent else ""

        try:
            return any(candidate == name for candidate in self._s3.list_names(prefix=prefix))
        except Exception as exc:
            logger.warning(
                "Existence check failed, treating file as absent",
                extra={"path": path, "error": str(exc)},
            )
            return False

    def _object_exists(self, path: str) -> bool:
        """HEAD the object; raises for anything other than a missing key."""
        try:
            self._s3.head_object(key=path)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES:
                return False
            raise
        return True

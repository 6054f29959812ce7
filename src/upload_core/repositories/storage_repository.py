"""Abstract contract for object storage providers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from upload_core.models.storage import UploadOptions, UploadResult


class StorageProvider(ABC):
    """Contract for storing and removing uploaded files.

    Implementations could be S3, GCS, Supabase Storage, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def upload_file(
        self,
        data: bytes,
        path: str,
        options: UploadOptions | Mapping[str, Any] | None = None,
    ) -> UploadResult:
        """Store bytes at `path` and return its location.

        Args:
            data: Binary file content
            path: Object path inside the bucket
            options: Content type, cache control and overwrite policy

        Returns:
            Stored path and its public URL

        Raises:
            StorageError: If the backend rejects the write
        """

    @abstractmethod
    def delete_file(self, path: str) -> bool:
        """Delete a single object.

        Returns:
            True once the backend accepts the deletion

        Raises:
            StorageError: If the backend rejects the deletion
        """

    @abstractmethod
    def delete_files(self, paths: Sequence[str]) -> bool:
        """Delete several objects in one request.

        The batch is not atomic. Any failure is reported as one error
        covering every requested path, even if the backend removed some.

        Raises:
            StorageError: If the backend reports an error for the batch
        """

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Return the public URL for `path` without checking it exists."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Return whether an object exists at `path`.

        Never raises: a failed lookup is reported as False.
        """

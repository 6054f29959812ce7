"""File record model shared by storage, AI annotation and persistence."""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Final

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from upload_core.models.analysis import ImageAnalysis
from upload_core.utils.constants import BYTES_PER_MEGABYTE, IMAGE_MIME_PREFIX
from upload_core.utils.time import utc_now_iso


class FileStatus(str, Enum):
    """Processing status of an uploaded file."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Stored attributes, in view order. Each is accepted under its snake_case
# name or its camelCase counterpart.
FILE_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "filename",
    "file_path",
    "file_size",
    "mime_type",
    "public_url",
    "user_id",
    "status",
    "description",
    "tags",
    "uploaded_at",
    "updated_at",
)


def normalize_file_fields(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map loosely keyed input onto snake_case field names.

    A key counts as present when it holds a non-None value. When both the
    snake_case and camelCase spellings are present, snake_case wins.
    Every field is returned, None when neither spelling is present; unknown
    keys are dropped.
    """
    normalized: dict[str, Any] = {}

    for name in FILE_FIELDS:
        value = raw.get(name)
        if value is None:
            value = raw.get(to_camel(name))
        normalized[name] = value

    return normalized


class File(BaseModel):
    """One uploaded object plus its AI annotation state."""

    model_config = ConfigDict(validate_assignment=True)

    id: StrictStr | StrictInt | None = Field(None, description="Record identifier, assigned externally")
    filename: str | None = Field(None, description="Original file name")
    file_path: str | None = Field(None, description="Object path inside the storage bucket")
    file_size: int | None = Field(None, ge=0, description="Size in bytes")
    mime_type: str | None = Field(None, description="MIME type (e.g. image/png)")
    public_url: str | None = Field(None, description="Public URL, set once the upload completes")
    user_id: StrictStr | StrictInt | None = Field(None, description="Owner identifier")
    status: FileStatus = Field(FileStatus.UPLOADED, description="Processing status")
    description: str | None = Field(None, description="AI generated description")
    tags: list[str] = Field(default_factory=list, description="AI generated tags")
    uploaded_at: str | datetime | None = Field(None, description="Creation timestamp")
    updated_at: str | datetime | None = Field(None, description="Last update timestamp")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return normalize_file_fields(data)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return FileStatus.UPLOADED if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _default_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "File":
        """Build a File from an ingestion payload or a stored row."""
        return cls.model_validate(raw)

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def is_image(self) -> bool:
        return bool(self.mime_type and self.mime_type.startswith(IMAGE_MIME_PREFIX))

    def has_ai_analysis(self) -> bool:
        return bool(self.description) or len(self.tags) > 0

    def get_size_mb(self) -> str | None:
        """Size in megabytes with two decimals, or None when size is unknown."""
        if self.file_size is None:
            return None
        return f"{self.file_size / BYTES_PER_MEGABYTE:.2f}"

    def is_processing(self) -> bool:
        return self.status == FileStatus.PROCESSING

    def is_completed(self) -> bool:
        return self.status == FileStatus.COMPLETED

    def is_failed(self) -> bool:
        return self.status == FileStatus.FAILED

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def with_analysis(self, analysis: ImageAnalysis) -> "File":
        """Return a copy carrying the outcome of an AI analysis.

        A successful analysis sets description, tags and the completed
        status. A failed one only marks the copy as failed.
        """
        if not analysis.success:
            return self.model_copy(update={"status": FileStatus.FAILED}, deep=True)

        return self.model_copy(
            update={
                "description": analysis.description,
                "tags": list(analysis.tags),
                "status": FileStatus.COMPLETED,
                "updated_at": utc_now_iso(),
            },
            deep=True,
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def _field_values(self) -> dict[str, Any]:
        values = {name: getattr(self, name) for name in FILE_FIELDS}
        values["status"] = self.status.value
        values["tags"] = list(self.tags)
        return values

    def to_api_view(self) -> dict[str, Any]:
        """camelCase view for API responses, with derived properties."""
        view = {to_camel(name): value for name, value in self._field_values().items()}
        view["isImage"] = self.is_image()
        view["hasAIAnalysis"] = self.has_ai_analysis()
        view["fileSizeMB"] = self.get_size_mb()
        return view

    def to_persistence_view(self) -> dict[str, Any]:
        """snake_case view accepted by the table backing file records."""
        return self._field_values()

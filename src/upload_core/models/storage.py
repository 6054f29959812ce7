"""Request and response models for storage provider operations."""

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from upload_core.utils.constants import (
    DEFAULT_CACHE_CONTROL_SECONDS,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_UPSERT,
)


class UploadOptions(BaseModel):
    """Options applied to a single upload.

    Accepts snake_case or camelCase keys (`content_type` / `contentType`).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    content_type: StrictStr = Field(DEFAULT_CONTENT_TYPE, description="MIME type stored with the object")
    cache_control: StrictStr = Field(
        DEFAULT_CACHE_CONTROL_SECONDS,
        description="Cache lifetime in seconds",
    )
    upsert: StrictBool = Field(DEFAULT_UPSERT, description="Overwrite an existing object at the path")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        # snake_case wins over camelCase; None and "" count as absent
        if not isinstance(data, Mapping):
            return data

        normalized: dict[str, Any] = {}
        for name in cls.model_fields:
            for key in (name, to_camel(name)):
                value = data.get(key)
                if value not in (None, ""):
                    normalized[name] = value
                    break
        return normalized

    @field_validator("cache_control", mode="before")
    @classmethod
    def _cache_control_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def coerce(cls, options: "UploadOptions | Mapping[str, Any] | None") -> "UploadOptions":
        """Accept an UploadOptions instance, a plain mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)

    def cache_control_header(self) -> str:
        """Cache-Control header value for the stored object."""
        if self.cache_control.isdigit():
            return f"max-age={self.cache_control}"
        return self.cache_control


class UploadResult(BaseModel):
    """Location of an uploaded object."""

    path: StrictStr = Field(..., description="Object path inside the bucket")
    public_url: StrictStr = Field(..., description="Public URL of the object")

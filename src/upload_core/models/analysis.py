"""Result models returned by AI image analysis."""

from pydantic import BaseModel, Field, StrictBool


class ImageAnalysis(BaseModel):
    """Outcome of analyzing one image.

    Failures are reported through `success` and `error`, never raised.
    """

    success: StrictBool = Field(..., description="Whether the analysis succeeded")
    description: str | None = Field(None, description="1-2 sentence image description")
    tags: list[str] = Field(default_factory=list, description="Generated tags")
    tag_style: str | None = Field(None, description="Tag style preset that was applied")
    error: str | None = Field(None, description="Failure message when success is False")

    @classmethod
    def failed(cls, error: str) -> "ImageAnalysis":
        return cls(success=False, error=error, description=None, tags=[])


class TagsResult(BaseModel):
    """Tags-only projection of an ImageAnalysis."""

    success: StrictBool
    tags: list[str] = Field(default_factory=list)
    error: str | None = None


class DescriptionResult(BaseModel):
    """Description-only projection of an ImageAnalysis."""

    success: StrictBool
    description: str | None = None
    error: str | None = None

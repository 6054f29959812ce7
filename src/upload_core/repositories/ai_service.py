"""Abstract contract for AI image annotation services."""

from abc import ABC, abstractmethod

from upload_core.models.analysis import DescriptionResult, ImageAnalysis, TagsResult
from upload_core.utils.constants import DEFAULT_TAG_STYLE


class AIService(ABC):
    """Contract for describing and tagging images.

    Implementations could be OpenAI, Anthropic, Gemini, a local model, etc.
    Every failure is returned as a result with `success=False`; methods
    never raise to the caller.
    """

    @abstractmethod
    def analyze_image(self, image_url: str, tag_style: str = DEFAULT_TAG_STYLE) -> ImageAnalysis:
        """Generate a description and tags for the image at `image_url`.

        Args:
            image_url: Public URL of the image
            tag_style: One of neutral, playful or seo; unknown values
                fall back to neutral

        Returns:
            ImageAnalysis with success flag, description, tags and error
        """

    def generate_tags(self, image_url: str, tag_style: str = DEFAULT_TAG_STYLE) -> TagsResult:
        """Tags-only view of a single `analyze_image` call."""
        result = self.analyze_image(image_url, tag_style)
        return TagsResult(success=result.success, tags=result.tags, error=result.error)

    def generate_description(self, image_url: str) -> DescriptionResult:
        """Description-only view of a single neutral `analyze_image` call."""
        result = self.analyze_image(image_url, DEFAULT_TAG_STYLE)
        return DescriptionResult(
            success=result.success,
            description=result.description,
            error=result.error,
        )

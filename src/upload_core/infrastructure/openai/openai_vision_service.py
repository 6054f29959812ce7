"""OpenAI vision implementation of AIService."""

import os
from typing import Any

from aws_lambda_powertools import Logger

from upload_core.infrastructure.adapters.openai_adapter import OpenAIAdapter, VisionAdapterProtocol
from upload_core.models.analysis import ImageAnalysis
from upload_core.models.errors import ConfigurationError
from upload_core.repositories.ai_service import AIService
from upload_core.utils.constants import (
    AI_ERROR_EMPTY_RESPONSE,
    AI_ERROR_INVALID_IMAGE_URL,
    AI_ERROR_UNPARSEABLE_RESPONSE,
    DEFAULT_TAG_STYLE,
    ENV_AI_ALLOWED_IMAGE_DOMAIN,
)
from upload_core.utils.json_extract import extract_json_object
from upload_core.utils.prompts import build_analysis_prompt, resolve_tag_style

logger = Logger(UTC=True)


def parse_analysis_reply(reply: str | None, tag_style: str) -> ImageAnalysis:
    """Turn a model reply into an ImageAnalysis.

    The reply may contain prose around the JSON object; only the first
    decodable object is used.
    """
    if not reply:
        return ImageAnalysis.failed(AI_ERROR_EMPTY_RESPONSE)

    payload = extract_json_object(reply)
    if payload is None:
        return ImageAnalysis.failed(AI_ERROR_UNPARSEABLE_RESPONSE)

    description = payload.get("description")
    raw_tags = payload.get("tags")

    return ImageAnalysis(
        success=True,
        description=description if isinstance(description, str) else None,
        tags=_clean_tags(raw_tags),
        tag_style=tag_style,
    )


def _clean_tags(raw_tags: Any) -> list[str]:
    if not isinstance(raw_tags, list):
        return []
    return [str(tag).strip() for tag in raw_tags if tag is not None and str(tag).strip()]


class OpenAIVisionService(AIService):
    """AI service that asks an OpenAI vision model for a description and tags."""

    def __init__(
        self,
        adapter: VisionAdapterProtocol | None = None,
        *,
        allowed_domain: str | None = None,
    ) -> None:
        """Create the service.

        Args:
            adapter: Vision adapter; defaults to an OpenAIAdapter
            allowed_domain: Storage domain that image URLs must reference

        Raises:
            ConfigurationError: If no allowed domain is configured
        """
        domain = allowed_domain or os.getenv(ENV_AI_ALLOWED_IMAGE_DOMAIN)
        if not domain:
            raise ConfigurationError(
                message="An allowed image domain must be configured",
                details={"env": ENV_AI_ALLOWED_IMAGE_DOMAIN},
            )

        self._adapter = adapter or OpenAIAdapter()
        self._allowed_domain = domain

    @property
    def allowed_domain(self) -> str:
        return self._allowed_domain

    def is_allowed_url(self, image_url: str | None) -> bool:
        """Only URLs served from the configured storage domain may be analyzed."""
        return bool(image_url) and self._allowed_domain in str(image_url)

    def analyze_image(self, image_url: str, tag_style: str = DEFAULT_TAG_STYLE) -> ImageAnalysis:
        """Describe and tag an image. Never raises."""
        style = resolve_tag_style(tag_style)

        if not self.is_allowed_url(image_url):
            logger.warning("Rejected image URL outside storage domain", extra={"image_url": image_url})
            return ImageAnalysis.failed(AI_ERROR_INVALID_IMAGE_URL)

        logger.debug("Requesting image analysis", extra={"image_url": image_url, "tag_style": style})

        try:
            reply = self._adapter.describe_image(
                prompt=build_analysis_prompt(style),
                image_url=image_url,
            )
        except Exception as exc:
            logger.exception("Image analysis request failed", extra={"image_url": image_url})
            return ImageAnalysis.failed(str(exc) or type(exc).__name__)

        result = parse_analysis_reply(reply, style)

        if result.success:
            logger.info(
                "Image analysis completed",
                extra={"image_url": image_url, "tag_style": style, "tags": len(result.tags)},
            )
        else:
            logger.warning(
                "Image analysis reply could not be used",
                extra={"image_url": image_url, "error": result.error},
            )

        return result

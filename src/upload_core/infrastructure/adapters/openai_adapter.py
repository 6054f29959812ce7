"""Thin adapter for the OpenAI chat completions API."""

import os
from typing import Any, Protocol

from openai import OpenAI

from upload_core.utils.constants import (
    DEFAULT_VISION_MODEL,
    ENV_OPENAI_VISION_MODEL,
    VISION_MAX_TOKENS,
)


class VisionAdapterProtocol(Protocol):
    """Minimal vision adapter protocol (service-facing)."""

    def describe_image(self, *, prompt: str, image_url: str) -> str | None: ...


class OpenAIAdapter:
    """Low-level multimodal completion calls (mechanical, no error handling).

    Exceptions raised by the `openai` client bubble up; the service
    implementation turns them into failed results.
    """

    def __init__(
        self,
        *,
        client: Any | None = None,
        model: str | None = None,
        max_tokens: int = VISION_MAX_TOKENS,
    ) -> None:
        """Create the client from the environment unless one is injected.

        The `openai` client reads OPENAI_API_KEY itself.
        """
        self._client = client or OpenAI()
        self._model = model or os.getenv(ENV_OPENAI_VISION_MODEL) or DEFAULT_VISION_MODEL
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        return self._model

    def describe_image(self, *, prompt: str, image_url: str) -> str | None:
        """Send one user message with text and image blocks; return the reply text."""
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                }
            ],
            max_tokens=self._max_tokens,
        )
        content: str | None = response.choices[0].message.content
        return content

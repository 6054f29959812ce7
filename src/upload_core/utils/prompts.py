"""Prompt presets for AI image analysis."""

from collections.abc import Mapping
from typing import Any, Final

from upload_core.utils.constants import (
    DEFAULT_TAG_STYLE,
    TAG_STYLE_NEUTRAL,
    TAG_STYLE_PLAYFUL,
    TAG_STYLE_SEO,
    TAGS_PER_IMAGE,
)

TAG_STYLE_INSTRUCTIONS: Final[Mapping[str, str]] = {
    TAG_STYLE_NEUTRAL: (
        f"Generate a concise list of {TAGS_PER_IMAGE} neutral tags that accurately describe "
        "the content, setting, and main objects in the image. Use short, clear, factual "
        "terms. Avoid emotional, opinionated, or marketing words. Example tags: mountain, "
        "sunset, lake, reflection, trees, nature, landscape."
    ),
    TAG_STYLE_PLAYFUL: (
        f"Generate {TAGS_PER_IMAGE} playful, expressive tags that describe this image with "
        "energy or humor. Feel free to include slang or short phrases if appropriate. "
        "Combine literal and imaginative tags. Example tags: sunset vibes, wanderlust, "
        "weekend chill, good times, nature mood."
    ),
    TAG_STYLE_SEO: (
        f"Generate {TAGS_PER_IMAGE} SEO-friendly tags for this image. Use specific, "
        "searchable keywords and long-tail phrases that people might use to find this "
        "image online. Include variations of relevant terms (synonyms, categories, etc.). "
        "Avoid hashtags or emojis. Example tags: cozy coffee shop interior, cafe with warm "
        "lighting, people drinking coffee, modern cafe design."
    ),
}

TAG_STYLES: Final[frozenset[str]] = frozenset(TAG_STYLE_INSTRUCTIONS)

_RESPONSE_FORMAT = (
    "Format your response as JSON:\n"
    "{\n"
    '  "description": "Your description here",\n'
    '  "tags": ["tag1", "tag2", "tag3", "tag4", "tag5"]\n'
    "}"
)


def resolve_tag_style(tag_style: Any) -> str:
    """Return `tag_style` if it is a known preset, otherwise the neutral one."""
    if isinstance(tag_style, str) and tag_style in TAG_STYLES:
        return tag_style
    return DEFAULT_TAG_STYLE


def build_analysis_prompt(tag_style: str) -> str:
    """Build the instruction text sent alongside the image."""
    instruction = TAG_STYLE_INSTRUCTIONS[resolve_tag_style(tag_style)]
    return (
        "Analyze this image and provide:\n"
        "1. A detailed, engaging description of what you see (1-2 sentences)\n"
        f"2. {instruction}\n\n"
        f"{_RESPONSE_FORMAT}"
    )

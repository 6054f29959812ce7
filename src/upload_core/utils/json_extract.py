"""Tolerant extraction of a JSON object embedded in free text.

Model replies often wrap the requested JSON in prose or code fences. The
scanner here walks the text for balanced `{...}` spans, honouring string
literals and escapes, and returns the first span that decodes to an object.
"""

from collections.abc import Iterator
import json
from typing import Any


def iter_brace_spans(text: str) -> Iterator[str]:
    """Yield balanced `{...}` substrings in order of their opening brace."""
    start = text.find("{")

    while start != -1:
        end = _match_closing_brace(text, start)
        if end is not None:
            yield text[start : end + 1]
        start = text.find("{", start + 1)


def _match_closing_brace(text: str, start: int) -> int | None:
    """Index of the brace closing the one at `start`, or None if unbalanced."""
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index

    return None


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """Return the first embedded JSON object in `text`, or None.

    Spans that fail to decode, or decode to something other than an
    object, are skipped in favour of the next candidate.
    """
    if not text:
        return None

    for span in iter_brace_spans(text):
        try:
            value = json.loads(span)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value

    return None

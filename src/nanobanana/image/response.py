"""
Result extraction from generateContent responses.

The REST API names inline payloads `inline_data` / `mime_type` while the SDK
serializes them as `inlineData` / `mimeType`. Parts are normalized to
ImagePart in a single pass so the scan below only deals with one shape.
"""

from typing import Any, Iterator, Mapping

from nanobanana.config.logging_config import get_logger
from nanobanana.image.types import (
    DEFAULT_MIME_TYPE,
    GenerationResult,
    ImagePart,
    ImageResult,
    RawResult,
)

log = get_logger(__name__)


def normalize_inline_data(part: Any) -> ImagePart | None:
    """Return the inline image of a response part in either dialect."""
    if not isinstance(part, Mapping):
        return None
    inline = part.get("inline_data") or part.get("inlineData")
    if not isinstance(inline, Mapping) or not inline.get("data"):
        return None
    mime_type = inline.get("mime_type") or inline.get("mimeType") or DEFAULT_MIME_TYPE
    return ImagePart(mime_type=mime_type, data=inline["data"])


def _first_candidate_parts(response: Any) -> list[Any]:
    if not isinstance(response, Mapping):
        return []
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    candidate = candidates[0]
    if not isinstance(candidate, Mapping):
        return []
    content = candidate.get("content")
    if not isinstance(content, Mapping):
        return []
    parts = content.get("parts")
    return parts if isinstance(parts, list) else []


def iter_images(response: Any) -> Iterator[ImagePart]:
    """Yield inline images of the first candidate in part order."""
    for part in _first_candidate_parts(response):
        image = normalize_inline_data(part)
        if image is not None:
            yield image


def extract_result(response: Any) -> GenerationResult:
    """Return the first inline image of candidate 0, or the raw response.

    Later parts and candidates are never inspected once an image is found.
    """
    image = next(iter_images(response), None)
    if image is not None:
        log.debug(f"Found inline image ({image.mime_type}, {len(image.data)} chars)")
        return ImageResult(mime_type=image.mime_type, data=image.data)

    log.info("No inline image in response, returning raw response")
    return RawResult(response=response)

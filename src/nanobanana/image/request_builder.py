"""
Request assembly for Gemini's generateContent endpoint.
"""

from typing import Any, Mapping, Sequence

from nanobanana.image.errors import ValidationError
from nanobanana.image.types import ImagePart

FLASH_IMAGE_MODEL = "gemini-2.5-flash-image"
PRO_IMAGE_PREVIEW_MODEL = "gemini-3-pro-image-preview"

# Nano Banana version -> Gemini model id
MODEL_IDS: dict[str, str] = {
    "2": FLASH_IMAGE_MODEL,
    "3": PRO_IMAGE_PREVIEW_MODEL,
}


def select_model(model_version: str | None) -> str:
    """Return the model id for a version; unknown versions use the flash model."""
    return MODEL_IDS.get(str(model_version), FLASH_IMAGE_MODEL)


def build_generate_url(model_id: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{model_id}:generateContent"


def build_request_body(
    prompt: str,
    generation_config: Mapping[str, Any],
    image_part: ImagePart | None = None,
    safety_settings: Sequence[Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the JSON body for a generateContent call.

    The image part, when given, precedes the text part. `safetySettings` is
    only included for a non-empty list.
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required and must be a non-empty string")

    parts: list[dict[str, Any]] = []
    if image_part is not None:
        parts.append(image_part.to_request_part())
    parts.append({"text": prompt})

    body: dict[str, Any] = {
        "contents": [{"parts": parts}],
        "generationConfig": dict(generation_config),
    }
    if safety_settings:
        body["safetySettings"] = [dict(s) for s in safety_settings]
    return body


def redact_request_body(body: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of a request body with inline image payloads elided, for logging."""
    contents = []
    for content in body.get("contents", []):
        parts = []
        for part in content.get("parts", []):
            inline = part.get("inline_data")
            if inline:
                data = inline.get("data") or ""
                part = {
                    "inline_data": {
                        "mime_type": inline.get("mime_type"),
                        "data": f"<{len(data)} base64 chars>",
                    }
                }
            parts.append(part)
        contents.append({**content, "parts": parts})
    return {**body, "contents": contents}

"""
Types for the Nano Banana image generation pipeline.

This module defines the tool-level configuration, the per-call request, the
partial override structure used for config merging and the tagged result
returned to the caller.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from nanobanana.image.errors import ValidationError

DEFAULT_MIME_TYPE = "image/png"

ToolMode = Literal["text-to-image", "image-to-image"]


class GenerationConfig(BaseModel):
    """Tool-level generation settings, built once when the tool is set up.

    The model is frozen and sequences are stored as tuples, so a shared
    instance can be read by concurrent invocations.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False, description="Gemini API key")
    model_version: str | None = Field(
        default="2", description="Nano Banana model version, '2' or '3'"
    )
    aspect_ratio: str | None = Field(
        default=None, description="Default aspect ratio, e.g. '1:1' or '16:9'"
    )
    temperature: float | None = None
    max_output_tokens: int | None = None
    top_p: float | None = None
    top_k: int | None = None
    seed: int | None = None
    stop_sequences: tuple[str, ...] | None = None
    response_mime_type: str | None = None
    safety_settings: tuple[dict[str, Any], ...] | None = None
    custom_generation_config: str | None = Field(
        default=None,
        description="Node-level JSON override document, parsed on every call",
    )


class GenerationConfigOverride(BaseModel):
    """Partial generation config parsed from a JSON override document.

    Every field is optional. Keys that are not modelled here are kept as
    extras so merging stays lossless. Instances are built with
    `model_construct`, so values keep the exact JSON type they were given.
    """

    model_config = ConfigDict(extra="allow")

    responseModalities: list[str] | None = None
    imageConfig: dict[str, Any] | None = None
    temperature: float | None = None
    maxOutputTokens: int | None = None
    topP: float | None = None
    topK: int | None = None
    seed: int | None = None
    stopSequences: list[str] | None = None
    responseMimeType: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return only the keys present in the source document."""
        known = type(self).model_fields
        data = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name in known
        }
        data.update(self.model_extra or {})
        return data


class InvocationRequest(BaseModel):
    """Arguments of a single tool call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: str
    image: str | None = None
    aspect_ratio: str | None = Field(default=None, alias="aspectRatio")
    custom_config: str | None = Field(default=None, alias="customConfig")

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "InvocationRequest":
        prompt = arguments.get("prompt")
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt is required and must be a non-empty string")
        return cls.model_validate({**arguments, "prompt": prompt.strip()})


class ImagePart(BaseModel):
    mime_type: str = DEFAULT_MIME_TYPE
    data: str

    def to_request_part(self) -> dict[str, Any]:
        return {"inline_data": {"mime_type": self.mime_type, "data": self.data}}

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class ImageResult(BaseModel):
    """The first inline image found in the response."""

    kind: Literal["image"] = "image"
    mime_type: str
    data: str

    def to_string(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class RawResult(BaseModel):
    """The complete backend response, returned when it carries no image."""

    kind: Literal["raw"] = "raw"
    response: Any

    def to_string(self) -> str:
        return json.dumps(self.response, indent=2, ensure_ascii=False)


GenerationResult = Annotated[
    Union[ImageResult, RawResult], Field(discriminator="kind")
]

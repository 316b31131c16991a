"""
Nano Banana Tool Node
=====================

Node-level configuration for the Nano Banana image generation tool. A host
fills in the fields below (usually from an editor form, so numbers may arrive
as strings), then calls `init()` to obtain a ready NanoBananaTool.

The node declares one credential, NANO_BANANA_API_KEY, which is resolved
through the processing context when the tool is created.
"""

import json
import re
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

from nanobanana.agents.tools.nano_banana_tool import NanoBananaTool
from nanobanana.config.logging_config import get_logger
from nanobanana.image.errors import ParseError
from nanobanana.image.types import GenerationConfig
from nanobanana.security.secret_helper import ApiKeyMissingError
from nanobanana.workflows.processing_context import ProcessingContext

log = get_logger(__name__)

API_KEY_SECRET = "NANO_BANANA_API_KEY"


class GenerationMode(str, Enum):
    """Whether the tool takes an input image."""
    TEXT_TO_IMAGE = "text-to-image"
    IMAGE_TO_IMAGE = "image-to-image"


class ModelVersion(str, Enum):
    NANO_BANANA_2 = "2"
    NANO_BANANA_3 = "3"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    RATIO_4_3 = "4:3"
    RATIO_3_4 = "3:4"


def sanitize_tool_name(name: str) -> str:
    """Lowercase, turn spaces into underscores, drop anything but [a-z0-9_-]."""
    return re.sub(r"[^a-z0-9_-]", "", name.lower().replace(" ", "_"))


def parse_stop_sequences(text: str | None) -> tuple[str, ...] | None:
    """Split newline-delimited stop sequences, skipping blank lines."""
    if not text:
        return None
    return tuple(s for s in text.split("\n") if s.strip())


def parse_safety_settings(text: str | None) -> tuple[dict[str, Any], ...] | None:
    """Parse a JSON array of safety setting objects.

    Raises:
        ParseError: If the text is not a JSON array of objects.
    """
    if not text or not text.strip():
        return None
    try:
        settings = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in safety settings: {e}", "safety_settings") from e
    if not isinstance(settings, list) or not all(isinstance(s, dict) for s in settings):
        raise ParseError(
            "Safety settings must be a JSON array of objects", "safety_settings"
        )
    return tuple(settings)


class NanoBananaNode(BaseModel):
    """
    Generate images using the Google Nano Banana API. Supports text-to-image
    and image-to-image generation with Nano Banana 2 and 3.

    image, generation, gemini, nano banana, tool

    Attributes:
        mode: Text-to-image or image-to-image
        model_version: Nano Banana model version
        aspect_ratio: Default aspect ratio, can be overridden per call
        custom_generation_config: JSON object merged over every request's
            generation config, after the call's own customConfig
        tool_name: Optional tool name override, sanitized before use
        tool_description: Optional tool description override
    """

    label: ClassVar[str] = "Nano Banana"
    node_type: ClassVar[str] = "nanobanana.NanoBanana"

    mode: GenerationMode = Field(
        default=GenerationMode.TEXT_TO_IMAGE,
        description="Generation mode: text-to-image or image-to-image",
    )
    model_version: ModelVersion = Field(
        default=ModelVersion.NANO_BANANA_2,
        description="Nano Banana model version to use",
    )
    aspect_ratio: AspectRatio | None = Field(
        default=AspectRatio.SQUARE,
        description="Default aspect ratio for generated images. Can be overridden in tool call.",
    )
    temperature: float | None = Field(
        default=1.0, description="Controls randomness in generation. Range: 0.0-2.0"
    )
    max_output_tokens: int | None = Field(
        default=None, description="Maximum number of tokens to generate"
    )
    top_p: float | None = Field(
        default=None, description="Nucleus sampling parameter. Range: 0.0-1.0"
    )
    top_k: int | None = Field(default=None, description="Top-K sampling parameter")
    seed: int | None = Field(
        default=None, description="Random seed for reproducible generation"
    )
    stop_sequences: str = Field(default="", description="Stop sequences (one per line)")
    response_mime_type: str = Field(default="", description="MIME type for the response")
    safety_settings: str = Field(
        default="",
        description=(
            "Safety settings as JSON array. Example: "
            '[{"category":"HARM_CATEGORY_HARASSMENT","threshold":"BLOCK_MEDIUM_AND_ABOVE"}]'
        ),
    )
    custom_generation_config: str = Field(
        default="",
        description="Custom generation config as JSON to override default settings",
    )
    tool_name: str = Field(default="", description="Name of the tool")
    tool_description: str = Field(
        default="", description="Description of when to use this tool"
    )

    @field_validator(
        "temperature", "max_output_tokens", "top_p", "top_k", "seed", "aspect_ratio",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def required_secrets(cls) -> list[str]:
        return [API_KEY_SECRET]

    def to_generation_config(self, api_key: str) -> GenerationConfig:
        """Build the immutable tool config from the node fields.

        Malformed safety settings are logged and dropped.
        """
        try:
            safety_settings = parse_safety_settings(self.safety_settings)
        except ParseError as e:
            log.warning(f"Failed to parse safety settings: {e}")
            safety_settings = None

        return GenerationConfig(
            api_key=api_key,
            model_version=self.model_version.value,
            aspect_ratio=self.aspect_ratio.value if self.aspect_ratio else None,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            top_p=self.top_p,
            top_k=self.top_k,
            seed=self.seed,
            stop_sequences=parse_stop_sequences(self.stop_sequences),
            response_mime_type=self.response_mime_type or None,
            safety_settings=safety_settings,
            custom_generation_config=self.custom_generation_config or None,
        )

    async def init(self, context: ProcessingContext) -> NanoBananaTool:
        """Resolve the credential and return a configured tool.

        Raises:
            ApiKeyMissingError: If no API key is available.
        """
        api_key = await context.get_secret(API_KEY_SECRET)
        if not api_key:
            raise ApiKeyMissingError("Nano Banana API Key is required")

        tool = NanoBananaTool(
            self.to_generation_config(api_key), mode=self.mode.value
        )

        if self.tool_name:
            name = sanitize_tool_name(self.tool_name)
            if name:
                tool.name = name
            else:
                log.warning(
                    f"Tool name '{self.tool_name}' has no usable characters, keeping '{tool.name}'"
                )
        if self.tool_description:
            tool.description = self.tool_description

        log.debug(f"Initialized {tool.name} ({tool.mode}, model version {self.model_version.value})")
        return tool

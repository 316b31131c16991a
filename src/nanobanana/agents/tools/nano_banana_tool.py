"""
Nano Banana image generation tool.

Generates images with Google's Gemini image models ("Nano Banana") from a
text prompt, optionally combined with an input image. The tool returns a
`data:<mime>;base64,...` URL for the first generated image, or the full JSON
response when the model answered without an image (for example when a safety
filter blocked the prompt).
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict

import aiohttp

from nanobanana.agents.tools.base import Tool
from nanobanana.config.environment import Environment
from nanobanana.config.logging_config import get_logger
from nanobanana.image.config_resolver import resolve_generation_config
from nanobanana.image.errors import FetchError, GenerationError, ParseError
from nanobanana.image.ingest import ingest_image
from nanobanana.image.request_builder import (
    build_generate_url,
    build_request_body,
    redact_request_body,
    select_model,
)
from nanobanana.image.response import extract_result
from nanobanana.image.types import (
    GenerationConfig,
    GenerationResult,
    ImagePart,
    InvocationRequest,
    ToolMode,
)
from nanobanana.workflows.processing_context import ProcessingContext

log = get_logger(__name__)

TEXT_TO_IMAGE: ToolMode = "text-to-image"
IMAGE_TO_IMAGE: ToolMode = "image-to-image"

_ASPECT_RATIO_PROPERTY = {
    "type": "string",
    "description": 'Aspect ratio of the generated image (e.g., "1:1", "16:9", "9:16")',
}
_CUSTOM_CONFIG_PROPERTY = {
    "type": "string",
    "description": "Custom generation config as JSON string to override default settings",
}

TEXT_TO_IMAGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "Text prompt for image generation",
        },
        "aspectRatio": _ASPECT_RATIO_PROPERTY,
        "customConfig": _CUSTOM_CONFIG_PROPERTY,
    },
    "required": ["prompt"],
}

IMAGE_TO_IMAGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "Text prompt describing the desired transformation or modification",
        },
        "image": {
            "type": "string",
            "description": "Base64 encoded image data (data:image/xxx;base64,...) or image URL",
        },
        "aspectRatio": _ASPECT_RATIO_PROPERTY,
        "customConfig": _CUSTOM_CONFIG_PROPERTY,
    },
    "required": ["prompt", "image"],
}

_DEFAULTS: Dict[str, tuple[str, str, Dict[str, Any]]] = {
    TEXT_TO_IMAGE: (
        "nano_banana_text_to_image",
        "Generate an image from a text prompt using Google Nano Banana",
        TEXT_TO_IMAGE_SCHEMA,
    ),
    IMAGE_TO_IMAGE: (
        "nano_banana_image_to_image",
        "Generate an image from a text prompt and an input image using Google Nano Banana",
        IMAGE_TO_IMAGE_SCHEMA,
    ),
}


@dataclass
class GenerationOutcome:
    result: GenerationResult
    model_id: str
    diagnostics: list[ParseError] = field(default_factory=list)


class NanoBananaTool(Tool):
    """
    Calls the Gemini generateContent endpoint with an image response modality.

    The tool holds an immutable GenerationConfig and keeps no per-call state,
    so one instance can serve concurrent invocations.
    """

    def __init__(
        self,
        config: GenerationConfig,
        mode: ToolMode = TEXT_TO_IMAGE,
        base_url: str | None = None,
    ):
        if mode not in _DEFAULTS:
            raise ValueError(
                f"Unsupported mode '{mode}', expected one of {list(_DEFAULTS)}"
            )
        name, description, schema = _DEFAULTS[mode]
        self.config = config
        self.mode = mode
        self.name = name
        self.description = description
        self.input_schema = copy.deepcopy(schema)
        self.base_url = base_url or Environment.get_api_base_url()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key,
        }

    async def generate(self, arguments: Dict[str, Any]) -> GenerationOutcome:
        """Run one generation and return the structured outcome.

        Errors are raised unwrapped; `invoke` is the entry point that applies
        the uniform GenerationError translation.

        Raises:
            ValidationError: If the prompt is missing or blank.
            FetchError: If the image download or the API call fails.
        """
        request = InvocationRequest.from_arguments(arguments)

        async with aiohttp.ClientSession() as session:
            image_part: ImagePart | None = None
            if self.mode == IMAGE_TO_IMAGE and request.image:
                image_part = await ingest_image(request.image, session)

            resolved = resolve_generation_config(
                self.config,
                aspect_ratio=request.aspect_ratio,
                call_override=request.custom_config,
            )
            body = build_request_body(
                request.prompt,
                resolved.generation_config,
                image_part=image_part,
                safety_settings=self.config.safety_settings,
            )

            model_id = select_model(self.config.model_version)
            url = build_generate_url(model_id, self.base_url)
            log.info(f"Requesting {self.mode} generation from {model_id}")
            log.debug(f"Request body: {redact_request_body(body)}")

            async with session.post(url, json=body, headers=self._headers()) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    raise FetchError(
                        f"Nano Banana API Error {response.status}: {text}",
                        status=response.status,
                        text=text,
                    )
                payload = await response.json()

        return GenerationOutcome(
            result=extract_result(payload),
            model_id=model_id,
            diagnostics=resolved.diagnostics,
        )

    async def invoke(self, arguments: Dict[str, Any]) -> str:
        """Generate an image and return a data URL or the raw JSON response.

        Raises:
            GenerationError: For every failure, with the original message as
                `detail`.
        """
        try:
            outcome = await self.generate(arguments)
        except Exception as e:
            detail = str(e) or type(e).__name__
            log.error(f"Nano Banana generation failed: {detail}")
            raise GenerationError(detail) from e
        return outcome.result.to_string()

    async def process(self, context: ProcessingContext, params: Dict[str, Any]) -> str:
        return await self.invoke(params)

    def user_message(self, params: Dict[str, Any]) -> str:
        prompt = str(params.get("prompt") or "")
        msg = f"Generating image for '{prompt}'..."
        if len(msg) > 80:
            msg = "Generating image with Nano Banana..."
        return msg

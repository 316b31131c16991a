"""Nano Banana request/response pipeline."""

from nanobanana.image.config_resolver import (
    ResolvedGenerationConfig,
    merge_generation_config,
    resolve_generation_config,
)
from nanobanana.image.errors import (
    FetchError,
    GenerationError,
    NanoBananaError,
    ParseError,
    ValidationError,
)
from nanobanana.image.ingest import ingest_image, parse_data_url
from nanobanana.image.request_builder import build_request_body, select_model
from nanobanana.image.response import extract_result
from nanobanana.image.types import (
    GenerationConfig,
    GenerationResult,
    ImagePart,
    ImageResult,
    InvocationRequest,
    RawResult,
)

__all__ = [
    "FetchError",
    "GenerationConfig",
    "GenerationError",
    "GenerationResult",
    "ImagePart",
    "ImageResult",
    "InvocationRequest",
    "NanoBananaError",
    "ParseError",
    "RawResult",
    "ResolvedGenerationConfig",
    "ValidationError",
    "build_request_body",
    "extract_result",
    "ingest_image",
    "merge_generation_config",
    "parse_data_url",
    "resolve_generation_config",
    "select_model",
]

"""
Generation config resolution.

Builds the `generationConfig` object sent to Gemini from three layers:

1. the tool-level GenerationConfig (aspect ratio and sampling parameters),
2. the call-time override document passed as the `customConfig` argument,
3. the node-level override document stored on the GenerationConfig.

Layers are shallow-merged in that order, so node-level keys win over
call-time keys. Override documents that cannot be parsed are reported as
ParseError diagnostics and skipped.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from nanobanana.config.logging_config import get_logger
from nanobanana.image.errors import ParseError
from nanobanana.image.types import GenerationConfig, GenerationConfigOverride

log = get_logger(__name__)

CALL_OVERRIDE_SOURCE = "call"
NODE_OVERRIDE_SOURCE = "node"


@dataclass
class ResolvedGenerationConfig:
    generation_config: dict[str, Any]
    diagnostics: list[ParseError] = field(default_factory=list)


def parse_override_document(document: str, source: str) -> dict[str, Any]:
    """Parse a JSON override document into a partial generation config.

    Values are passed through exactly as written; the backend decides
    whether they are acceptable.

    Raises:
        ParseError: If the document is not valid JSON or not a JSON object.
    """
    try:
        raw = json.loads(document)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {source} override: {e}", source) from e

    if not isinstance(raw, dict):
        raise ParseError(
            f"The {source} override must be a JSON object, got {type(raw).__name__}",
            source,
        )

    return GenerationConfigOverride.model_construct(**raw).as_dict()


def merge_generation_config(
    current: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    """Shallow-merge `override` over `current` and return a new dict.

    Keys in `override` replace keys in `current`; nested objects are replaced,
    not merged. Neither input is modified.
    """
    merged = dict(current)
    merged.update(override)
    return merged


def base_generation_config(
    config: GenerationConfig, aspect_ratio: str | None = None
) -> dict[str, Any]:
    """Translate the tool-level settings into Gemini's camelCase keys.

    Unset fields are left out entirely.
    """
    generation_config: dict[str, Any] = {"responseModalities": ["IMAGE"]}

    ratio = aspect_ratio or config.aspect_ratio
    if ratio:
        generation_config["imageConfig"] = {"aspectRatio": ratio}

    if config.temperature is not None:
        generation_config["temperature"] = config.temperature
    if config.max_output_tokens is not None:
        generation_config["maxOutputTokens"] = config.max_output_tokens
    if config.top_p is not None:
        generation_config["topP"] = config.top_p
    if config.top_k is not None:
        generation_config["topK"] = config.top_k
    if config.seed is not None:
        generation_config["seed"] = config.seed
    if config.stop_sequences:
        generation_config["stopSequences"] = list(config.stop_sequences)
    if config.response_mime_type:
        generation_config["responseMimeType"] = config.response_mime_type

    return generation_config


def _apply_override(
    resolved: ResolvedGenerationConfig, document: str | None, source: str
) -> None:
    if not document or not document.strip():
        return
    try:
        override = parse_override_document(document, source)
    except ParseError as e:
        log.warning(f"Failed to parse {source} custom config, using previous settings: {e}")
        resolved.diagnostics.append(e)
        return
    resolved.generation_config = merge_generation_config(
        resolved.generation_config, override
    )


def resolve_generation_config(
    config: GenerationConfig,
    aspect_ratio: str | None = None,
    call_override: str | None = None,
) -> ResolvedGenerationConfig:
    """Resolve the generationConfig for one invocation.

    Args:
        config: Tool-level settings; its `custom_generation_config` is the
            node-level override document.
        aspect_ratio: Call-time aspect ratio, preferred over the default.
        call_override: Call-time JSON override document.

    Returns:
        The merged config plus any ParseError diagnostics.
    """
    resolved = ResolvedGenerationConfig(
        generation_config=base_generation_config(config, aspect_ratio)
    )
    _apply_override(resolved, call_override, CALL_OVERRIDE_SOURCE)
    # Node-level settings are applied last and win over the call's own overrides
    _apply_override(resolved, config.custom_generation_config, NODE_OVERRIDE_SOURCE)

    log.debug(f"Resolved generation config: {resolved.generation_config}")
    return resolved

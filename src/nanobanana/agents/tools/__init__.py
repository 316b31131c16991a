"""Agent tools exposed by nanobanana."""

from .base import Tool
from .nano_banana_tool import (
    IMAGE_TO_IMAGE,
    TEXT_TO_IMAGE,
    GenerationOutcome,
    NanoBananaTool,
)

__all__ = [
    "Tool",
    "NanoBananaTool",
    "GenerationOutcome",
    "TEXT_TO_IMAGE",
    "IMAGE_TO_IMAGE",
]

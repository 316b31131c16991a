"""
Error types raised by the Nano Banana generation pipeline.

Only ParseError is treated as non-fatal; it is logged and collected as a
diagnostic by the config resolver. Everything else reaching the tool boundary
is re-raised as a GenerationError.
"""


class NanoBananaError(Exception):
    """Base class for all pipeline errors."""

    pass


class ValidationError(NanoBananaError):
    """Invalid tool arguments, detected before any network activity."""

    pass


class FetchError(NanoBananaError):
    """A network call returned a non-success status."""

    def __init__(self, message: str, status: int | None = None, text: str = ""):
        super().__init__(message)
        self.status = status
        self.text = text


class ParseError(NanoBananaError):
    """A JSON document supplied as configuration could not be used."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class GenerationError(NanoBananaError):
    """Uniform error raised by the tool for every failed invocation."""

    PREFIX = "Failed to generate image with Nano Banana"

    def __init__(self, detail: str):
        super().__init__(f"{self.PREFIX}: {detail}")
        self.detail = detail

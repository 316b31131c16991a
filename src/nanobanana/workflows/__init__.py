"""Host-facing runtime objects."""

from nanobanana.workflows.processing_context import ProcessingContext

__all__ = ["ProcessingContext"]

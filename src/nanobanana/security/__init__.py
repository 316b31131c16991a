"""
Credential lookup for nanobanana.
"""

from nanobanana.security.secret_helper import (
    ApiKeyMissingError,
    get_secret,
    get_secret_required,
)

__all__ = [
    "ApiKeyMissingError",
    "get_secret",
    "get_secret_required",
]

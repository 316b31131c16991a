"""
Helper functions for retrieving secrets at runtime.

Secrets are looked up in an explicit mapping first (for example the one a
host passes through the processing context), then in secrets.yaml and the
process environment via `Environment`.
"""

from typing import Mapping, Optional

from nanobanana.config.environment import Environment
from nanobanana.config.logging_config import get_logger

log = get_logger(__name__)


class ApiKeyMissingError(Exception):
    """Exception raised when API keys are not set in the configuration"""

    pass


def get_secret(
    key: str,
    secrets: Optional[Mapping[str, str]] = None,
    default: Optional[str] = None,
    check_env: bool = True,
) -> Optional[str]:
    """
    Get a secret value.

    1. Check the explicit secrets mapping
    2. Check secrets.yaml, settings.yaml and the environment
    3. Return default

    Args:
        key: The secret key (e.g., "NANO_BANANA_API_KEY").
        secrets: Optional mapping supplied by the caller.

    Returns:
        The secret value, or None if not found.
    """
    if secrets and secrets.get(key):
        log.debug(f"Secret '{key}' found in supplied secrets")
        return secrets[key]

    if check_env:
        value = Environment.get(key)
        if value:
            log.debug(f"Secret '{key}' found in configuration")
            return str(value)

    if default is not None:
        log.debug(f"Secret '{key}' not found, using default value")
        return default

    log.debug(f"Secret '{key}' not found")
    return None


def get_secret_required(
    key: str, secrets: Optional[Mapping[str, str]] = None
) -> str:
    """
    Get a required secret value.

    Same as get_secret() but raises ApiKeyMissingError if the secret is not
    found.
    """
    value = get_secret(key, secrets)
    if value:
        return value

    raise ApiKeyMissingError(
        f"Required secret '{key}' not found, set it in secrets.yaml or the environment."
    )

"""Utility functions for reading configuration files and registering settings.

Every key nanobanana reads is registered here, so `nanobanana settings` can
list it. Secrets and plain settings share one registry keyed by env var;
registering a key again replaces the earlier entry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

SETTINGS_FILE = "settings.yaml"
SECRETS_FILE = "secrets.yaml"
MISSING_MESSAGE = "Missing required environment variable: {}"
NOT_GIVEN = object()

DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass(frozen=True)
class ConfigKey:
    env_var: str
    group: str
    description: str
    enum: List[str] | None = None
    secret: bool = False


_registry: Dict[str, ConfigKey] = {}


def register_setting(
    env_var: str, group: str, description: str, enum: List[str] | None = None
) -> ConfigKey:
    key = ConfigKey(env_var=env_var, group=group, description=description, enum=enum)
    _registry[env_var] = key
    return key


def register_secret(env_var: str, group: str, description: str) -> ConfigKey:
    key = ConfigKey(env_var=env_var, group=group, description=description, secret=True)
    _registry[env_var] = key
    return key


def get_settings_registry() -> List[ConfigKey]:
    return [k for k in _registry.values() if not k.secret]


def get_secrets_registry() -> List[ConfigKey]:
    return [k for k in _registry.values() if k.secret]


register_secret(
    "NANO_BANANA_API_KEY",
    group="Google",
    description=(
        "API key for Google Nano Banana (Gemini image generation). "
        "Sent as the x-goog-api-key header on every generation request."
    ),
)
register_setting(
    "NANO_BANANA_API_BASE",
    group="Google",
    description=(
        "Base URL of the Gemini models endpoint. The model id and "
        "':generateContent' are appended to it."
    ),
)
register_setting(
    "NANOBANANA_LOG_LEVEL",
    group="Logging",
    description="Default log level when LOG_LEVEL and DEBUG are unset",
    enum=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
)


def get_system_file_path(filename: str) -> Path:
    """Return the path to the configuration file for the current OS."""
    import platform

    os_name = platform.system()
    if os_name in {"Linux", "Darwin"}:
        return Path.home() / ".config" / "nanobanana" / filename
    elif os_name == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata is not None:
            return Path(appdata) / "nanobanana" / filename
        return Path("data") / filename
    return Path("data") / filename


def load_settings() -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Load settings and secrets from YAML files."""
    settings_file = get_system_file_path(SETTINGS_FILE)
    secrets_file = get_system_file_path(SECRETS_FILE)

    settings: Dict[str, Any] = {}
    secrets: Dict[str, Any] = {}

    if settings_file.exists():
        with open(settings_file, "r") as f:
            settings = yaml.safe_load(f) or {}

    if secrets_file.exists():
        with open(secrets_file, "r") as f:
            secrets = yaml.safe_load(f) or {}

    return settings, secrets


def get_value(
    key: str,
    settings: Dict[str, Any],
    secrets: Dict[str, Any],
    default_env: Dict[str, Any],
    default: Any = NOT_GIVEN,
) -> Any:
    """Retrieve a configuration value from secrets, settings, or environment."""
    value = secrets.get(key) or settings.get(key)
    if value is None or str(value) == "":
        value = os.environ.get(key)

    if value is None:
        value = default_env.get(key, default)

    if value is not NOT_GIVEN:
        return value
    raise Exception(MISSING_MESSAGE.format(key))

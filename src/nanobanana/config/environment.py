"""
Environment Configuration Management Module

This module provides centralized configuration for nanobanana through the
Environment class. Values are resolved from several sources:

- secrets.yaml / settings.yaml under the user config folder
- Environment variables (including those loaded from .env files)
- Default values

Environment variables only win when the YAML files leave a key empty, which
keeps a locally configured key stable across shells.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from nanobanana.config.settings import (
    DEFAULT_API_BASE_URL,
    get_value,
    load_settings,
)

DEFAULT_ENV = {
    "ENV": "development",
    "LOG_LEVEL": None,
    "DEBUG": None,
    "NANO_BANANA_API_BASE": DEFAULT_API_BASE_URL,
}


def load_dotenv_files():
    """Load environment variables from .env files based on current environment."""
    from dotenv import load_dotenv

    # <repo>/src/nanobanana/config/environment.py -> <repo>
    project_root = Path(__file__).parent.parent.parent.parent

    env_name = os.environ.get("ENV", "development")

    # Later files do not override earlier ones or the real environment
    env_files = [
        Path.cwd() / ".env",
        project_root / ".env",
        project_root / f".env.{env_name}",
        project_root / f".env.{env_name}.local",
    ]

    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=False)


class Environment(object):
    """
    Manages configuration values and provides defaults.

    Settings and secrets are loaded lazily on first access and cached on the
    class. Tests reset the cache with `Environment.reset()`.
    """

    settings: Optional[Dict[str, Any]] = None
    secrets: Optional[Dict[str, Any]] = None

    @classmethod
    def load_settings(cls):
        load_dotenv_files()
        cls.settings, cls.secrets = load_settings()

    @classmethod
    def reset(cls):
        cls.settings = None
        cls.secrets = None

    @classmethod
    def get(cls, key: str, default: Any = None):
        if cls.settings is None or cls.secrets is None:
            cls.load_settings()
        assert cls.settings is not None
        assert cls.secrets is not None
        return get_value(key, cls.settings, cls.secrets, DEFAULT_ENV, default)

    @classmethod
    def get_env(cls):
        """
        The environment is either "development", "production" or "test".
        """
        return cls.get("ENV")

    @classmethod
    def get_api_base_url(cls) -> str:
        """
        Base URL of the Gemini models endpoint, without a trailing slash.
        """
        return str(cls.get("NANO_BANANA_API_BASE") or DEFAULT_API_BASE_URL).rstrip("/")

    @classmethod
    def get_log_level(cls):
        """Return desired log level string.

        Priority:
        1) LOG_LEVEL env
        2) If DEBUG env is truthy, return "DEBUG"
        3) NANOBANANA_LOG_LEVEL from settings.yaml or env via get()
           (default "INFO")
        """
        level = os.getenv("LOG_LEVEL")
        if level:
            return str(level).upper()
        debug_env = os.getenv("DEBUG")
        if debug_env and debug_env.lower() not in ("0", "false", "no", "off", ""):
            return "DEBUG"
        return str(cls.get("NANOBANANA_LOG_LEVEL") or "INFO").upper()

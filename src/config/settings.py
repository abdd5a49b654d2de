"""
Configuration settings for the application.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from src.exceptions import ConfigurationError

# Load environment variables from .env file
_ = load_dotenv()

DEFAULT_BACKUP_DIR = os.path.join("~", ".spectre", "backups")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
        self.openai_model: str = self._get_env("OPENAI_MODEL", "gpt-4o-mini")
        self.openai_api_base: str = self._get_env(
            "OPENAI_API_BASE", "https://api.openai.com/v1"
        )
        self.backup_dir: str = os.path.abspath(
            os.path.expanduser(self._get_env("SPECTRE_BACKUP_DIR", DEFAULT_BACKUP_DIR))
        )
        root = os.getenv("SPECTRE_WORKSPACE_ROOT")
        self.workspace_root: Optional[str] = (
            os.path.abspath(os.path.expanduser(root)) if root else None
        )
        self.debug: bool = self._get_bool_env("SPECTRE_DEBUG", False)
        self.max_tokens: int = self._get_int_env("SPECTRE_MAX_TOKENS", 2048)
        self.temperature: float = self._get_float_env("SPECTRE_TEMPERATURE", 0.7)

    def require_openai_api_key(self) -> str:
        """Return the API key, raise if missing.

        Only the model client needs it, so the check is deferred until the
        client is built; the tool layer runs without credentials.
        """
        if not self.openai_api_key:
            raise ConfigurationError(
                "Required environment variable OPENAI_API_KEY is not set"
            )
        return self.openai_api_key

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_bool_env(self, key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    def _get_int_env(self, key: str, default: int) -> int:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be an integer")

    def _get_float_env(self, key: str, default: float) -> float:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be a number")


# Global settings instance
settings = Settings()

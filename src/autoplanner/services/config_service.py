"""Configuration service for the planner.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json under the platform config directory
- Creating the default config on first run
- Dotted-key get/set/reset (e.g. ``scheduling.buffer_minutes``)
- Building the seed provider for a planner session
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from autoplanner.exceptions import ValidationError
from autoplanner.models.config_models import AppConfig
from autoplanner.services.seed import SeedProvider, file_seed_provider, sample_seed

_APP_NAME = "autoplanner"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Override for the config directory (tests)
        """
        self.config_dir = Path(config_dir or user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dot-separated key and save.

        Raises:
            KeyError: If the key does not exist
            ValidationError: If the resulting configuration is invalid
        """
        self.get(key)
        data = self.config.model_dump()

        current = data
        parts = key.split(".")
        for part in parts[:-1]:
            current = current[part]
        current[parts[-1]] = value

        try:
            self._config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for '{key}': {e.errors()[0]['msg']}") from e
        self.save_config()
        return self._config

    def reset(self, key: str | None = None) -> AppConfig:
        """Reset the whole configuration, or one key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return self._config

        default_value: Any = AppConfig()
        for part in key.split("."):
            if not isinstance(default_value, BaseModel) or part not in type(
                default_value
            ).model_fields:
                raise KeyError(key)
            default_value = getattr(default_value, part)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump()
        return self.set(key, default_value)

    def seed_provider(self, seed_file: str | None = None) -> SeedProvider:
        """Seed for a new session: an explicit file, the configured one, or the sample."""
        path = seed_file or self.config.seed_file
        if path:
            return file_seed_provider(path)
        return sample_seed


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service

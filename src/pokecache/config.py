"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (POKECACHE__REFRESH__INTERVAL_SECONDS=600)
  3. pokecache.yaml         (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("pokecache")
_CONFIG_FILE_NAME = "pokecache.yaml"


def _find_config_file() -> str | None:
    """Return the path of the first pokecache.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILE_NAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class RefreshSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval_seconds: float = Field(default=3600.0, gt=0)
    # Upper bound on one fetch so a hung request can't hold the single-flight guard.
    timeout_seconds: float = Field(default=60.0, gt=0)


class ProviderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    endpoint: str = "https://beta.pokeapi.co/graphql/v1beta"
    language_id: int = 9  # English
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class CommandSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prefix: str = "!poke"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: POKECACHE__PROVIDER__LANGUAGE_ID=5
        env_prefix="POKECACHE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    refresh: RefreshSettings = RefreshSettings()
    provider: ProviderSettings = ProviderSettings()
    commands: CommandSettings = CommandSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )

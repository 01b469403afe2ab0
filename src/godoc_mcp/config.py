"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (GODOC_MCP__FETCHER__TIMEOUT_SECONDS=10)
  2. godoc-mcp.yaml         (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. Settings are
read once at startup and never reloaded.
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

from godoc_mcp import __version__

CONFIG_FILENAME = "godoc-mcp.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("godoc-mcp")


def _find_config_file() -> str | None:
    """Return the path of the first godoc-mcp.yaml found, or None."""
    candidates = [
        Path(CONFIG_FILENAME),
        Path(_DEFAULT_CONFIG_DIR) / CONFIG_FILENAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class _Section(BaseModel):
    # Typos in nested keys fail loudly instead of silently using a default
    model_config = ConfigDict(extra="forbid")


class CacheSettings(_Section):
    ttl_seconds: int = Field(default=3600, gt=0)
    volatile_ttl_seconds: int = Field(default=300, gt=0)  # search results, version lists
    max_entries: int = Field(default=1000, gt=0)


class FetcherSettings(_Section):
    base_url: str = "https://pkg.go.dev"
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = f"godoc-mcp/{__version__}"


class IndexSettings(_Section):
    url: str = "https://index.golang.org/index"
    refresh_seconds: int = Field(default=3600, gt=0)
    search_limit: int = Field(default=50, gt=0)


class LoggingSettings(_Section):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"
    cache_stats_interval_seconds: int = Field(default=60, gt=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: GODOC_MCP__CACHE__MAX_ENTRIES=500
        env_prefix="GODOC_MCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    index: IndexSettings = IndexSettings()
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

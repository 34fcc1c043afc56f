"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (PREACTDOCS__SERVER__TRANSPORT=http)
  2. preactdocs.yaml        (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first preactdocs.yaml found, or None."""
    candidates = [
        Path("preactdocs.yaml"),
        Path(platformdirs.user_config_dir("preactdocs")) / "preactdocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class CacheSettings(BaseModel):
    ttl_seconds: int = Field(default=300, ge=0)


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0
    user_agent: str = "preactdocs/1.0"


class SearchSettings(BaseModel):
    # Maximum edit distance as a fraction of the query term length
    fuzzy: float = Field(default=0.2, ge=0.0, le=1.0)
    prefix: bool = True
    max_results: int = Field(default=10, gt=0)
    max_query_length: int = Field(default=500, gt=0)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: PREACTDOCS__SERVER__PORT=9090
        env_prefix="PREACTDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    search: SearchSettings = SearchSettings()
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
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            # dotenv and file secrets intentionally excluded
        )

"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MANTINECONTEXT__DOCS__MANTINE_VERSION=7.17.0)
  2. mantinecontext.yaml    (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; every field has a default. Settings are
read by the documentation service at call time, so a replaced ``Settings``
object takes effect on the next request.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from mantinecontext.models.cache import CacheConfig

_DEFAULT_CACHE_DIR = str(Path(platformdirs.user_cache_dir("mantinecontext")) / "docs")

# 24 hours
DEFAULT_TTL_MS = 86_400_000


def _find_config_file() -> str | None:
    """Return the path of the first mantinecontext.yaml found, or None."""
    candidates = [
        Path("mantinecontext.yaml"),
        Path(platformdirs.user_config_dir("mantinecontext")) / "mantinecontext.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DocsSettings(BaseModel):
    base_url: str = "https://mantine.dev"
    mantine_version: str = "7.16.2"
    search_path: str = "/api/search"
    listing_path: str = "/core/button"
    user_agent: str = "MantineMcpServer/1.0.0"


class CacheSettings(BaseModel):
    dir: str = _DEFAULT_CACHE_DIR
    # None disables documentation caching entirely (no reads, no writes)
    documentation: CacheConfig | None = CacheConfig(ttl=DEFAULT_TTL_MS, storage="file")


class RendererSettings(BaseModel):
    headless: bool = True
    navigation_timeout_seconds: float = 30.0
    ready_selector: str = ".mantine-Code-root"
    ready_timeout_seconds: float = 5.0
    launch_args: list[str] = ["--no-sandbox", "--disable-setuid-sandbox"]


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MANTINECONTEXT__CACHE__DOCUMENTATION__TTL=0
        env_prefix="MANTINECONTEXT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    docs: DocsSettings = DocsSettings()
    cache: CacheSettings = CacheSettings()
    renderer: RendererSettings = RendererSettings()
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

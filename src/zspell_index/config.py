"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (ZSPELL_INDEX__SOURCE__REVISION=abc123)
  2. zspell-index.yaml      (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults. The API
token is the one exception: it is read from the variable named by
``fetcher.token_env_var`` (``GITHUB_API_TOKEN`` by default) so the usual
GitHub tooling convention keeps working.
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

from zspell_index import __version__

_CONFIG_FILE_NAME = "zspell-index.yaml"


def _find_config_file() -> str | None:
    """Return the path of the first zspell-index.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILE_NAME),
        Path(platformdirs.user_config_dir("zspell-index")) / _CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SourceConfig(BaseModel):
    """Immutable description of where dictionaries are crawled from."""

    model_config = ConfigDict(frozen=True)

    api_url: str
    branch: str
    dictionaries_path: str
    source_tag: str
    revision: str | None = None  # Pin to a commit instead of the branch head

    def commits_url(self) -> str:
        return f"{self.api_url}/commits/{self.branch}?per_page=1"

    def contents_url(self, revision: str) -> str:
        return f"{self.api_url}/contents/{self.dictionaries_path}?ref={revision}"


class SourceSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api_url: str = "https://api.github.com/repos/wooorm/dictionaries"
    branch: str = "main"
    dictionaries_path: str = "dictionaries"
    source_tag: str = Field(default="source-wooorm", pattern=r"^source-[a-z0-9_-]+$")
    revision: str | None = None


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = f"zspell-index/{__version__}"
    token_env_var: str = "GITHUB_API_TOKEN"


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: str = "."
    file_name: str = "zspell-index.json"
    pretty_file_name: str = "zspell-index-pretty.json"
    incomplete_marker: str = "incomplete"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: ZSPELL_INDEX__FETCHER__TIMEOUT_SECONDS=30
        env_prefix="ZSPELL_INDEX__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    source: SourceSettings = SourceSettings()
    fetcher: FetcherSettings = FetcherSettings()
    output: OutputSettings = OutputSettings()
    logging: LoggingSettings = LoggingSettings()

    def source_config(self) -> SourceConfig:
        return SourceConfig(**self.source.model_dump())

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

"""Site configuration from environment variables and a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import CopyRule, Redirect, Route, StylesheetRule

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("sitewright.yaml")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SITEWRIGHT_", case_sensitive=False, populate_by_name=True
    )

    input_root: Path = Path("public")
    output_root: Path = Path("dist")
    base_pattern: str = "**/*.html"
    page_pattern: str = "**/*.md"
    url_root: str = ""
    markdown_extensions: list[str] = Field(default_factory=list)

    clean: bool = False
    safe_clean: bool = True
    trash_root: Path = Path(".sitewright/trash")
    file_mode: int = 0o644

    # Read from SITEWRIGHT_COPY; files and keyword arguments use ``copy``
    copy_rules: list[CopyRule] = Field(default_factory=list, validation_alias="sitewright_copy")
    stylesheets: list[StylesheetRule] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    redirects: list[Redirect] = Field(default_factory=list)
    redirect_template: Path | None = None

    verbose: bool = False

    @model_validator(mode="before")
    @classmethod
    def _copy_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "copy" in data:
            data["copy_rules"] = data.pop("copy")
        if "copy_rules" in data:
            # Explicit values win over the environment
            data.pop("sitewright_copy", None)
        return data


def load_settings(config_path: Path | None = None, **overrides: object) -> Settings:
    """Load settings from a YAML file layered over the environment.

    Args:
        config_path: YAML file to read; ``sitewright.yaml`` is used when it
            exists and no path is given
        overrides: Values that take precedence over the file (e.g. CLI flags)

    Returns:
        Validated settings
    """
    data: dict = {}

    if config_path is None and DEFAULT_CONFIG_FILE.is_file():
        config_path = DEFAULT_CONFIG_FILE

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        logger.debug(f"Loaded configuration from {config_path}")

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

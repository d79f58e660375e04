"""Configuration models for rdfconv."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "rdfconv.yaml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


class ConvertConfig(BaseModel):
    inputs: List[str] = Field(default_factory=list)
    from_format: Optional[str] = None
    to_format: str = "jsonld"
    output: Optional[str] = None
    verbose: bool = False
    log_level: LogLevel = "WARNING"
    sniff_bytes: int = Field(1024, ge=1)
    url_timeout: float = Field(30.0, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def load_config_file(path: Path) -> dict[str, object]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse {path}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def merge_config(config_path: Path | None, cli_options: dict[str, object]) -> ConvertConfig:
    """Options given on the command line win over the configuration file."""
    if config_path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        config_path = candidate if candidate.is_file() else None
    file_overrides = load_config_file(config_path) if config_path is not None else {}
    explicit = {key: value for key, value in cli_options.items() if value is not None}
    return ConvertConfig(**{**file_overrides, **explicit})


__all__ = ["CONFIG_FILENAME", "ConfigError", "ConvertConfig", "load_config_file", "merge_config"]

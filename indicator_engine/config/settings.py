"""
Central configuration management using Pydantic settings.

Provides type-safe configuration with validation, environment variable
support (``INDICATOR_ENGINE_`` prefix, ``__`` for nested sections) and
optional YAML configuration file loading.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from indicator_engine.core.data_types import SourceTag
from indicator_engine.core.exceptions import ConfigParseError, MissingConfigError


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format (json or text)")
    file_path: Path | None = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"Log format must be 'json' or 'text', got {v}")
        return fmt


class CalculationSettings(BaseModel):
    """Indicator calculation settings."""

    default_source: str = Field(
        default=SourceTag.CLOSE.value, description="Source used when none is configured"
    )
    strict_sources: bool = Field(
        default=False,
        description="Raise on unknown source tags instead of falling back to close",
    )

    @field_validator("default_source")
    @classmethod
    def validate_default_source(cls, v: str) -> str:
        tag = SourceTag.parse(v)
        if tag is None:
            raise ValueError(f"Unknown source tag: {v}")
        return tag.value


class EngineSettings(BaseSettings):
    """Main engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="INDICATOR_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = "Indicator Engine"
    environment: str = Field(default="development", description="Environment name")
    config_file: Path | None = Field(default=None, description="Optional YAML overlay")

    calculation: CalculationSettings = Field(default_factory=CalculationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load_yaml_config(cls, config_path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file; a missing file yields {}."""
        config_path = Path(config_path)
        if not config_path.exists():
            return {}
        with open(config_path, "r") as f:
            try:
                config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                raise ConfigParseError(
                    f"Invalid YAML in {config_path}",
                    config_file=str(config_path),
                    line_number=mark.line + 1 if mark is not None else None,
                ) from e
        if not isinstance(config, dict):
            raise ConfigParseError(
                f"Top-level YAML value in {config_path} must be a mapping",
                config_file=str(config_path),
            )
        return config

    @classmethod
    def from_yaml(cls, config_path: Path) -> EngineSettings:
        """Build settings with values from a YAML file taking precedence.

        Raises:
            MissingConfigError: If the named file does not exist.
            ConfigParseError: If the file is not a valid YAML mapping.
        """
        if not Path(config_path).exists():
            raise MissingConfigError(
                f"Configuration file not found: {config_path}",
                config_key="config_file",
                config_file=str(config_path),
            )
        config = cls.load_yaml_config(config_path)
        return cls(**{**config, "config_file": config_path})


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Get cached settings instance.

    Loads base settings from the environment and .env file, then overlays
    the YAML file named by ``config_file`` when one is set.
    """
    settings = EngineSettings()
    if settings.config_file is not None:
        settings = EngineSettings.from_yaml(settings.config_file)
    return settings

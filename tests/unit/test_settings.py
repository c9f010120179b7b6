"""
Unit tests for config/settings.py
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from indicator_engine.config.settings import (
    CalculationSettings,
    EngineSettings,
    LoggingSettings,
    get_settings,
)
from indicator_engine.core.exceptions import ConfigParseError, MissingConfigError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from a developer's .env file and exported variables."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "INDICATOR_ENGINE_CONFIG_FILE",
        "INDICATOR_ENGINE_ENVIRONMENT",
        "INDICATOR_ENGINE_CALCULATION__STRICT_SOURCES",
        "INDICATOR_ENGINE_CALCULATION__DEFAULT_SOURCE",
        "INDICATOR_ENGINE_LOGGING__LEVEL",
        "INDICATOR_ENGINE_LOGGING__FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoggingSettings:
    """Tests for LoggingSettings model."""

    def test_default_values(self):
        """Test default logging settings."""
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.format == "text"
        assert settings.file_path is None

    def test_level_is_normalized(self):
        assert LoggingSettings(level="trace").level == "TRACE"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")


class TestCalculationSettings:
    """Tests for CalculationSettings model."""

    def test_default_values(self):
        settings = CalculationSettings()
        assert settings.default_source == "close"
        assert settings.strict_sources is False

    def test_default_source_is_normalized(self):
        assert CalculationSettings(default_source="HLC3").default_source == "hlc3"

    def test_unknown_default_source(self):
        with pytest.raises(ValidationError):
            CalculationSettings(default_source="median")


class TestEngineSettings:
    """Tests for EngineSettings."""

    def test_default_values(self):
        """Test default engine settings."""
        settings = EngineSettings()
        assert settings.app_name == "Indicator Engine"
        assert settings.environment == "development"
        assert settings.config_file is None
        assert settings.calculation.default_source == "close"

    def test_nested_environment_override(self, monkeypatch):
        """Test nested sections are read with the double-underscore delimiter."""
        monkeypatch.setenv("INDICATOR_ENGINE_CALCULATION__STRICT_SOURCES", "true")
        monkeypatch.setenv("INDICATOR_ENGINE_LOGGING__LEVEL", "debug")

        settings = EngineSettings()

        assert settings.calculation.strict_sources is True
        assert settings.logging.level == "DEBUG"

    def test_load_yaml_config(self, tmp_path):
        """Test loading configuration from YAML."""
        config_path = tmp_path / "engine.yaml"
        config_path.write_text(
            yaml.safe_dump({"environment": "production", "logging": {"format": "json"}})
        )

        config = EngineSettings.load_yaml_config(config_path)

        assert config == {"environment": "production", "logging": {"format": "json"}}

    def test_load_missing_yaml(self, tmp_path):
        assert EngineSettings.load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_load_empty_yaml(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        assert EngineSettings.load_yaml_config(config_path) == {}

    def test_malformed_yaml(self, tmp_path):
        """Test a syntax error is reported with its line number."""
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("environment: production\nlogging: [unclosed\n")

        with pytest.raises(ConfigParseError) as exc_info:
            EngineSettings.load_yaml_config(config_path)

        assert exc_info.value.config_file == str(config_path)
        assert exc_info.value.line_number is not None

    def test_non_mapping_yaml(self, tmp_path):
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigParseError):
            EngineSettings.load_yaml_config(config_path)

    def test_from_yaml(self, tmp_path):
        config_path = tmp_path / "engine.yaml"
        config_path.write_text(
            yaml.safe_dump({"calculation": {"default_source": "hl2", "strict_sources": True}})
        )

        settings = EngineSettings.from_yaml(config_path)

        assert settings.calculation.default_source == "hl2"
        assert settings.calculation.strict_sources is True
        assert Path(settings.config_file) == config_path

    def test_from_yaml_missing_file(self, tmp_path):
        """Test an explicitly named file must exist."""
        config_path = tmp_path / "missing.yaml"

        with pytest.raises(MissingConfigError) as exc_info:
            EngineSettings.from_yaml(config_path)

        assert exc_info.value.config_file == str(config_path)


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings(self):
        settings = get_settings()
        assert isinstance(settings, EngineSettings)

    def test_caching(self):
        """Test that settings are cached."""
        assert get_settings() is get_settings()

    def test_config_file_overlay(self, monkeypatch, tmp_path):
        """Test the YAML file named in the environment is applied."""
        config_path = tmp_path / "engine.yaml"
        config_path.write_text(yaml.safe_dump({"environment": "staging"}))
        monkeypatch.setenv("INDICATOR_ENGINE_CONFIG_FILE", str(config_path))

        settings = get_settings()

        assert settings.environment == "staging"

"""
Configuration module for the indicator engine.

Provides centralized configuration management using Pydantic settings
and optional YAML configuration files.
"""

from .settings import CalculationSettings, EngineSettings, LoggingSettings, get_settings

__all__ = ["CalculationSettings", "EngineSettings", "LoggingSettings", "get_settings"]

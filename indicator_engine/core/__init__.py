"""
Core module for the indicator engine.

Contains the data types, exception hierarchy, default constants and the
indicator registry.
"""

from .constants import (
    DEFAULT_LENGTHS,
    DEFAULT_MULTIPLIERS,
    DEFAULT_SOURCE,
)
from .data_types import (
    IndicatorConfig,
    IndicatorResult,
    IndicatorShape,
    InputKind,
    MarketData,
    SourceTag,
)
from .exceptions import (
    CalculationError,
    ConfigParseError,
    ConfigurationError,
    DataError,
    DataValidationError,
    IndicatorEngineError,
    IndicatorError,
    IndicatorNotFoundError,
    IndicatorNotImplementedError,
    InvalidConfigError,
    InvalidParameterError,
    InvalidSourceError,
    MissingConfigError,
    MissingDataError,
    ValidationError,
)
from .registry import IndicatorRegistry, register_indicator, registry

__all__ = [
    # Constants
    "DEFAULT_LENGTHS",
    "DEFAULT_MULTIPLIERS",
    "DEFAULT_SOURCE",
    # Data types
    "IndicatorConfig",
    "IndicatorResult",
    "IndicatorShape",
    "InputKind",
    "MarketData",
    "SourceTag",
    # Exceptions
    "CalculationError",
    "ConfigParseError",
    "ConfigurationError",
    "DataError",
    "DataValidationError",
    "IndicatorEngineError",
    "IndicatorError",
    "IndicatorNotFoundError",
    "IndicatorNotImplementedError",
    "InvalidConfigError",
    "InvalidParameterError",
    "InvalidSourceError",
    "MissingConfigError",
    "MissingDataError",
    "ValidationError",
    # Registry
    "IndicatorRegistry",
    "register_indicator",
    "registry",
]

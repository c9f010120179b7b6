"""
Custom exception hierarchy for the indicator engine.

Provides a structured exception hierarchy for different error categories:
- Validation errors (lengths, multipliers, source tags)
- Data errors (shape, availability)
- Indicator errors (lookup, calculation, unimplemented indicators)
- Configuration errors (invalid, missing, parsing)
"""

from __future__ import annotations

from typing import Any


class IndicatorEngineError(Exception):
    """Base exception for all indicator engine errors.

    All custom exceptions in the package inherit from this class.
    Provides structured error information including error code, message,
    and additional context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Optional error code for programmatic handling.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"[{self.error_code}] {self.message} - Details: {self.details}"
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(IndicatorEngineError):
    """Raised when parameter or input validation fails.

    Validation always happens before any computation, so a raised
    ValidationError means no partial result was produced.
    """

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        invalid_value: Any = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the validation error.

        Args:
            message: Human-readable error message.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            **kwargs: Additional context passed to parent.
        """
        details = kwargs.pop("details", {})
        if field_name:
            details["field_name"] = field_name
        if invalid_value is not None:
            details["invalid_value"] = str(invalid_value)
        super().__init__(message, details=details, **kwargs)
        self.field_name = field_name
        self.invalid_value = invalid_value


class InvalidParameterError(ValidationError):
    """Raised when an indicator parameter is out of its domain.

    Examples:
        - Non-positive or non-integral window length
        - Length outside an indicator's [min, max] range
        - Non-positive multiplier
        - Unknown moving-average type
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if expected:
            details["expected"] = expected
        super().__init__(
            message,
            field_name=parameter,
            invalid_value=value,
            details=details,
            **kwargs,
        )
        self.parameter = parameter
        self.value = value
        self.expected = expected


class InvalidSourceError(ValidationError):
    """Raised when an unknown source tag is requested in strict mode."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, field_name="source", invalid_value=source, **kwargs)
        self.source = source


# =============================================================================
# Data Errors
# =============================================================================


class DataError(IndicatorEngineError):
    """Base exception for data-related errors."""

    pass


class DataValidationError(DataError):
    """Raised when input data fails shape or invariant checks.

    Examples:
        - OHLC arrays of unequal length
        - Empty input series
        - Missing required OHLC fields
        - Raw array passed to an indicator that needs full market data
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if expected:
            details["expected"] = expected
        super().__init__(message, details=details, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected


class MissingDataError(DataError):
    """Raised when a series an indicator needs is not available.

    Examples:
        - Volume source requested on market data without volume
        - Volume-weighted indicator run without volume
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        super().__init__(message, details=details, **kwargs)
        self.field = field


# =============================================================================
# Indicator Errors
# =============================================================================


class IndicatorError(IndicatorEngineError):
    """Base exception for indicator-level errors."""

    def __init__(
        self,
        message: str,
        indicator: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if indicator:
            details["indicator"] = indicator
        super().__init__(message, details=details, **kwargs)
        self.indicator = indicator


class IndicatorNotFoundError(IndicatorError):
    """Raised when a name or alias is not present in the registry."""

    pass


class IndicatorNotImplementedError(IndicatorError):
    """Raised by indicators that are declared but not implemented."""

    def __init__(self, message: str, indicator: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message, indicator=indicator, error_code="NOT_IMPLEMENTED", **kwargs
        )


class CalculationError(IndicatorError):
    """Raised when a calculation produces output violating the result contract.

    Examples:
        - Output length differs from input length
        - Missing primary output in a multi-series result
    """

    def __init__(
        self,
        message: str,
        indicator: str | None = None,
        expected_length: int | None = None,
        actual_length: int | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if expected_length is not None:
            details["expected_length"] = expected_length
        if actual_length is not None:
            details["actual_length"] = actual_length
        super().__init__(message, indicator=indicator, details=details, **kwargs)
        self.expected_length = expected_length
        self.actual_length = actual_length


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IndicatorEngineError):
    """Base exception for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration is invalid.

    Examples:
        - Invalid settings value
        - Duplicate indicator registration
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        value: Any = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if value is not None:
            details["value"] = str(value)
        if expected:
            details["expected"] = expected
        super().__init__(message, details=details, **kwargs)
        self.config_key = config_key
        self.value = value
        self.expected = expected


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_file: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details=details, **kwargs)
        self.config_key = config_key
        self.config_file = config_file


class ConfigParseError(ConfigurationError):
    """Raised when a configuration file cannot be parsed.

    Examples:
        - Invalid YAML syntax
        - Top-level YAML value is not a mapping
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        line_number: int | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_file:
            details["config_file"] = config_file
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__(message, details=details, **kwargs)
        self.config_file = config_file
        self.line_number = line_number

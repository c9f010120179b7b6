"""
Parameter and input validation.

Every check here runs before any computation and raises on failure, so a
calculation either returns a complete result or nothing at all.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import as_float_array
from indicator_engine.core.data_types import MarketData
from indicator_engine.core.exceptions import (
    DataValidationError,
    InvalidParameterError,
    MissingDataError,
)

logger = logging.getLogger(__name__)


def validate_length(
    length: Any,
    min_length: int = 1,
    max_length: int | None = None,
    name: str = "length",
) -> int:
    """Validate a window length and return it as an int.

    Args:
        length: Candidate length. Integral floats are accepted, booleans are not.
        min_length: Smallest accepted value.
        max_length: Largest accepted value, unbounded when None.
        name: Parameter name used in error details.

    Raises:
        InvalidParameterError: If the length is not an integer in range.
    """
    if isinstance(length, bool) or not isinstance(length, numbers.Real):
        logger.debug(f"Rejected {name}={length!r}: not an integer")
        raise InvalidParameterError(
            "Length must be a positive integer",
            parameter=name,
            value=length,
            expected="positive integer",
        )
    if not isinstance(length, numbers.Integral):
        if not math.isfinite(length) or not float(length).is_integer():
            logger.debug(f"Rejected {name}={length!r}: not integral")
            raise InvalidParameterError(
                "Length must be a positive integer",
                parameter=name,
                value=length,
                expected="positive integer",
            )
    value = int(length)
    if value < 1:
        logger.debug(f"Rejected {name}={value}: not positive")
        raise InvalidParameterError(
            "Length must be a positive integer",
            parameter=name,
            value=value,
            expected="positive integer",
        )
    if value < min_length:
        raise InvalidParameterError(
            f"Length must be at least {min_length}",
            parameter=name,
            value=value,
            expected=f">= {min_length}",
        )
    if max_length is not None and value > max_length:
        raise InvalidParameterError(
            f"Length must not exceed {max_length}",
            parameter=name,
            value=value,
            expected=f"<= {max_length}",
        )
    return value


def validate_multiplier(multiplier: Any, name: str = "multiplier") -> float:
    """Validate a band or ATR multiplier and return it as a float."""
    if isinstance(multiplier, bool) or not isinstance(multiplier, numbers.Real):
        raise InvalidParameterError(
            "Multiplier must be a number",
            parameter=name,
            value=multiplier,
            expected="positive number",
        )
    value = float(multiplier)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(
            "Multiplier must be positive",
            parameter=name,
            value=value,
            expected="> 0",
        )
    return value


def validate_market_data(data: Any) -> MarketData:
    """Ensure ``data`` is non-empty MarketData with aligned OHLC arrays."""
    if not isinstance(data, MarketData):
        raise DataValidationError(
            "Market data with open, high, low and close is required",
            field="data",
            value=type(data).__name__,
            expected="MarketData",
        )
    if len(data) == 0:
        raise DataValidationError("Market data must not be empty", field="close", value=0)
    return data


def validate_volume_data(data: MarketData) -> MarketData:
    """Ensure market data carries a volume series."""
    validate_market_data(data)
    if data.volume is None:
        raise MissingDataError("Volume data is required", field="volume")
    return data


def validate_indicator_data(data: MarketData | np.ndarray) -> None:
    """Check prepared indicator input: non-empty, aligned arrays."""
    if isinstance(data, MarketData):
        validate_market_data(data)
        return
    if len(data) == 0:
        raise DataValidationError("Data must not be empty", field="data", value=0)


def prepare_input(data: Any) -> MarketData | np.ndarray:
    """Normalize indicator input to MarketData or a float64 series.

    Accepts MarketData, a mapping of OHLCV arrays, a polars or pandas
    DataFrame, or any 1-D numeric sequence.
    """
    if isinstance(data, MarketData):
        return data
    if isinstance(data, Mapping):
        return MarketData.from_dict(data)
    if hasattr(data, "columns"):
        return MarketData.from_frame(data)
    return as_float_array(data)

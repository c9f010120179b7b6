"""
Range-based primitives: true range, average true range and stochastic.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import (
    absolute,
    as_float_array,
    max_of,
    offset,
    safe_divide,
)
from indicator_engine.calculations.moving_averages import moving_average
from indicator_engine.calculations.statistics import highest, lowest
from indicator_engine.calculations.validation import validate_length
from indicator_engine.core.exceptions import DataValidationError


def _aligned(**series: Any) -> list[np.ndarray]:
    arrays = [as_float_array(values, name) for name, values in series.items()]
    lengths = {name: len(arr) for name, arr in zip(series, arrays)}
    if len(set(lengths.values())) > 1:
        raise DataValidationError(
            f"Input arrays must have equal length, got {lengths}",
            field=",".join(lengths),
            value=lengths,
            expected="equal lengths",
        )
    return arrays


def true_range(high: Any, low: Any, close: Any) -> np.ndarray:
    """max(h - l, |h - c[i-1]|, |l - c[i-1]|); h - l where no previous close exists."""
    high_arr, low_arr, close_arr = _aligned(high=high, low=low, close=close)
    prev_close = offset(close_arr, 1)
    high_low = high_arr - low_arr
    # max_of skips the NaN gaps left by a missing previous close
    tr = max_of(high_low, absolute(high_arr - prev_close), absolute(low_arr - prev_close))
    return np.where(np.isnan(high_low), np.nan, tr)


def atr(
    high: Any,
    low: Any,
    close: Any,
    length: int,
    smoothing: str = "rma",
) -> np.ndarray:
    """Average true range; ``smoothing`` is any moving_average type, RMA by default."""
    return moving_average(true_range(high, low, close), length, smoothing)


def stochastic(close: Any, high: Any, low: Any, length: int) -> np.ndarray:
    """100 * (c - lowest(low)) / (highest(high) - lowest(low)); flat windows give NaN."""
    close_arr, high_arr, low_arr = _aligned(close=close, high=high, low=low)
    length = validate_length(length)
    lowest_low = lowest(low_arr, length)
    highest_high = highest(high_arr, length)
    return 100.0 * safe_divide(close_arr - lowest_low, highest_high - lowest_low)

"""
Rolling-window statistics.

Variance is the population variance (denominator ``length``) everywhere.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import absolute, as_float_array, rolling_apply
from indicator_engine.calculations.validation import validate_length


def rolling_sum(data: Any, length: int) -> np.ndarray:
    arr = as_float_array(data)
    length = validate_length(length)
    return rolling_apply(arr, length, lambda w: w.sum(axis=1))


def rolling_variance(data: Any, length: int) -> np.ndarray:
    """Population variance of the trailing window, clamped at zero."""
    arr = as_float_array(data)
    length = validate_length(length)

    def _variance(windows: np.ndarray) -> np.ndarray:
        mean = windows.mean(axis=1, keepdims=True)
        var = ((windows - mean) ** 2).sum(axis=1) / length
        return np.where(np.isnan(var), var, np.maximum(var, 0.0))

    return rolling_apply(arr, length, _variance)


def rolling_stddev(data: Any, length: int) -> np.ndarray:
    """Population standard deviation; NaN windows stay NaN."""
    return np.sqrt(rolling_variance(data, length))


def rolling_min(data: Any, length: int) -> np.ndarray:
    arr = as_float_array(data)
    length = validate_length(length)
    return rolling_apply(arr, length, lambda w: w.min(axis=1))


def rolling_max(data: Any, length: int) -> np.ndarray:
    arr = as_float_array(data)
    length = validate_length(length)
    return rolling_apply(arr, length, lambda w: w.max(axis=1))


lowest = rolling_min
highest = rolling_max


def mean_deviation(data: Any, length: int) -> np.ndarray:
    """Mean absolute deviation from the window mean."""
    arr = as_float_array(data)
    length = validate_length(length)

    def _deviation(windows: np.ndarray) -> np.ndarray:
        mean = windows.mean(axis=1, keepdims=True)
        return absolute(windows - mean).mean(axis=1)

    return rolling_apply(arr, length, _deviation)

"""
Moving average primitives.

Pine Script semantics: output length always equals input length, the
warm-up is NaN, and a NaN inside a window yields NaN. Recursive averages
(EMA, RMA) carry their state forward once per call and are seeded with
the simple mean of the first run of ``length`` valid values.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable
from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import (
    as_float_array,
    full_nan,
    rolling_apply,
    window_view,
)
from indicator_engine.calculations.validation import validate_length
from indicator_engine.core.exceptions import InvalidParameterError


def _seed_index(arr: np.ndarray, length: int) -> int | None:
    """Index closing the first run of ``length`` consecutive non-NaN values."""
    if len(arr) < length:
        return None
    valid_runs = window_view(~np.isnan(arr), length).all(axis=1)
    if not valid_runs.any():
        return None
    return int(np.argmax(valid_runs)) + length - 1


def _seeded_recurrence(
    arr: np.ndarray,
    length: int,
    step: Callable[[float, float], float],
) -> np.ndarray:
    out = full_nan(len(arr))
    seed = _seed_index(arr, length)
    if seed is None:
        return out

    state = float(np.mean(arr[seed - length + 1 : seed + 1]))
    out[seed] = state
    for i in range(seed + 1, len(arr)):
        x = arr[i]
        if np.isnan(x):
            continue
        state = step(state, x)
        out[i] = state
    return out


def sma(data: Any, length: int) -> np.ndarray:
    """Simple moving average over the trailing ``length`` values."""
    arr = as_float_array(data)
    length = validate_length(length)
    return rolling_apply(arr, length, lambda w: w.mean(axis=1))


def ema(data: Any, length: int) -> np.ndarray:
    """Exponential moving average, alpha = 2 / (length + 1)."""
    arr = as_float_array(data)
    length = validate_length(length)
    alpha = 2.0 / (length + 1)
    return _seeded_recurrence(arr, length, lambda prev, x: alpha * x + (1 - alpha) * prev)


def wma(data: Any, length: int) -> np.ndarray:
    """Linearly weighted moving average, weights 1..length oldest to newest."""
    arr = as_float_array(data)
    length = validate_length(length)
    weights = np.arange(1, length + 1, dtype=np.float64)
    denominator = length * (length + 1) / 2.0
    return rolling_apply(arr, length, lambda w: (w @ weights) / denominator)


def hma(data: Any, length: int) -> np.ndarray:
    """Hull moving average.

    ``WMA(2 * WMA(x, length // 2) - WMA(x, length), round(sqrt(length)))``.
    The first valid index is ``length - 1 + round(sqrt(length)) - 1``.
    """
    arr = as_float_array(data)
    length = validate_length(length)
    half_length = max(length // 2, 1)
    sqrt_length = max(int(round(math.sqrt(length))), 1)
    diff = 2.0 * wma(arr, half_length) - wma(arr, length)
    return wma(diff, sqrt_length)


def rma(data: Any, length: int) -> np.ndarray:
    """Wilder's smoothing: RMA(i) = (RMA(i-1) * (length - 1) + x(i)) / length."""
    arr = as_float_array(data)
    length = validate_length(length)
    return _seeded_recurrence(arr, length, lambda prev, x: (prev * (length - 1) + x) / length)


wilders_smoothing = rma


def exponential_smoothing(data: Any, alpha: float) -> np.ndarray:
    """Exponential smoothing with an explicit factor, seeded by the first valid value."""
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real) or not 0 < alpha <= 1:
        raise InvalidParameterError(
            "Alpha must be in (0, 1]", parameter="alpha", value=alpha, expected="0 < alpha <= 1"
        )
    alpha = float(alpha)
    arr = as_float_array(data)
    return _seeded_recurrence(arr, 1, lambda prev, x: alpha * x + (1 - alpha) * prev)


MA_FUNCTIONS: dict[str, Callable[[Any, int], np.ndarray]] = {
    "sma": sma,
    "ema": ema,
    "wma": wma,
    "hull": hma,
    "hma": hma,
    "rma": rma,
    "wilders": rma,
}


def moving_average(data: Any, length: int, ma_type: str = "sma") -> np.ndarray:
    """Dispatch to a moving average by name (sma, ema, wma, hull, rma)."""
    func = MA_FUNCTIONS.get(str(ma_type).lower())
    if func is None:
        raise InvalidParameterError(
            f"Unknown moving average type: {ma_type}",
            parameter="ma_type",
            value=ma_type,
            expected="sma, ema, wma, hull or rma",
        )
    return func(data, length)

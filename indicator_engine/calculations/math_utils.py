"""
Array and math helpers shared by the calculation primitives.

All helpers are pure: they never mutate their inputs and hold no state.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from indicator_engine.core.exceptions import DataValidationError


def as_float_array(data: Any, name: str = "data") -> np.ndarray:
    """Convert a 1-D numeric sequence to a float64 array.

    Returns the input itself when it already is a float64 ndarray; callers
    must treat the result as read-only.
    """
    if isinstance(data, (str, bytes)):
        raise DataValidationError(
            f"{name} must be a numeric sequence", field=name, expected="1-D numeric array"
        )
    try:
        arr = np.asarray(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DataValidationError(
            f"{name} must be a numeric sequence", field=name, expected="1-D numeric array"
        ) from e
    if arr.ndim != 1:
        raise DataValidationError(
            f"{name} must be one-dimensional",
            field=name,
            value=arr.shape,
            expected="1-D numeric array",
        )
    return arr


def full_nan(n: int) -> np.ndarray:
    return np.full(n, np.nan, dtype=np.float64)


def window_view(arr: np.ndarray, length: int) -> np.ndarray:
    """Read-only (N - length + 1, length) view of trailing windows."""
    return sliding_window_view(arr, length)


def rolling_apply(
    arr: np.ndarray,
    length: int,
    reducer: Callable[[np.ndarray], np.ndarray],
) -> np.ndarray:
    """Apply a row-wise reducer to every full trailing window.

    The first ``length - 1`` positions are NaN; when ``len(arr) < length``
    every position is NaN.
    """
    out = full_nan(len(arr))
    if len(arr) < length:
        return out
    out[length - 1 :] = reducer(window_view(arr, length))
    return out


def offset(data: Any, periods: int) -> np.ndarray:
    """Shift a series by ``periods`` bars, NaN-filled.

    A positive shift reads the value ``periods`` bars back (Pine's
    ``x[periods]``); a negative shift reads forward.
    """
    arr = as_float_array(data)
    n = len(arr)
    out = full_nan(n)
    if periods == 0:
        out[:] = arr
    elif 0 < periods < n:
        out[periods:] = arr[: n - periods]
    elif 0 < -periods < n:
        out[:periods] = arr[-periods:]
    return out


def nan_sum(arr: np.ndarray, axis: int | None = None) -> np.ndarray | float:
    """Sum ignoring NaN entries; a scalar when ``axis`` is None."""
    if axis is None:
        return float(np.nansum(arr))
    return np.nansum(arr, axis=axis)


def absolute(arr: np.ndarray) -> np.ndarray:
    return np.abs(arr)


def max_of(*arrays: np.ndarray) -> np.ndarray:
    """Elementwise maximum of equally long arrays, skipping NaN operands."""
    return np.fmax.reduce(np.vstack(arrays), axis=0)


def safe_divide(
    numerator: np.ndarray | float,
    denominator: np.ndarray | float,
    fallback: float = np.nan,
) -> np.ndarray:
    """Elementwise division that yields ``fallback`` where the denominator is 0."""
    num = np.asarray(numerator, dtype=np.float64)
    den = np.asarray(denominator, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        result = num / den
    return np.where(den == 0, fallback, result)

"""
Lag-based primitives: momentum and rate of change.

Both use a single lag of ``length`` bars, so the first ``length``
positions are NaN. Division follows IEEE semantics: a zero base gives
+-inf, or NaN for 0/0.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import as_float_array, offset
from indicator_engine.calculations.validation import validate_length


def momentum(data: Any, length: int) -> np.ndarray:
    """x(i) - x(i - length) for i >= length, else NaN."""
    arr = as_float_array(data)
    length = validate_length(length)
    return arr - offset(arr, length)


def change(data: Any, length: int = 1) -> np.ndarray:
    """Bar-to-bar difference, Pine's ``ta.change``."""
    return momentum(data, length)


def roc(data: Any, length: int) -> np.ndarray:
    """(x(i) - x(i - length)) / x(i - length) * 100 for i >= length, else NaN."""
    arr = as_float_array(data)
    length = validate_length(length)
    previous = offset(arr, length)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (arr - previous) / previous * 100.0


percent_change = roc

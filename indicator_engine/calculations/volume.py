"""
Volume-weighted primitives: rolling VWAP and money flow index.

Both price on the typical price (hlc3) and require a volume series of the
same length as the price arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import (
    as_float_array,
    nan_sum,
    offset,
    rolling_apply,
    safe_divide,
)
from indicator_engine.calculations.statistics import rolling_sum
from indicator_engine.calculations.validation import validate_length
from indicator_engine.core.exceptions import DataValidationError


def _typical_and_volume(
    high: Any, low: Any, close: Any, volume: Any
) -> tuple[np.ndarray, np.ndarray]:
    arrays = {
        name: as_float_array(values, name)
        for name, values in (("high", high), ("low", low), ("close", close), ("volume", volume))
    }
    lengths = {name: len(arr) for name, arr in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise DataValidationError(
            f"Input arrays must have equal length, got {lengths}",
            field=",".join(lengths),
            value=lengths,
            expected="equal lengths",
        )
    typical = (arrays["high"] + arrays["low"] + arrays["close"]) / 3.0
    return typical, arrays["volume"]


def vwap(high: Any, low: Any, close: Any, volume: Any, length: int) -> np.ndarray:
    """Rolling VWAP: sum(hlc3 * volume) / sum(volume) over the trailing window.

    A window with zero total volume gives NaN.
    """
    length = validate_length(length)
    typical, vol = _typical_and_volume(high, low, close, volume)
    return safe_divide(rolling_sum(typical * vol, length), rolling_sum(vol, length))


def mfi(high: Any, low: Any, close: Any, volume: Any, length: int) -> np.ndarray:
    """Money Flow Index over ``length`` bars of typical-price money flow.

    Flow counts as positive when the typical price rises from the previous
    bar and negative when it falls; unchanged bars and bars with missing
    data contribute nothing. The first ``length`` positions are NaN. A
    window without negative flow reads 100, or 50 when it has no flow at
    all.
    """
    length = validate_length(length)
    typical, vol = _typical_and_volume(high, low, close, volume)
    flow = typical * vol
    delta = typical - offset(typical, 1)

    positive = rolling_apply(
        np.where(delta > 0, flow, 0.0), length, lambda w: nan_sum(w, axis=1)
    )
    negative = rolling_apply(
        np.where(delta < 0, flow, 0.0), length, lambda w: nan_sum(w, axis=1)
    )

    ratio = safe_divide(positive, negative)
    values = 100.0 - 100.0 / (1.0 + ratio)
    values = np.where(negative == 0, np.where(positive > 0, 100.0, 50.0), values)
    values[: min(length, len(values))] = np.nan
    return values

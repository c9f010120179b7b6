"""
Calculation primitives.

Pure functions ``series x window -> series``. Outputs always have the
length of the input; warm-up positions are NaN.
"""

from .math_utils import absolute, max_of, nan_sum, offset, safe_divide
from .momentum import change, momentum, percent_change, roc
from .moving_averages import (
    ema,
    exponential_smoothing,
    hma,
    moving_average,
    rma,
    sma,
    wilders_smoothing,
    wma,
)
from .price import get_source_data, hl2, hlc3, hlcc4, ohlc4, typical
from .statistics import (
    highest,
    lowest,
    mean_deviation,
    rolling_max,
    rolling_min,
    rolling_stddev,
    rolling_sum,
    rolling_variance,
)
from .validation import (
    prepare_input,
    validate_indicator_data,
    validate_length,
    validate_market_data,
    validate_multiplier,
    validate_volume_data,
)
from .volatility import atr, stochastic, true_range
from .volume import mfi, vwap

__all__ = [
    # Math
    "absolute",
    "max_of",
    "nan_sum",
    "offset",
    "safe_divide",
    # Moving averages
    "ema",
    "exponential_smoothing",
    "hma",
    "moving_average",
    "rma",
    "sma",
    "wilders_smoothing",
    "wma",
    # Statistics
    "highest",
    "lowest",
    "mean_deviation",
    "rolling_max",
    "rolling_min",
    "rolling_stddev",
    "rolling_sum",
    "rolling_variance",
    # Momentum
    "change",
    "momentum",
    "percent_change",
    "roc",
    # Volatility
    "atr",
    "stochastic",
    "true_range",
    # Volume
    "mfi",
    "vwap",
    # Sources
    "get_source_data",
    "hl2",
    "hlc3",
    "hlcc4",
    "ohlc4",
    "typical",
    # Validation
    "prepare_input",
    "validate_indicator_data",
    "validate_length",
    "validate_market_data",
    "validate_multiplier",
    "validate_volume_data",
]

"""
Volatility indicators: ATR, standard deviation and price channels.
"""

from __future__ import annotations

import numpy as np

from indicator_engine.calculations.moving_averages import ema, sma
from indicator_engine.calculations.statistics import highest, lowest, rolling_stddev
from indicator_engine.calculations.volatility import atr
from indicator_engine.core.constants import DEFAULT_LENGTHS, DEFAULT_MULTIPLIERS
from indicator_engine.core.data_types import InputKind, MarketData
from indicator_engine.core.registry import register_indicator, registry
from indicator_engine.indicators.base import VolatilityIndicator
from indicator_engine.indicators.factory import create_volatility_indicator


def average_true_range(data: MarketData, length: int, smoothing: str = "rma") -> np.ndarray:
    return atr(data.high, data.low, data.close, length, smoothing)


def keltner_channel(data: MarketData, length: int, multiplier: float) -> dict[str, np.ndarray]:
    """EMA of close with bands at +-multiplier * ATR."""
    basis = ema(data.close, length)
    band = multiplier * atr(data.high, data.low, data.close, length)
    return {"values": basis, "upper": basis + band, "lower": basis - band}


def donchian_channel(data: MarketData, length: int) -> dict[str, np.ndarray]:
    """Midpoint of the highest high and lowest low, with both bounds."""
    upper = highest(data.high, length)
    lower = lowest(data.low, length)
    return {"values": (upper + lower) / 2.0, "upper": upper, "lower": lower}


ATR = create_volatility_indicator(
    "ATR",
    "Average True Range",
    average_true_range,
    DEFAULT_LENGTHS["ATR"],
    input_kind=InputKind.MARKET,
    params={"smoothing": "rma"},
)
STDDEV = create_volatility_indicator(
    "STDDEV",
    "Standard Deviation",
    rolling_stddev,
    DEFAULT_LENGTHS["STD"],
    aliases=("stdev", "std"),
)
KC = create_volatility_indicator(
    "KC",
    "Keltner Channel",
    keltner_channel,
    DEFAULT_LENGTHS["KELTNER"],
    default_multiplier=DEFAULT_MULTIPLIERS["KELTNER"],
    input_kind=InputKind.MARKET,
    aliases=("keltner",),
)
DC = create_volatility_indicator(
    "DC",
    "Donchian Channel",
    donchian_channel,
    DEFAULT_LENGTHS["DONCHIAN"],
    input_kind=InputKind.MARKET,
    aliases=("donchian",),
)


@register_indicator(aliases=["bollinger", "bbands"])
class BollingerBands(VolatilityIndicator):
    """SMA basis with bands at +-multiplier population standard deviations."""

    def __init__(self) -> None:
        super().__init__(
            "BB",
            "Bollinger Bands",
            default_length=DEFAULT_LENGTHS["BOLLINGER"],
            default_multiplier=DEFAULT_MULTIPLIERS["BOLLINGER"],
        )

    def calculate_volatility(
        self, series: np.ndarray, length: int, multiplier: float
    ) -> dict[str, np.ndarray]:
        basis = sma(series, length)
        deviation = multiplier * rolling_stddev(series, length)
        return {"values": basis, "upper": basis + deviation, "lower": basis - deviation}


VOLATILITY_INDICATORS = (ATR, STDDEV, KC, DC)

for _indicator in VOLATILITY_INDICATORS:
    registry.register(_indicator)

"""
Trend indicators: moving averages built through the factory.
"""

from __future__ import annotations

from indicator_engine.core.constants import DEFAULT_LENGTHS
from indicator_engine.core.registry import registry
from indicator_engine.indicators.factory import create_moving_average_indicator

SMA = create_moving_average_indicator(
    "SMA", "Simple Moving Average", "sma", DEFAULT_LENGTHS["SMA"]
)
EMA = create_moving_average_indicator(
    "EMA", "Exponential Moving Average", "ema", DEFAULT_LENGTHS["EMA"]
)
WMA = create_moving_average_indicator(
    "WMA", "Weighted Moving Average", "wma", DEFAULT_LENGTHS["WMA"]
)
HMA = create_moving_average_indicator(
    "HMA", "Hull Moving Average", "hull", DEFAULT_LENGTHS["HULL"], aliases=("hull",)
)
RMA = create_moving_average_indicator(
    "RMA", "Wilder's Moving Average", "rma", DEFAULT_LENGTHS["RMA"], aliases=("wilders",)
)

TREND_INDICATORS = (SMA, EMA, WMA, HMA, RMA)

for _indicator in TREND_INDICATORS:
    registry.register(_indicator)

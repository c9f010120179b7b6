"""
Volume indicators. All of them require market data with volume.
"""

from __future__ import annotations

import numpy as np

from indicator_engine.calculations.math_utils import safe_divide
from indicator_engine.calculations.momentum import change
from indicator_engine.calculations.statistics import rolling_sum
from indicator_engine.calculations.volume import mfi, vwap
from indicator_engine.core.constants import DEFAULT_LENGTHS
from indicator_engine.core.data_types import MarketData
from indicator_engine.core.registry import registry
from indicator_engine.indicators.factory import create_volume_indicator


def on_balance_volume(data: MarketData, length: int | None) -> np.ndarray:
    """Cumulative volume signed by the close-to-close direction; starts at 0."""
    direction = np.nan_to_num(np.sign(change(data.close)))
    return np.cumsum(direction * np.nan_to_num(data.volume))


def volume_weighted_ma(data: MarketData, length: int) -> np.ndarray:
    return safe_divide(
        rolling_sum(data.close * data.volume, length), rolling_sum(data.volume, length)
    )


def chaikin_money_flow(data: MarketData, length: int) -> np.ndarray:
    """Sum of money flow volume over the sum of volume; flat bars contribute 0."""
    multiplier = safe_divide(
        (data.close - data.low) - (data.high - data.close),
        data.high - data.low,
        fallback=0.0,
    )
    return safe_divide(
        rolling_sum(multiplier * data.volume, length), rolling_sum(data.volume, length)
    )


def volume_weighted_average_price(data: MarketData, length: int) -> np.ndarray:
    return vwap(data.high, data.low, data.close, data.volume, length)


def money_flow_index(data: MarketData, length: int) -> np.ndarray:
    return mfi(data.high, data.low, data.close, data.volume, length)


OBV = create_volume_indicator(
    "OBV", "On Balance Volume", on_balance_volume, default_length=None
)
VWMA = create_volume_indicator(
    "VWMA", "Volume Weighted Moving Average", volume_weighted_ma, DEFAULT_LENGTHS["VWMA"]
)
CMF = create_volume_indicator(
    "CMF", "Chaikin Money Flow", chaikin_money_flow, DEFAULT_LENGTHS["CMF"]
)
VWAP = create_volume_indicator(
    "VWAP",
    "Volume Weighted Average Price",
    volume_weighted_average_price,
    DEFAULT_LENGTHS["VWAP"],
    default_source="hlc3",
)
MFI = create_volume_indicator(
    "MFI",
    "Money Flow Index",
    money_flow_index,
    DEFAULT_LENGTHS["MFI"],
    default_source="hlc3",
    aliases=("money_flow_index",),
)

VOLUME_INDICATORS = (OBV, VWMA, CMF, VWAP, MFI)

for _indicator in VOLUME_INDICATORS:
    registry.register(_indicator)

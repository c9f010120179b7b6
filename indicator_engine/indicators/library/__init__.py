"""
Leaf indicator library.

Importing this package registers every indicator in the global registry.
"""

from typing import Any

from indicator_engine.core.data_types import IndicatorConfig, IndicatorResult
from indicator_engine.core.registry import registry
from indicator_engine.indicators.base import BaseIndicator

from .ml import KNNClassifier
from .momentum import CCI, CMO, MACD, MOM, ROC, RSI, STOCH, WILLR
from .trend import EMA, HMA, RMA, SMA, WMA
from .volatility import ATR, DC, KC, STDDEV, BollingerBands
from .volume import CMF, OBV, VWMA


def get_indicator(name: str) -> BaseIndicator:
    """Look up a registered indicator by name or alias."""
    return registry.get(name)


def calculate_indicator(
    name: str,
    data: Any,
    config: IndicatorConfig | dict[str, Any] | None = None,
) -> IndicatorResult:
    """Calculate a registered indicator by name."""
    return registry.get(name).calculate(data, config)


__all__ = [
    # Trend
    "EMA",
    "HMA",
    "RMA",
    "SMA",
    "WMA",
    # Momentum
    "CCI",
    "CMO",
    "MACD",
    "MOM",
    "ROC",
    "RSI",
    "STOCH",
    "WILLR",
    # Volatility
    "ATR",
    "BollingerBands",
    "DC",
    "KC",
    "STDDEV",
    # Volume
    "CMF",
    "OBV",
    "VWMA",
    # ML
    "KNNClassifier",
    # Lookup
    "calculate_indicator",
    "get_indicator",
]

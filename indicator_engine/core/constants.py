"""
Default parameters shared by the indicator library.

Values follow Pine Script defaults for each indicator.
"""

from __future__ import annotations

from indicator_engine.core.data_types import SourceTag

DEFAULT_SOURCE = SourceTag.CLOSE.value

DEFAULT_LENGTHS: dict[str, int] = {
    "SMA": 20,
    "EMA": 20,
    "WMA": 20,
    "HULL": 20,
    "RMA": 20,
    "RSI": 14,
    "CMO": 14,
    "MACD_FAST": 12,
    "MACD_SLOW": 26,
    "MACD_SIGNAL": 9,
    "STOCHASTIC": 14,
    "STOCHASTIC_K": 3,
    "STOCHASTIC_D": 3,
    "WILLIAMS_R": 14,
    "CCI": 20,
    "ATR": 14,
    "BOLLINGER": 20,
    "KELTNER": 20,
    "DONCHIAN": 20,
    "MFI": 14,
    "CMF": 20,
    "ROC": 14,
    "MOMENTUM": 10,
    "STD": 20,
    "VWMA": 20,
    "VWAP": 20,
}

DEFAULT_MULTIPLIERS: dict[str, float] = {
    "BOLLINGER": 2.0,
    "KELTNER": 2.0,
}

# Lambert's constant for CCI
CCI_CONSTANT = 0.015

"""
Momentum indicators.

RSI, ROC, momentum, MACD, stochastic, Williams %R and CCI are built
through the factory; CMO subclasses OscillatorIndicator directly.
"""

from __future__ import annotations

import numpy as np

from indicator_engine.calculations.momentum import change, momentum, roc
from indicator_engine.calculations.moving_averages import ema, rma, sma
from indicator_engine.calculations.statistics import (
    highest,
    lowest,
    mean_deviation,
    rolling_sum,
)
from indicator_engine.calculations.validation import validate_length
from indicator_engine.calculations.volatility import stochastic
from indicator_engine.core.constants import CCI_CONSTANT, DEFAULT_LENGTHS
from indicator_engine.core.data_types import InputKind, MarketData
from indicator_engine.core.registry import register_indicator, registry
from indicator_engine.indicators.base import OscillatorIndicator
from indicator_engine.indicators.factory import (
    IndicatorDescriptor,
    create_oscillator_indicator,
    make_indicator,
)


def rsi(source: np.ndarray, length: int) -> np.ndarray:
    """Relative Strength Index over Wilder-smoothed gains and losses.

    A window without losses reads 100, or 50 when it has no gains either.
    """
    delta = change(source)
    avg_gain = rma(np.maximum(delta, 0.0), length)
    avg_loss = rma(np.maximum(-delta, 0.0), length)
    with np.errstate(divide="ignore", invalid="ignore"):
        values = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    return np.where(avg_loss == 0, np.where(avg_gain > 0, 100.0, 50.0), values)


def macd(
    source: np.ndarray,
    length: int | None,
    fast_length: int = 12,
    slow_length: int = 26,
    signal_length: int = 9,
) -> dict[str, np.ndarray]:
    """MACD line with its signal line and histogram."""
    fast_length = validate_length(fast_length, name="fast_length")
    slow_length = validate_length(slow_length, name="slow_length")
    signal_length = validate_length(signal_length, name="signal_length")
    line = ema(source, fast_length) - ema(source, slow_length)
    signal = ema(line, signal_length)
    return {"values": line, "signal": signal, "histogram": line - signal}


def stochastic_oscillator(
    data: MarketData,
    length: int,
    smooth_k: int = 3,
    smooth_d: int = 3,
) -> dict[str, np.ndarray]:
    """Smoothed stochastic %K with its %D line."""
    smooth_k = validate_length(smooth_k, name="smooth_k")
    smooth_d = validate_length(smooth_d, name="smooth_d")
    raw = stochastic(data.close, data.high, data.low, length)
    k = sma(raw, smooth_k)
    d = sma(k, smooth_d)
    return {"values": k, "d": d}


def williams_r(data: MarketData, length: int) -> np.ndarray:
    highest_high = highest(data.high, length)
    lowest_low = lowest(data.low, length)
    with np.errstate(divide="ignore", invalid="ignore"):
        return -100.0 * (highest_high - data.close) / (highest_high - lowest_low)


def cci(source: np.ndarray, length: int) -> np.ndarray:
    """Commodity Channel Index: (x - SMA) / (0.015 * mean deviation)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return (source - sma(source, length)) / (CCI_CONSTANT * mean_deviation(source, length))


RSI = create_oscillator_indicator(
    "RSI", "Relative Strength Index", rsi, DEFAULT_LENGTHS["RSI"]
)
ROC = create_oscillator_indicator(
    "ROC", "Rate of Change", roc, DEFAULT_LENGTHS["ROC"], aliases=("percent_change",)
)
MOM = create_oscillator_indicator(
    "MOM", "Momentum", momentum, DEFAULT_LENGTHS["MOMENTUM"], aliases=("momentum",)
)
STOCH = create_oscillator_indicator(
    "STOCH",
    "Stochastic Oscillator",
    stochastic_oscillator,
    DEFAULT_LENGTHS["STOCHASTIC"],
    input_kind=InputKind.MARKET,
    params={
        "smooth_k": DEFAULT_LENGTHS["STOCHASTIC_K"],
        "smooth_d": DEFAULT_LENGTHS["STOCHASTIC_D"],
    },
    aliases=("stochastic",),
)
WILLR = create_oscillator_indicator(
    "WILLR",
    "Williams %R",
    williams_r,
    DEFAULT_LENGTHS["WILLIAMS_R"],
    input_kind=InputKind.MARKET,
    aliases=("williams_r",),
)
CCI = create_oscillator_indicator(
    "CCI",
    "Commodity Channel Index",
    cci,
    DEFAULT_LENGTHS["CCI"],
    default_source="hlc3",
)
MACD = make_indicator(
    IndicatorDescriptor(
        name="MACD",
        description="Moving Average Convergence Divergence",
        calculation=macd,
        category="momentum",
        params={
            "fast_length": DEFAULT_LENGTHS["MACD_FAST"],
            "slow_length": DEFAULT_LENGTHS["MACD_SLOW"],
            "signal_length": DEFAULT_LENGTHS["MACD_SIGNAL"],
        },
    )
)


@register_indicator(aliases=["chande"])
class CMO(OscillatorIndicator):
    """Chande Momentum Oscillator: 100 * (up - down) / (up + down) over the window."""

    def __init__(self) -> None:
        super().__init__(
            "CMO",
            "Chande Momentum Oscillator",
            default_length=DEFAULT_LENGTHS["CMO"],
        )

    def calculate_oscillator(self, series: np.ndarray, length: int) -> np.ndarray:
        delta = change(series)
        up = rolling_sum(np.maximum(delta, 0.0), length)
        down = rolling_sum(np.maximum(-delta, 0.0), length)
        with np.errstate(divide="ignore", invalid="ignore"):
            return 100.0 * (up - down) / (up + down)


MOMENTUM_INDICATORS = (RSI, ROC, MOM, STOCH, WILLR, CCI, MACD)

for _indicator in MOMENTUM_INDICATORS:
    registry.register(_indicator)

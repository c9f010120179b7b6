"""
Derived price series and source extraction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np

from indicator_engine.calculations.math_utils import as_float_array
from indicator_engine.config.settings import get_settings
from indicator_engine.core.data_types import MarketData, SourceTag
from indicator_engine.core.exceptions import InvalidSourceError, MissingDataError

logger = logging.getLogger(__name__)


def hl2(data: MarketData) -> np.ndarray:
    return (data.high + data.low) / 2.0


def hlc3(data: MarketData) -> np.ndarray:
    return (data.high + data.low + data.close) / 3.0


typical = hlc3


def ohlc4(data: MarketData) -> np.ndarray:
    return (data.open + data.high + data.low + data.close) / 4.0


def hlcc4(data: MarketData) -> np.ndarray:
    """Weighted close: (h + l + 2c) / 4."""
    return (data.high + data.low + 2.0 * data.close) / 4.0


def _volume(data: MarketData) -> np.ndarray:
    if data.volume is None:
        raise MissingDataError("Volume data is required for source 'volume'", field="volume")
    return data.volume


SOURCE_FUNCTIONS: dict[SourceTag, Callable[[MarketData], np.ndarray]] = {
    SourceTag.OPEN: lambda d: d.open,
    SourceTag.HIGH: lambda d: d.high,
    SourceTag.LOW: lambda d: d.low,
    SourceTag.CLOSE: lambda d: d.close,
    SourceTag.HL2: hl2,
    SourceTag.HLC3: hlc3,
    SourceTag.TYPICAL: typical,
    SourceTag.OHLC4: ohlc4,
    SourceTag.HLCC4: hlcc4,
    SourceTag.VOLUME: _volume,
}


def resolve_source(source: str | SourceTag | None, strict: bool | None = None) -> SourceTag:
    """Map a source tag to its enum member.

    An absent tag resolves to the configured default source (close). An
    unknown tag falls back to close, or raises InvalidSourceError when
    strict source checking is enabled.
    """
    settings = get_settings().calculation
    if source is None or source == "":
        return SourceTag(settings.default_source)
    tag = SourceTag.parse(source)
    if tag is not None:
        return tag
    if strict is None:
        strict = settings.strict_sources
    if strict:
        raise InvalidSourceError(f"Unknown source: {source}", source=str(source))
    logger.debug(f"Unknown source {source!r}, falling back to close")
    return SourceTag.CLOSE


def get_source_data(
    data: MarketData | Any,
    source: str | SourceTag | None = None,
    strict: bool | None = None,
) -> np.ndarray:
    """Return the series named by ``source``.

    Raw arrays are returned unchanged regardless of ``source``.

    Raises:
        MissingDataError: If ``volume`` is requested but absent.
        InvalidSourceError: If the tag is unknown and strict mode is on.
    """
    if not isinstance(data, MarketData):
        return as_float_array(data)
    tag = resolve_source(source, strict)
    return SOURCE_FUNCTIONS[tag](data)

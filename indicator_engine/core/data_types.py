"""
Data models and type definitions for the indicator engine.

Defines the contracts for data flowing through the engine: market data
arrays, indicator configuration and indicator results, plus the closed
enumerations for price sources, indicator shapes and input kinds.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

import numpy as np
import pandas as pd
import polars as pl
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from indicator_engine.core.exceptions import DataValidationError, InvalidParameterError

_OHLC_FIELDS = ("open", "high", "low", "close")


class SourceTag(str, Enum):
    """Price series an indicator can be computed on."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    HL2 = "hl2"
    HLC3 = "hlc3"
    TYPICAL = "typical"
    OHLC4 = "ohlc4"
    HLCC4 = "hlcc4"
    VOLUME = "volume"

    @classmethod
    def parse(cls, value: str | SourceTag | None) -> SourceTag | None:
        """Return the matching tag, or None when the value is not a known tag."""
        if value is None:
            return None
        if isinstance(value, SourceTag):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class IndicatorShape(str, Enum):
    """Validation and calculation contract of an indicator."""

    GENERIC = "generic"
    OSCILLATOR = "oscillator"
    VOLATILITY = "volatility"


class InputKind(str, Enum):
    """What a factory-built calculation receives."""

    SERIES = "series"  # one source series
    MARKET = "market"  # the whole MarketData


def _as_readonly(values: Any, name: str) -> np.ndarray:
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DataValidationError(
            f"Field '{name}' must be numeric", field=name, expected="numeric array"
        ) from e
    if arr.ndim != 1:
        raise DataValidationError(
            f"Field '{name}' must be one-dimensional",
            field=name,
            value=arr.shape,
            expected="1-D array",
        )
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class MarketData:
    """Parallel OHLCV arrays; index i refers to the same bar in every array."""

    open: np.ndarray
    high: np.ndarray
    low: np.ndarray
    close: np.ndarray
    volume: np.ndarray | None = None
    timestamp: np.ndarray | None = None

    def __post_init__(self) -> None:
        for name in _OHLC_FIELDS:
            object.__setattr__(self, name, _as_readonly(getattr(self, name), name))
        if self.volume is not None:
            object.__setattr__(self, "volume", _as_readonly(self.volume, "volume"))
        if self.timestamp is not None:
            ts = np.array(self.timestamp)
            ts.setflags(write=False)
            object.__setattr__(self, "timestamp", ts)

        expected = len(self.close)
        for name in (*_OHLC_FIELDS, "volume", "timestamp"):
            arr = getattr(self, name)
            if arr is not None and len(arr) != expected:
                raise DataValidationError(
                    f"Array '{name}' has length {len(arr)}, expected {expected}",
                    field=name,
                    value=len(arr),
                    expected=f"length {expected}",
                )

    def __len__(self) -> int:
        return len(self.close)

    @property
    def has_volume(self) -> bool:
        return self.volume is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MarketData:
        """Build from a mapping holding open/high/low/close and optional volume/timestamp."""
        missing = [name for name in _OHLC_FIELDS if data.get(name) is None]
        if missing:
            raise DataValidationError(
                f"Missing required fields: {missing}",
                field=missing[0],
                expected="open, high, low and close arrays",
            )
        return cls(
            open=data["open"],
            high=data["high"],
            low=data["low"],
            close=data["close"],
            volume=data.get("volume"),
            timestamp=data.get("timestamp"),
        )

    @classmethod
    def from_polars(cls, df: pl.DataFrame) -> MarketData:
        """Build from a polars DataFrame with OHLCV columns."""
        return cls.from_dict(
            {
                name: df.get_column(name).to_numpy()
                for name in (*_OHLC_FIELDS, "volume", "timestamp")
                if name in df.columns
            }
        )

    @classmethod
    def from_pandas(cls, df: pd.DataFrame) -> MarketData:
        """Build from a pandas DataFrame with OHLCV columns.

        A DatetimeIndex is used as the timestamp when no column provides one.
        """
        data = {
            name: df[name].to_numpy()
            for name in (*_OHLC_FIELDS, "volume", "timestamp")
            if name in df.columns
        }
        if "timestamp" not in data and isinstance(df.index, pd.DatetimeIndex):
            data["timestamp"] = df.index.to_numpy()
        return cls.from_dict(data)

    @classmethod
    def from_frame(cls, df: pl.DataFrame | pd.DataFrame) -> MarketData:
        """Build from either a polars or a pandas DataFrame."""
        if isinstance(df, pl.DataFrame):
            return cls.from_polars(df)
        if isinstance(df, pd.DataFrame):
            return cls.from_pandas(df)
        raise DataValidationError(
            f"Unsupported frame type: {type(df).__name__}",
            expected="polars.DataFrame or pandas.DataFrame",
        )


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


class IndicatorConfig(BaseModel):
    """Per-call indicator configuration.

    Recognized fields override indicator defaults. Any other key is kept
    as an indicator-specific parameter and exposed through ``params``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    length: int | None = Field(default=None, description="Window length override")
    source: str | None = Field(default=None, description="Source tag, default close")
    multiplier: float | None = Field(default=None, description="Band/ATR multiplier")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Normalize camelCase parameter names to snake_case."""
        if isinstance(data, Mapping):
            return {
                (key if key in cls.model_fields else _snake_case(str(key))): value
                for key, value in data.items()
            }
        return data

    @field_validator("length", mode="before")
    @classmethod
    def validate_length_type(cls, v: Any) -> Any:
        """Reject booleans and non-integral numbers before int coercion."""
        if v is None:
            return v
        if isinstance(v, bool):
            raise ValueError("length must be an integer, not a boolean")
        if isinstance(v, numbers.Integral):
            return int(v)
        if isinstance(v, numbers.Real):
            if not float(v).is_integer():
                raise ValueError(f"length must be an integer, got {v}")
            return int(v)
        return v

    @field_validator("multiplier", mode="before")
    @classmethod
    def validate_multiplier_type(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("multiplier must be a number, not a boolean")
        return v

    @property
    def params(self) -> dict[str, Any]:
        """Indicator-specific parameters (keys beyond length/source/multiplier)."""
        return dict(self.model_extra or {})

    def with_overrides(self, **overrides: Any) -> IndicatorConfig:
        """Return a new config with the non-None overrides applied."""
        merged = {**self.model_dump(exclude_none=True), **self.params}
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return self.coerce(merged)

    @classmethod
    def coerce(cls, config: IndicatorConfig | Mapping[str, Any] | None) -> IndicatorConfig:
        """Build a config from None, a mapping or an existing config."""
        if config is None:
            return cls()
        if isinstance(config, IndicatorConfig):
            return config
        if not isinstance(config, Mapping):
            raise InvalidParameterError(
                f"Indicator config must be a mapping, got {type(config).__name__}",
                parameter="config",
                expected="mapping",
            )
        try:
            return cls.model_validate(dict(config))
        except PydanticValidationError as e:
            first = e.errors()[0]
            parameter = ".".join(str(part) for part in first.get("loc", ())) or None
            raise InvalidParameterError(
                f"Invalid indicator config: {first.get('msg')}",
                parameter=parameter,
                value=first.get("input"),
            ) from e


@dataclass(frozen=True)
class IndicatorResult:
    """Output of an indicator calculation.

    ``values`` is positionally aligned with the input; warm-up positions
    are NaN. ``metadata`` carries the effective length and source plus any
    auxiliary series (e.g. upper/lower bands) and parameters.
    """

    name: str
    values: np.ndarray
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

        metadata: dict[str, Any] = {}
        for key, value in self.metadata.items():
            if isinstance(value, np.ndarray):
                value = np.array(value)
                value.setflags(write=False)
            metadata[key] = value
        object.__setattr__(self, "metadata", MappingProxyType(metadata))

    def __len__(self) -> int:
        return len(self.values)

    @property
    def length(self) -> int | None:
        return self.metadata.get("length")

    @property
    def source(self) -> str | None:
        return self.metadata.get("source")

    @property
    def auxiliary(self) -> dict[str, np.ndarray]:
        """Array-valued metadata entries."""
        return {k: v for k, v in self.metadata.items() if isinstance(v, np.ndarray)}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary of plain Python types."""
        return {
            "name": self.name,
            "values": self.values.tolist(),
            "metadata": {
                k: (v.tolist() if isinstance(v, np.ndarray) else v)
                for k, v in self.metadata.items()
            },
        }

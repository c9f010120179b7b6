"""
Indicator factory.

Builds indicator instances from a descriptor and a plain calculation
function, so leaf indicators share validation, source selection and
result shaping without writing a class each.

Calculation signatures by shape:

- generic / oscillator: ``calculation(source, length, **params)``
- volatility: ``calculation(source, length, multiplier, **params)``

``source`` is the selected series, or the whole MarketData when the
descriptor's input kind is ``market``. A calculation returns one array,
or a mapping whose ``primary_output`` entry becomes the values and whose
other entries become metadata.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

import numpy as np

from indicator_engine.calculations.moving_averages import MA_FUNCTIONS, moving_average
from indicator_engine.calculations.validation import validate_volume_data
from indicator_engine.core.constants import DEFAULT_SOURCE
from indicator_engine.core.data_types import (
    IndicatorConfig,
    IndicatorResult,
    IndicatorShape,
    InputKind,
    MarketData,
)
from indicator_engine.core.exceptions import DataValidationError, InvalidParameterError
from indicator_engine.indicators.base import BaseIndicator, ConfigLike, ShapeSpec


@dataclass(frozen=True)
class IndicatorDescriptor:
    """Everything the factory needs to build an indicator.

    Attributes:
        name: Indicator name, also the registry key.
        description: Human-readable description.
        calculation: Function computing the indicator.
        default_length: Length used when the config sets none.
        shape: Validation contract.
        category: Grouping used by the registry.
        min_length: Smallest accepted length.
        max_length: Largest accepted length.
        default_multiplier: Multiplier default for the volatility shape.
        input_kind: Whether the calculation gets one series or MarketData.
        requires_volume: Reject market data without volume.
        params: Indicator-specific parameters and their defaults.
        default_source: Source used when the config sets none.
        primary_output: Key of the values entry in mapping outputs.
        aliases: Alternative registry names.
    """

    name: str
    description: str
    calculation: Callable[..., Any]
    default_length: int | None = None
    shape: IndicatorShape = IndicatorShape.GENERIC
    category: str = "generic"
    min_length: int = 1
    max_length: int | None = None
    default_multiplier: float | None = None
    input_kind: InputKind = InputKind.SERIES
    requires_volume: bool = False
    params: dict[str, Any] = field(default_factory=dict)
    default_source: str = DEFAULT_SOURCE
    primary_output: str = "values"
    aliases: tuple[str, ...] = ()

    def shape_spec(self) -> ShapeSpec:
        return ShapeSpec(
            shape=self.shape,
            default_length=self.default_length,
            min_length=self.min_length,
            max_length=self.max_length,
            default_multiplier=self.default_multiplier,
        )


class FactoryIndicator(BaseIndicator):
    """Indicator whose calculation is a captured function."""

    def __init__(self, descriptor: IndicatorDescriptor) -> None:
        super().__init__(
            descriptor.name, descriptor.description, descriptor.category, descriptor.aliases
        )
        self.descriptor = descriptor
        self.shape_spec = descriptor.shape_spec()

    def validate_input(self, data: Any, config: ConfigLike = None) -> None:
        prepared, _, _ = self._prepare(data, config, self.descriptor.default_source)
        self._check_market_input(prepared)

    def _check_market_input(self, prepared: MarketData | np.ndarray) -> None:
        if self.descriptor.input_kind is not InputKind.MARKET:
            return
        if not isinstance(prepared, MarketData):
            raise DataValidationError(
                f"{self.name} requires market data with open, high, low and close",
                field="data",
                value=type(prepared).__name__,
                expected="MarketData",
            )
        if self.descriptor.requires_volume:
            validate_volume_data(prepared)

    def _params(self, config: IndicatorConfig) -> dict[str, Any]:
        overrides = config.params
        return {
            name: overrides.get(name, default)
            for name, default in self.descriptor.params.items()
        }

    def calculate(self, data: Any, config: ConfigLike = None) -> IndicatorResult:
        started = time.perf_counter()
        prepared, config, resolved = self._prepare(
            data, config, self.descriptor.default_source
        )
        self._check_market_input(prepared)

        source_name = resolved["source"]
        if self.descriptor.input_kind is InputKind.MARKET:
            source_input: MarketData | np.ndarray = prepared
        else:
            source_input = self.get_source_data(prepared, source_name)

        params = self._params(config)
        args: list[Any] = [source_input, resolved["length"]]
        if self.shape_spec.shape is IndicatorShape.VOLATILITY:
            args.append(resolved["multiplier"])
        output = self.descriptor.calculation(*args, **params)

        metadata = {"length": resolved["length"], "source": source_name}
        if "multiplier" in resolved:
            metadata["multiplier"] = resolved["multiplier"]
        metadata.update(params)

        return self._build_result(
            output, len(prepared), metadata, self.descriptor.primary_output, started
        )


def make_indicator(descriptor: IndicatorDescriptor) -> FactoryIndicator:
    """Build an indicator from a descriptor."""
    return FactoryIndicator(descriptor)


def create_moving_average_indicator(
    name: str,
    description: str,
    ma_type: str,
    default_length: int = 20,
    aliases: tuple[str, ...] = (),
) -> FactoryIndicator:
    """Build a trend indicator over one of sma, ema, wma, hull or rma."""
    if str(ma_type).lower() not in MA_FUNCTIONS:
        raise InvalidParameterError(
            f"Unknown moving average type: {ma_type}",
            parameter="ma_type",
            value=ma_type,
            expected="sma, ema, wma, hull or rma",
        )
    return make_indicator(
        IndicatorDescriptor(
            name=name,
            description=description,
            calculation=partial(moving_average, ma_type=ma_type),
            default_length=default_length,
            category="trend",
            aliases=aliases,
        )
    )


def create_oscillator_indicator(
    name: str,
    description: str,
    calculation: Callable[..., Any],
    default_length: int = 14,
    **kwargs: Any,
) -> FactoryIndicator:
    """Build a momentum indicator with the oscillator shape."""
    kwargs.setdefault("category", "momentum")
    return make_indicator(
        IndicatorDescriptor(
            name=name,
            description=description,
            calculation=calculation,
            default_length=default_length,
            shape=IndicatorShape.OSCILLATOR,
            **kwargs,
        )
    )


def create_volatility_indicator(
    name: str,
    description: str,
    calculation: Callable[..., Any],
    default_length: int = 20,
    default_multiplier: float | None = None,
    **kwargs: Any,
) -> FactoryIndicator:
    """Build a volatility indicator.

    With a default multiplier the indicator gets the volatility shape and
    its calculation receives the multiplier; otherwise it is generic.
    """
    shape = IndicatorShape.GENERIC if default_multiplier is None else IndicatorShape.VOLATILITY
    kwargs.setdefault("category", "volatility")
    return make_indicator(
        IndicatorDescriptor(
            name=name,
            description=description,
            calculation=calculation,
            default_length=default_length,
            shape=shape,
            default_multiplier=default_multiplier,
            **kwargs,
        )
    )


def create_volume_indicator(
    name: str,
    description: str,
    calculation: Callable[..., Any],
    default_length: int | None = 20,
    **kwargs: Any,
) -> FactoryIndicator:
    """Build a volume indicator; its calculation receives the full MarketData."""
    kwargs.setdefault("category", "volume")
    kwargs.setdefault("input_kind", InputKind.MARKET)
    kwargs.setdefault("requires_volume", True)
    return make_indicator(
        IndicatorDescriptor(
            name=name,
            description=description,
            calculation=calculation,
            default_length=default_length,
            **kwargs,
        )
    )

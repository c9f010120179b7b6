"""
Indicator contract and shape base classes.

Every indicator exposes ``calculate(data, config) -> IndicatorResult`` and
``validate_input(data, config)``, and can be called directly as a wrapper
function returning only the values array.

Three shapes share validation and result shaping:

- generic: validation is a no-op hook, calculation is indicator-specific
- oscillator: length range checks, one source series in, one series out
- volatility: as oscillator, plus a positive multiplier
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from indicator_engine.calculations.price import get_source_data, resolve_source
from indicator_engine.calculations.validation import (
    prepare_input,
    validate_indicator_data,
    validate_length,
    validate_multiplier,
)
from indicator_engine.core.data_types import (
    IndicatorConfig,
    IndicatorResult,
    IndicatorShape,
    MarketData,
)
from indicator_engine.core.exceptions import (
    CalculationError,
    IndicatorNotImplementedError,
)
from indicator_engine.monitoring.logger import LogCategory, get_logger, trace_calculation

logger = get_logger(__name__, LogCategory.CALCULATION)

ConfigLike = IndicatorConfig | Mapping[str, Any] | None


@dataclass(frozen=True)
class ShapeSpec:
    """Validation contract of an indicator shape.

    Attributes:
        shape: Which contract applies.
        default_length: Length used when the config sets none.
        min_length: Smallest accepted length.
        max_length: Largest accepted length, unbounded when None.
        default_multiplier: Multiplier used when the config sets none.
    """

    shape: IndicatorShape = IndicatorShape.GENERIC
    default_length: int | None = None
    min_length: int = 1
    max_length: int | None = None
    default_multiplier: float | None = None

    @classmethod
    def oscillator(
        cls, default_length: int = 14, min_length: int = 1, max_length: int | None = None
    ) -> ShapeSpec:
        return cls(IndicatorShape.OSCILLATOR, default_length, min_length, max_length)

    @classmethod
    def volatility(
        cls,
        default_length: int = 20,
        default_multiplier: float = 2.0,
        min_length: int = 1,
        max_length: int | None = None,
    ) -> ShapeSpec:
        return cls(
            IndicatorShape.VOLATILITY, default_length, min_length, max_length, default_multiplier
        )

    def resolve(self, config: IndicatorConfig) -> dict[str, Any]:
        """Validate the config against this shape and return effective parameters.

        Raises:
            InvalidParameterError: If the length or multiplier is out of range.
        """
        length = config.length if config.length is not None else self.default_length
        if self.shape is IndicatorShape.GENERIC:
            if length is not None:
                length = validate_length(length, self.min_length, self.max_length)
            return {"length": length}

        length = validate_length(length, self.min_length, self.max_length)
        if self.shape is IndicatorShape.OSCILLATOR:
            return {"length": length}

        multiplier = (
            config.multiplier if config.multiplier is not None else self.default_multiplier
        )
        return {"length": length, "multiplier": validate_multiplier(multiplier)}


class BaseIndicator(ABC):
    """Abstract base class for all indicators.

    Subclasses implement ``calculate``. The default ``validate_input`` is a
    no-op hook; shape subclasses override it with their checks.
    """

    shape_spec: ShapeSpec = ShapeSpec()

    def __init__(
        self,
        name: str,
        description: str = "",
        category: str = "generic",
        aliases: tuple[str, ...] | list[str] = (),
    ) -> None:
        self.name = name
        self.description = description
        self.category = category
        self.aliases = tuple(aliases)

    def validate_input(self, data: Any, config: ConfigLike = None) -> None:
        """Validate input and config; raises on failure."""

    @abstractmethod
    def calculate(self, data: Any, config: ConfigLike = None) -> IndicatorResult:
        """Calculate the indicator.

        Args:
            data: MarketData, a mapping or DataFrame of OHLCV columns, or a
                1-D numeric sequence.
            config: Optional IndicatorConfig or mapping of overrides.

        Returns:
            IndicatorResult aligned with the input.
        """
        pass

    def __call__(
        self,
        data: Any,
        length: int | None = None,
        source: str | None = None,
        **params: Any,
    ) -> np.ndarray:
        """Calculate and return only the values array."""
        config = IndicatorConfig.coerce({**params, "length": length, "source": source})
        return self.calculate(data, config).values

    def get_source_data(self, data: MarketData | np.ndarray, source: str | None = None) -> np.ndarray:
        return get_source_data(data, source)

    def describe(self) -> dict[str, Any]:
        """Static description used by the registry."""
        spec = self.shape_spec
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "shape": spec.shape.value,
            "default_length": spec.default_length,
            "min_length": spec.min_length,
            "max_length": spec.max_length,
            "default_multiplier": spec.default_multiplier,
            "aliases": list(self.aliases),
        }

    def _prepare(
        self, data: Any, config: ConfigLike, default_source: str | None = None
    ) -> tuple[MarketData | np.ndarray, IndicatorConfig, dict[str, Any]]:
        """Coerce, check and resolve; shared by validate_input and calculate.

        The resolved parameters include the effective ``source`` tag, so an
        unknown tag raises here in strict mode whatever the input kind.
        """
        config = IndicatorConfig.coerce(config)
        prepared = prepare_input(data)
        try:
            validate_indicator_data(prepared)
            resolved = self.shape_spec.resolve(config)
            resolved["source"] = resolve_source(config.source or default_source).value
        except Exception as e:
            logger.debug(f"Validation failed for {self.name}: {e}", extra={"indicator": self.name})
            raise
        return prepared, config, resolved

    def _build_result(
        self,
        output: np.ndarray | Mapping[str, Any],
        n: int,
        metadata: dict[str, Any],
        primary: str = "values",
        started: float | None = None,
    ) -> IndicatorResult:
        """Wrap a calculation output into an IndicatorResult.

        A mapping output contributes its ``primary`` entry as ``values`` and
        every other entry as metadata. ``started`` is the ``perf_counter``
        reading taken when the calculation began, used for trace timing.
        """
        extras: dict[str, Any] = {}
        if isinstance(output, Mapping):
            if primary not in output:
                raise CalculationError(
                    f"Calculation did not return primary output '{primary}'",
                    indicator=self.name,
                )
            values = output[primary]
            extras = {k: v for k, v in output.items() if k != primary}
        else:
            values = output

        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 1 or len(values) != n:
            raise CalculationError(
                f"{self.name} returned {values.shape} values for {n} bars",
                indicator=self.name,
                expected_length=n,
                actual_length=len(values) if values.ndim == 1 else None,
            )
        for key, extra in extras.items():
            if isinstance(extra, np.ndarray) and len(extra) != n:
                raise CalculationError(
                    f"{self.name} output '{key}' has {len(extra)} values for {n} bars",
                    indicator=self.name,
                    expected_length=n,
                    actual_length=len(extra),
                )

        trace_calculation(
            self.name,
            metadata.get("length"),
            metadata.get("source"),
            n,
            (time.perf_counter() - started) * 1000.0 if started is not None else None,
        )
        return IndicatorResult(self.name, values, {**metadata, **extras})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, category={self.category!r})"


class OscillatorIndicator(BaseIndicator):
    """Base class for single-series oscillators.

    Subclasses implement ``calculate_oscillator(series, length)``.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        default_length: int = 14,
        min_length: int = 1,
        max_length: int | None = None,
        category: str = "momentum",
        aliases: tuple[str, ...] | list[str] = (),
    ) -> None:
        super().__init__(name, description, category, aliases)
        self.shape_spec = ShapeSpec.oscillator(default_length, min_length, max_length)

    @property
    def default_length(self) -> int:
        return self.shape_spec.default_length

    def validate_input(self, data: Any, config: ConfigLike = None) -> None:
        self._prepare(data, config)

    def calculate(self, data: Any, config: ConfigLike = None) -> IndicatorResult:
        started = time.perf_counter()
        prepared, _, resolved = self._prepare(data, config)
        series = self.get_source_data(prepared, resolved["source"])
        output = self.calculate_oscillator(series, resolved["length"])
        metadata = {"length": resolved["length"], "source": resolved["source"]}
        return self._build_result(output, len(series), metadata, started=started)

    @abstractmethod
    def calculate_oscillator(
        self, series: np.ndarray, length: int
    ) -> np.ndarray | Mapping[str, np.ndarray]:
        """Compute the oscillator over one source series."""
        pass


class VolatilityIndicator(BaseIndicator):
    """Base class for band and volatility indicators.

    Subclasses implement ``calculate_volatility(series, length, multiplier)``.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        default_length: int = 20,
        default_multiplier: float = 2.0,
        min_length: int = 1,
        max_length: int | None = None,
        category: str = "volatility",
        aliases: tuple[str, ...] | list[str] = (),
    ) -> None:
        super().__init__(name, description, category, aliases)
        self.shape_spec = ShapeSpec.volatility(
            default_length, default_multiplier, min_length, max_length
        )

    @property
    def default_length(self) -> int:
        return self.shape_spec.default_length

    @property
    def default_multiplier(self) -> float:
        return self.shape_spec.default_multiplier

    def validate_input(self, data: Any, config: ConfigLike = None) -> None:
        self._prepare(data, config)

    def calculate(self, data: Any, config: ConfigLike = None) -> IndicatorResult:
        started = time.perf_counter()
        prepared, _, resolved = self._prepare(data, config)
        series = self.get_source_data(prepared, resolved["source"])
        output = self.calculate_volatility(series, resolved["length"], resolved["multiplier"])
        metadata = {
            "length": resolved["length"],
            "source": resolved["source"],
            "multiplier": resolved["multiplier"],
        }
        return self._build_result(output, len(series), metadata, started=started)

    @abstractmethod
    def calculate_volatility(
        self, series: np.ndarray, length: int, multiplier: float
    ) -> np.ndarray | Mapping[str, np.ndarray]:
        """Compute the indicator over one source series."""
        pass


class NotImplementedIndicator(BaseIndicator):
    """Placeholder for indicators that are declared but not available.

    Both validation and calculation always raise.
    """

    def validate_input(self, data: Any, config: ConfigLike = None) -> None:
        raise IndicatorNotImplementedError(
            f"{self.name} is not implemented", indicator=self.name
        )

    def calculate(self, data: Any, config: ConfigLike = None) -> IndicatorResult:
        raise IndicatorNotImplementedError(
            f"{self.name} is not implemented", indicator=self.name
        )

"""
Unit tests for indicators/factory.py
"""

import numpy as np
import pytest

from indicator_engine.calculations.moving_averages import ema, sma
from indicator_engine.calculations.momentum import momentum
from indicator_engine.core.data_types import IndicatorShape, InputKind
from indicator_engine.core.exceptions import (
    CalculationError,
    DataValidationError,
    InvalidParameterError,
    MissingDataError,
)
from indicator_engine.indicators.factory import (
    FactoryIndicator,
    IndicatorDescriptor,
    create_moving_average_indicator,
    create_oscillator_indicator,
    create_volatility_indicator,
    create_volume_indicator,
    make_indicator,
)


def scaled_momentum(source, length, scale=1.0):
    return momentum(source, length) * scale


def close_range(data, length):
    return data.high - data.low


def bands(source, length, multiplier):
    basis = sma(source, length)
    return {"values": basis, "upper": basis + multiplier, "lower": basis - multiplier}


class TestMakeIndicator:
    """Tests for make_indicator."""

    def test_returns_indicator_instance(self):
        indicator = make_indicator(
            IndicatorDescriptor("MOMX", "Momentum", momentum, default_length=3)
        )

        assert isinstance(indicator, FactoryIndicator)
        assert indicator.name == "MOMX"
        assert indicator.shape_spec.shape is IndicatorShape.GENERIC

    def test_pipeline(self, sample_market_data):
        """Test validate -> extract source -> calculate -> wrap."""
        indicator = make_indicator(
            IndicatorDescriptor("MOMX", "Momentum", momentum, default_length=3)
        )

        result = indicator.calculate(sample_market_data)

        np.testing.assert_array_equal(result.values, momentum(sample_market_data.close, 3))
        assert result.metadata == {"length": 3, "source": "close"}

    def test_source_and_length_from_config(self, sample_market_data):
        indicator = make_indicator(
            IndicatorDescriptor("MOMX", "Momentum", momentum, default_length=3)
        )

        result = indicator.calculate(sample_market_data, {"length": 5, "source": "high"})

        np.testing.assert_array_equal(result.values, momentum(sample_market_data.high, 5))
        assert result.metadata["source"] == "high"

    def test_declared_params_overridden_by_config(self):
        """Test config extras override declared params; undeclared ones are ignored."""
        indicator = make_indicator(
            IndicatorDescriptor(
                "SMOM",
                "Scaled momentum",
                scaled_momentum,
                default_length=1,
                params={"scale": 1.0},
            )
        )

        result = indicator.calculate([1.0, 2.0, 4.0], {"scale": 10.0, "unrelated": "x"})

        np.testing.assert_allclose(result.values[1:], [10.0, 20.0])
        assert result.metadata["scale"] == 10.0
        assert "unrelated" not in result.metadata

    def test_invalid_length(self):
        indicator = make_indicator(
            IndicatorDescriptor("MOMX", "Momentum", momentum, default_length=3)
        )

        with pytest.raises(InvalidParameterError):
            indicator.calculate([1.0, 2.0, 3.0], {"length": 0})

    def test_empty_input(self):
        indicator = make_indicator(
            IndicatorDescriptor("MOMX", "Momentum", momentum, default_length=3)
        )

        with pytest.raises(DataValidationError):
            indicator.calculate([])

    def test_market_input_rejects_raw_array(self):
        """Test market-data indicators refuse a bare series."""
        indicator = make_indicator(
            IndicatorDescriptor(
                "RANGE", "Range", close_range, default_length=1, input_kind=InputKind.MARKET
            )
        )

        with pytest.raises(DataValidationError):
            indicator.calculate([1.0, 2.0, 3.0])

    def test_market_input_receives_market_data(self, sample_market_data):
        indicator = make_indicator(
            IndicatorDescriptor(
                "RANGE", "Range", close_range, default_length=1, input_kind=InputKind.MARKET
            )
        )

        result = indicator.calculate(sample_market_data)

        np.testing.assert_allclose(
            result.values, sample_market_data.high - sample_market_data.low
        )

    def test_missing_primary_output(self):
        indicator = make_indicator(
            IndicatorDescriptor(
                "BAD", "Bad", lambda source, length: {"upper": source}, default_length=1
            )
        )

        with pytest.raises(CalculationError):
            indicator.calculate([1.0, 2.0])


class TestConvenienceBuilders:
    """Tests for create_* builders."""

    def test_moving_average(self, sample_market_data):
        indicator = create_moving_average_indicator("MYEMA", "My EMA", "ema", 10)

        values = indicator(sample_market_data)

        assert indicator.category == "trend"
        np.testing.assert_array_equal(values, ema(sample_market_data.close, 10))

    def test_moving_average_unknown_type(self):
        with pytest.raises(InvalidParameterError):
            create_moving_average_indicator("X", "X", "alma", 10)

    def test_oscillator(self):
        indicator = create_oscillator_indicator(
            "MOMO", "Momentum", momentum, default_length=2, max_length=10
        )

        assert indicator.category == "momentum"
        assert indicator.shape_spec.shape is IndicatorShape.OSCILLATOR
        with pytest.raises(InvalidParameterError, match="must not exceed 10"):
            indicator.calculate([1.0, 2.0, 3.0], {"length": 11})

    def test_volatility_with_multiplier(self, sample_market_data):
        """Test a default multiplier selects the volatility shape."""
        indicator = create_volatility_indicator(
            "ENV", "Envelope", bands, default_length=5, default_multiplier=1.0
        )

        result = indicator.calculate(sample_market_data, {"multiplier": 2.5})

        assert indicator.shape_spec.shape is IndicatorShape.VOLATILITY
        assert result.metadata["multiplier"] == 2.5
        valid = ~np.isnan(result.values)
        np.testing.assert_allclose(
            result.metadata["upper"][valid] - result.values[valid], 2.5
        )

    def test_volatility_without_multiplier_is_generic(self):
        indicator = create_volatility_indicator("STD", "Std", sma, default_length=5)

        assert indicator.shape_spec.shape is IndicatorShape.GENERIC
        assert indicator.category == "volatility"

    def test_volume_requires_volume(self, market_data_without_volume):
        """Test volume indicators reject market data without volume."""
        indicator = create_volume_indicator(
            "VOLSMA", "Volume SMA", lambda data, length: sma(data.volume, length), 5
        )

        with pytest.raises(MissingDataError):
            indicator.calculate(market_data_without_volume)

    def test_volume_indicator(self, sample_market_data):
        indicator = create_volume_indicator(
            "VOLSMA", "Volume SMA", lambda data, length: sma(data.volume, length), 5
        )

        result = indicator.calculate(sample_market_data)

        np.testing.assert_array_equal(result.values, sma(sample_market_data.volume, 5))

"""
Unit tests for calculations/validation.py
"""

import numpy as np
import pandas as pd
import pytest

from indicator_engine.calculations.validation import (
    prepare_input,
    validate_indicator_data,
    validate_length,
    validate_market_data,
    validate_multiplier,
    validate_volume_data,
)
from indicator_engine.core.data_types import MarketData
from indicator_engine.core.exceptions import (
    DataValidationError,
    InvalidParameterError,
    MissingDataError,
    ValidationError,
)


class TestValidateLength:
    """Tests for validate_length."""

    def test_accepts_positive_integers(self):
        assert validate_length(5) == 5
        assert validate_length(np.int64(7)) == 7

    def test_accepts_integral_float(self):
        """Test 3.0 is normalized to 3."""
        result = validate_length(3.0)

        assert result == 3
        assert isinstance(result, int)

    @pytest.mark.parametrize("length", [0, -1, 2.5, float("nan"), True, "5", None])
    def test_rejects_invalid(self, length):
        """Test non-positive, non-integral or non-numeric lengths."""
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_length(length)

        assert "positive integer" in exc_info.value.message

    def test_range_messages(self):
        """Test min/max range errors carry the bound."""
        with pytest.raises(InvalidParameterError, match="at least 2"):
            validate_length(1, min_length=2)
        with pytest.raises(InvalidParameterError, match="must not exceed 50"):
            validate_length(51, max_length=50)

    def test_is_a_validation_error(self):
        """Test the error sits under ValidationError."""
        with pytest.raises(ValidationError):
            validate_length(0)


class TestValidateMultiplier:
    """Tests for validate_multiplier."""

    def test_accepts_positive(self):
        assert validate_multiplier(2) == 2.0

    @pytest.mark.parametrize("multiplier", [0, -1.5, float("inf"), True, "2"])
    def test_rejects_invalid(self, multiplier):
        with pytest.raises(InvalidParameterError):
            validate_multiplier(multiplier)


class TestDataValidation:
    """Tests for market data checks."""

    def test_empty_series(self):
        """Test empty input is rejected."""
        with pytest.raises(DataValidationError):
            validate_indicator_data(np.array([]))

    def test_empty_market_data(self):
        with pytest.raises(DataValidationError):
            validate_market_data(MarketData(open=[], high=[], low=[], close=[]))

    def test_raw_array_is_not_market_data(self):
        with pytest.raises(DataValidationError):
            validate_market_data(np.array([1.0, 2.0]))

    def test_volume_required(self, market_data_without_volume, sample_market_data):
        """Test volume checks."""
        with pytest.raises(MissingDataError):
            validate_volume_data(market_data_without_volume)

        assert validate_volume_data(sample_market_data) is sample_market_data


class TestPrepareInput:
    """Tests for prepare_input."""

    def test_market_data_passthrough(self, sample_market_data):
        assert prepare_input(sample_market_data) is sample_market_data

    def test_mapping(self):
        """Test mappings become MarketData."""
        result = prepare_input({"open": [1], "high": [2], "low": [0], "close": [1]})

        assert isinstance(result, MarketData)
        assert len(result) == 1

    def test_polars_frame(self, sample_ohlcv_frame):
        result = prepare_input(sample_ohlcv_frame)

        assert isinstance(result, MarketData)
        assert len(result) == 100
        assert result.has_volume

    def test_pandas_frame(self, sample_ohlcv_frame):
        frame = pd.DataFrame(
            {column: sample_ohlcv_frame[column].to_numpy() for column in sample_ohlcv_frame.columns}
        )

        result = prepare_input(frame)

        assert isinstance(result, MarketData)
        np.testing.assert_allclose(result.close, sample_ohlcv_frame["close"].to_numpy())

    def test_sequence(self):
        """Test plain sequences become float arrays."""
        result = prepare_input([1, 2, 3])

        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64

    def test_pandas_series(self):
        result = prepare_input(pd.Series([1.0, 2.0]))

        np.testing.assert_array_equal(result, [1.0, 2.0])

    def test_two_dimensional_rejected(self):
        with pytest.raises(DataValidationError):
            prepare_input([[1.0, 2.0], [3.0, 4.0]])

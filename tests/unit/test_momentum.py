"""
Unit tests for calculations/momentum.py and the offset helper
"""

import numpy as np
import pytest

from indicator_engine.calculations.math_utils import max_of, offset, safe_divide
from indicator_engine.calculations.momentum import change, momentum, percent_change, roc
from indicator_engine.core.exceptions import InvalidParameterError


class TestMomentum:
    """Tests for momentum and change."""

    def test_constant_series(self):
        """Test momentum of a flat series uses a single lag of length."""
        result = momentum([10, 10, 10, 10], 2)

        assert np.isnan(result[0])
        assert np.isnan(result[1])
        np.testing.assert_array_equal(result[2:], [0.0, 0.0])

    def test_round_trip(self):
        """Test momentum[i] + data[i - length] == data[i]."""
        np.random.seed(42)
        data = 50 + np.cumsum(np.random.randn(60))
        length = 7

        result = momentum(data, length)

        assert np.all(np.isnan(result[:length]))
        for i in range(length, len(data)):
            assert result[i] + data[i - length] == pytest.approx(data[i])

    def test_change_defaults_to_one_bar(self):
        """Test change is the bar-to-bar difference."""
        result = change([1, 3, 6])

        assert np.isnan(result[0])
        np.testing.assert_array_equal(result[1:], [2.0, 3.0])

    def test_short_input(self):
        """Test N <= length gives all NaN."""
        assert np.all(np.isnan(momentum([1.0, 2.0], 3)))

    def test_invalid_length(self):
        """Test zero length raises."""
        with pytest.raises(InvalidParameterError):
            momentum([1.0, 2.0], 0)


class TestRateOfChange:
    """Tests for roc."""

    def test_known_values(self):
        """Test percent change over one bar."""
        result = roc([100, 110, 121], 1)

        assert np.isnan(result[0])
        np.testing.assert_allclose(result[1:], [10.0, 10.0])

    def test_zero_base_follows_ieee(self):
        """Test a zero base yields +-inf, or NaN for 0/0."""
        assert roc([0.0, 1.0], 1)[1] == np.inf
        assert roc([0.0, -1.0], 1)[1] == -np.inf
        assert np.isnan(roc([0.0, 0.0], 1)[1])

    def test_alias(self):
        """Test percent_change is roc."""
        assert percent_change is roc


class TestArrayHelpers:
    """Tests for offset, max_of and safe_divide."""

    def test_offset_forward(self):
        """Test shifting forward fills the head with NaN."""
        result = offset([1, 2, 3], 1)

        assert np.isnan(result[0])
        np.testing.assert_array_equal(result[1:], [1, 2])

    def test_offset_backward(self):
        """Test shifting backward fills the tail with NaN."""
        result = offset([1, 2, 3], -1)

        np.testing.assert_array_equal(result[:2], [2, 3])
        assert np.isnan(result[2])

    def test_offset_beyond_length(self):
        """Test shifting past the end gives all NaN."""
        assert np.all(np.isnan(offset([1, 2, 3], 5)))

    def test_max_of_skips_nan(self):
        """Test elementwise maximum ignores NaN operands."""
        result = max_of(np.array([1.0, np.nan]), np.array([0.5, 2.0]))

        np.testing.assert_array_equal(result, [1.0, 2.0])

    def test_safe_divide_fallback(self):
        """Test zero denominators take the fallback value."""
        result = safe_divide(np.array([1.0, 4.0]), np.array([0.0, 2.0]), fallback=0.0)

        np.testing.assert_array_equal(result, [0.0, 2.0])

"""
Unit tests for calculations/statistics.py
"""

import numpy as np
import pytest

from indicator_engine.calculations.statistics import (
    highest,
    lowest,
    mean_deviation,
    rolling_max,
    rolling_min,
    rolling_stddev,
    rolling_sum,
    rolling_variance,
)
from indicator_engine.core.exceptions import InvalidParameterError


class TestRollingVariance:
    """Tests for rolling_variance and rolling_stddev."""

    def test_population_denominator(self):
        """Test variance divides by length, not length - 1."""
        data = [2, 4, 4, 4, 5, 5, 7, 9]

        variance = rolling_variance(data, 8)
        stddev = rolling_stddev(data, 8)

        assert np.all(np.isnan(variance[:7]))
        assert variance[7] == pytest.approx(4.0)
        assert stddev[7] == pytest.approx(2.0)

    def test_short_windows(self):
        """Test two-bar windows on a unit-step series."""
        np.testing.assert_allclose(
            rolling_variance([1, 2, 3, 4], 2)[1:], [0.25, 0.25, 0.25]
        )
        np.testing.assert_allclose(rolling_stddev([1, 2, 3, 4], 2)[1:], [0.5, 0.5, 0.5])

    def test_constant_series_is_zero(self):
        """Test a constant series has zero variance, never negative."""
        result = rolling_stddev(np.full(20, 3.3), 5)

        valid = result[~np.isnan(result)]
        assert np.all(valid >= 0)
        np.testing.assert_allclose(valid, 0.0, atol=1e-12)

    def test_nan_propagates(self):
        """Test NaN in the window gives NaN instead of raising."""
        result = rolling_stddev([1.0, np.nan, 3.0, 4.0], 2)

        assert np.isnan(result[1])
        assert np.isnan(result[2])
        assert result[3] == pytest.approx(0.5)


class TestRollingExtremes:
    """Tests for rolling_min and rolling_max."""

    def test_known_values(self):
        """Test trailing min and max."""
        data = [3, 1, 2, 5, 4]

        mins = rolling_min(data, 3)
        maxs = rolling_max(data, 3)

        assert np.all(np.isnan(mins[:2]))
        np.testing.assert_array_equal(mins[2:], [1, 1, 2])
        np.testing.assert_array_equal(maxs[2:], [3, 5, 5])

    def test_aliases(self):
        """Test Pine-style aliases."""
        assert lowest is rolling_min
        assert highest is rolling_max

    def test_nan_in_window(self):
        """Test NaN poisons only the windows containing it."""
        result = rolling_min([1.0, np.nan, 3.0, 4.0], 2)

        assert np.all(np.isnan(result[:3]))
        assert result[3] == 3.0


class TestRollingSum:
    """Tests for rolling_sum and mean_deviation."""

    def test_rolling_sum(self):
        """Test trailing sums."""
        result = rolling_sum([1, 2, 3, 4], 2)

        assert np.isnan(result[0])
        np.testing.assert_array_equal(result[1:], [3, 5, 7])

    def test_mean_deviation(self):
        """Test mean absolute deviation from the window mean."""
        result = mean_deviation([1, 2, 3], 3)

        assert result[2] == pytest.approx(2.0 / 3.0)


class TestEdgePolicy:
    """Edge cases shared by window statistics."""

    @pytest.mark.parametrize(
        "func",
        [rolling_sum, rolling_variance, rolling_stddev, rolling_min, rolling_max, mean_deviation],
    )
    def test_short_input_all_nan(self, func):
        """Test N < length gives all NaN of length N."""
        result = func([1.0, 2.0], 4)

        assert len(result) == 2
        assert np.all(np.isnan(result))

    @pytest.mark.parametrize("func", [rolling_sum, rolling_variance, rolling_min])
    def test_invalid_length(self, func):
        """Test zero length raises."""
        with pytest.raises(InvalidParameterError):
            func([1.0, 2.0], 0)

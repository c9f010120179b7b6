"""
Pytest fixtures for the Indicator Engine tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so environment changes in a test stay local."""
    from indicator_engine.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_ohlcv_frame():
    """Sample OHLCV polars DataFrame (100 bars, random walk)."""
    import numpy as np
    import polars as pl

    np.random.seed(42)
    n = 100

    close = 100 + np.cumsum(np.random.randn(n) * 0.5)
    high = close + np.abs(np.random.randn(n) * 0.3)
    low = close - np.abs(np.random.randn(n) * 0.3)
    open_ = close + np.random.randn(n) * 0.2
    volume = np.random.randint(1000, 10000, n).astype(float)

    return pl.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume,
        }
    )


@pytest.fixture
def sample_market_data(sample_ohlcv_frame):
    """MarketData built from the sample frame."""
    from indicator_engine.core.data_types import MarketData

    return MarketData.from_polars(sample_ohlcv_frame)


@pytest.fixture
def market_data_without_volume(sample_market_data):
    """MarketData with OHLC only."""
    from indicator_engine.core.data_types import MarketData

    return MarketData(
        open=sample_market_data.open,
        high=sample_market_data.high,
        low=sample_market_data.low,
        close=sample_market_data.close,
    )


@pytest.fixture
def indicator_registry():
    """Create a fresh IndicatorRegistry instance for testing."""
    from indicator_engine.core.registry import IndicatorRegistry

    return IndicatorRegistry()

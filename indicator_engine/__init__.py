"""
Indicator Engine

Technical-analysis indicators over OHLCV arrays with Pine Script
semantics: NaN-padded warm-up windows, configurable smoothing and
default lookback lengths.
"""

__version__ = "1.0.0"

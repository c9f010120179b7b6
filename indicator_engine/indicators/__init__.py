"""
Indicators module.

Provides the indicator contract, the shape base classes, the factory and
the registered leaf indicator library.
"""

from .base import (
    BaseIndicator,
    NotImplementedIndicator,
    OscillatorIndicator,
    ShapeSpec,
    VolatilityIndicator,
)
from .factory import (
    FactoryIndicator,
    IndicatorDescriptor,
    create_moving_average_indicator,
    create_oscillator_indicator,
    create_volatility_indicator,
    create_volume_indicator,
    make_indicator,
)
from .library import calculate_indicator, get_indicator

__all__ = [
    # Base classes
    "BaseIndicator",
    "NotImplementedIndicator",
    "OscillatorIndicator",
    "ShapeSpec",
    "VolatilityIndicator",
    # Factory
    "FactoryIndicator",
    "IndicatorDescriptor",
    "create_moving_average_indicator",
    "create_oscillator_indicator",
    "create_volatility_indicator",
    "create_volume_indicator",
    "make_indicator",
    # Library
    "calculate_indicator",
    "get_indicator",
]

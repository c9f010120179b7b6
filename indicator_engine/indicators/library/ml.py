"""
Machine-learning indicators.
"""

from __future__ import annotations

from indicator_engine.core.registry import register_indicator
from indicator_engine.indicators.base import NotImplementedIndicator


# TODO: implement nearest-neighbour classification once a feature window
# format is agreed on; until then every call raises IndicatorNotImplementedError.
@register_indicator(aliases=["knn"])
class KNNClassifier(NotImplementedIndicator):
    """k-nearest-neighbour price direction classifier."""

    def __init__(self) -> None:
        super().__init__("KNN_CLASSIFIER", "k-Nearest Neighbours Classifier", category="ml")

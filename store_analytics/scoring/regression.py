"""
Linear regression estimator: fixed weights over the five features.
"""

from __future__ import annotations

from typing import Sequence

from store_analytics.domain.models import FeatureVector
from store_analytics.normalizer import clamp
from store_analytics.scoring.abstract import AbstractScoringStrategy

DEFAULT_WEIGHTS = (0.3, 0.25, 0.2, 0.15, 0.1)
DEFAULT_BIAS = 0.1


class LinearRegressionStrategy(AbstractScoringStrategy):
    """Weighted sum of revenue, growth, efficiency, sales and category plus a bias."""

    name: str = "regression"
    description: str = "Fixed-weight linear blend of the normalized features."

    def __init__(self, weights: Sequence[float] = DEFAULT_WEIGHTS, bias: float = DEFAULT_BIAS) -> None:
        if len(weights) != 5:
            raise ValueError(f"regression needs 5 weights, got {len(weights)}")
        self.weights = tuple(weights)
        self.bias = bias

    def score(self, features: FeatureVector) -> float:
        prediction = self.bias + sum(
            weight * value for weight, value in zip(self.weights, features.with_category())
        )
        return clamp(prediction)


__all__ = ["LinearRegressionStrategy"]

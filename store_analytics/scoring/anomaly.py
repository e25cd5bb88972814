"""
Z-score outlier estimator.

The score is the largest absolute z-score among the five features, divided by
the threshold and capped at 1. Records whose features are all alike score 0.
"""

from __future__ import annotations

import math

from store_analytics.domain.models import FeatureVector
from store_analytics.scoring.abstract import AbstractScoringStrategy

DEFAULT_THRESHOLD = 2.0
# Keeps the z-score finite when every feature is identical.
_EPSILON = 0.001


class AnomalyStrategy(AbstractScoringStrategy):
    name: str = "anomaly"
    description: str = "Largest feature z-score relative to a 2-sigma threshold."

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self.threshold = threshold

    def score(self, features: FeatureVector) -> float:
        values = features.with_category()
        mean = sum(values) / len(values)
        std_dev = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
        worst = max(abs(v - mean) / (std_dev + _EPSILON) for v in values)
        return min(1.0, worst / self.threshold)


__all__ = ["AnomalyStrategy"]

"""
AI score: weighted ensemble of the registered scoring strategies.

    ai_score = 100 * sum(w_i * s_i) / sum(w_i)     over available strategies

A strategy returning None drops out and the remaining weights are
renormalized. If no strategy is available the score is 50. Any exception or
non-finite sub-score sends the record to `fallback_score`.
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional, Sequence

from store_analytics.domain.models import FeatureVector, Record
from store_analytics.normalizer import normalize
from store_analytics.scoring.abstract import ScoringStrategy
from store_analytics.scoring.fallback import fallback_score
from store_analytics.scoring.registry import build_strategies
from store_analytics.utils.logging import get_logger

log = get_logger(__name__)

ENSEMBLE_WEIGHTS: Dict[str, float] = {
    "regression": 0.30,
    "clustering": 0.20,
    "classification": 0.25,
    "anomaly": 0.25,
}
NEUTRAL_SCORE = 50.0


class ScoringFailure(ArithmeticError):
    """A sub-estimator produced something the ensemble cannot use."""


class AIScorer:
    """Blend of sub-estimators, scaled to [0, 100]."""

    def __init__(
        self,
        strategies: Optional[Sequence[ScoringStrategy]] = None,
        weights: Mapping[str, float] = ENSEMBLE_WEIGHTS,
    ) -> None:
        self.strategies = list(strategies) if strategies is not None else build_strategies()
        self.weights = dict(weights)
        missing = [s.name for s in self.strategies if s.name not in self.weights]
        if missing:
            raise ValueError(f"No ensemble weight for strategies: {', '.join(missing)}")

    def sub_scores(self, features: FeatureVector) -> Dict[str, Optional[float]]:
        return {strategy.name: strategy.score(features) for strategy in self.strategies}

    def combine(self, scores: Mapping[str, Optional[float]]) -> float:
        weighted_sum = 0.0
        total_weight = 0.0
        for name, value in scores.items():
            if value is None:
                continue
            if not math.isfinite(value):
                raise ScoringFailure(f"strategy '{name}' returned {value!r}")
            weighted_sum += value * self.weights[name]
            total_weight += self.weights[name]
        if total_weight <= 0:
            return NEUTRAL_SCORE
        return max(0.0, min(100.0, weighted_sum / total_weight * 100.0))

    def score(self, record: Record, features: Optional[FeatureVector] = None) -> float:
        try:
            vector = features if features is not None else normalize(record)
            return self.combine(self.sub_scores(vector))
        except Exception as exc:  # noqa: BLE001 - any estimator failure falls back
            log.warning(
                f"[SCORING FALLBACK] ai score for {record.name}",
                extra={"record": record.name, "scorer": "ai", "error": str(exc)},
            )
            return fallback_score(record)


__all__ = ["AIScorer", "ENSEMBLE_WEIGHTS", "ScoringFailure"]

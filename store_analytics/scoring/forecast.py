"""
Short-term forecast per record.

    value = (growth_f + efficiency_f - 0.5) + 0.1 * sin(month0 * pi / 6) + 0.1 * (r - 0.5)

`growth_f` and `efficiency_f` are the normalized features, `month0` the
zero-based current month and `r` a draw from the random source. A positive
value forecasts growth; |value| * 100 (capped at 100) is the confidence.
Each prediction carries the recommendations from `scoring.advice`.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Callable, List, Optional

from store_analytics.config import get_settings
from store_analytics.domain.models import FeatureVector, Prediction, Record
from store_analytics.normalizer import normalize
from store_analytics.scoring.advice import recommend
from store_analytics.utils.randomness import RandomSource, SystemRandomSource

SEASONAL_AMPLITUDE = 0.1
NOISE_AMPLITUDE = 0.1
DEFAULT_TIMEFRAME = "3 months"


def trend_factors(record: Record) -> List[str]:
    factors: List[str] = []
    if record.growth > 10:
        factors.append("sustained positive growth")
    elif record.growth < -5:
        factors.append("declining trend")
    if record.efficiency > 80:
        factors.append("high operational efficiency")
    elif record.efficiency < 60:
        factors.append("optimisation opportunities")
    if record.revenue > 200_000:
        factors.append("robust revenue volume")
    return factors


def outlook(record: Record) -> str:
    composite = (record.growth + record.efficiency + record.revenue / 3000.0) / 3.0
    if composite > 70:
        return "very positive"
    if composite > 50:
        return "positive"
    if composite > 30:
        return "neutral"
    return "needs attention"


class Forecaster:
    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], date] = date.today,
        timeframe: str = DEFAULT_TIMEFRAME,
    ) -> None:
        self.rng = rng or SystemRandomSource(get_settings().random_seed)
        self.clock = clock
        self.timeframe = timeframe

    def seasonality(self) -> float:
        month0 = self.clock().month - 1
        return math.sin(month0 * math.pi / 6.0) * SEASONAL_AMPLITUDE

    def predict(self, record: Record, features: Optional[FeatureVector] = None) -> Prediction:
        vector = features if features is not None else normalize(record)
        trend = vector.growth + vector.efficiency - 0.5
        noise = (self.rng.next() - 0.5) * NOISE_AMPLITUDE
        value = trend + self.seasonality() + noise
        direction = "growth" if value > 0 else "decline"
        confidence = min(100.0, abs(value) * 100.0)
        return Prediction(
            trend=direction,
            confidence=confidence,
            timeframe=self.timeframe,
            expected_change=value * 100.0,
            factors=trend_factors(record),
            outlook=outlook(record),
            recommendations=recommend(record, vector, direction, confidence),
        )


__all__ = ["Forecaster", "outlook", "trend_factors"]

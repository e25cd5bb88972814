"""
Feature normalizer: maps a record's base attributes onto [0, 1].

Out-of-range inputs saturate at the bounds so nothing downstream ever sees a
feature outside the unit interval.
"""

from __future__ import annotations

import math
from typing import Dict

from store_analytics.domain.models import FeatureVector, Record

REVENUE_SCALE = 300_000.0
GROWTH_OFFSET = 20.0
GROWTH_SPAN = 40.0
EFFICIENCY_SCALE = 100.0
SALES_SCALE = 1_000.0

CATEGORY_WEIGHTS: Dict[str, float] = {
    "Quantum Computing": 0.9,
    "Neural Interfaces": 0.8,
    "Space Tech": 0.85,
    "Biotech": 0.75,
    "Robotics": 0.7,
    "AI Systems": 0.95,
}
DEFAULT_CATEGORY_WEIGHT = 0.5


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp into [low, high]; NaN collapses to `low`."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def encode_category(category: str) -> float:
    return CATEGORY_WEIGHTS.get(category, DEFAULT_CATEGORY_WEIGHT)


def normalize(record: Record) -> FeatureVector:
    return FeatureVector(
        revenue=clamp(record.revenue / REVENUE_SCALE),
        growth=clamp((record.growth + GROWTH_OFFSET) / GROWTH_SPAN),
        efficiency=clamp(record.efficiency / EFFICIENCY_SCALE),
        sales=clamp(record.sales / SALES_SCALE),
        category=encode_category(record.category),
    )


__all__ = ["CATEGORY_WEIGHTS", "DEFAULT_CATEGORY_WEIGHT", "clamp", "encode_category", "normalize"]

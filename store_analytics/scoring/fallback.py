"""
Last-resort score used when a scorer fails for a record.
"""

from __future__ import annotations

import math

from store_analytics.domain.models import Record


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def fallback_score(record: Record) -> float:
    """Mean of revenue/3000, growth and efficiency, clamped to [0, 100]. Never raises."""
    terms = (_finite(record.revenue) / 3000.0, _finite(record.growth), _finite(record.efficiency))
    return max(0.0, min(100.0, sum(terms) / 3.0))


__all__ = ["fallback_score"]

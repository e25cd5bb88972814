"""
Aggregator: portfolio KPIs over a scored RecordSet.

Tie-break rules:
- top category: strictly greater revenue wins, so on a tie the category
  encountered first in RecordSet order is kept.
- ranking: Python's sort is stable, so records with equal quantum scores
  keep their RecordSet order. A record without a quantum score ranks as 0.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from store_analytics.domain.models import AggregateSnapshot, Record

PERFORMANCE_TIERS = (
    (90.0, "excellent"),
    (80.0, "very good"),
    (70.0, "good"),
    (60.0, "fair"),
)
LOWEST_TIER = "needs improvement"


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def first_max(totals: Dict[str, float]) -> Optional[str]:
    """Key with the largest value; the earliest inserted key wins ties."""
    best: Optional[str] = None
    for key, value in totals.items():
        if best is None or value > totals[best]:
            best = key
    return best


def most_frequent(values: Iterable[str]) -> Optional[str]:
    counts: Dict[str, int] = {}
    for value in values:
        if value:
            counts[value] = counts.get(value, 0) + 1
    return first_max({key: float(count) for key, count in counts.items()})


def performance_tier(score: Optional[float]) -> str:
    value = score or 0.0
    for threshold, label in PERFORMANCE_TIERS:
        if value >= threshold:
            return label
    return LOWEST_TIER


def rank(records: Iterable[Record]) -> list[Record]:
    return sorted(records, key=lambda record: record.quantum_score or 0.0, reverse=True)


def aggregate(records: Sequence[Record]) -> AggregateSnapshot:
    if not records:
        return AggregateSnapshot()

    count = len(records)
    total_revenue = sum(record.revenue for record in records)

    revenue_by_category: Dict[str, float] = {}
    category_counts: Dict[str, int] = {}
    for record in records:
        if not record.has_category:
            continue
        revenue_by_category[record.category] = (
            revenue_by_category.get(record.category, 0.0) + record.revenue
        )
        category_counts[record.category] = category_counts.get(record.category, 0) + 1

    return AggregateSnapshot(
        total_revenue=total_revenue,
        record_count=count,
        average_ticket=total_revenue / count,
        revenue_by_category=revenue_by_category,
        category_counts=category_counts,
        top_category=first_max(revenue_by_category),
        average_growth=_mean([record.growth for record in records]),
        average_quantum_score=_mean([record.quantum_score or 0.0 for record in records]),
        average_ai_score=_mean([record.ai_score or 0.0 for record in records]),
        ranking=tuple(rank(records)),
    )


__all__ = ["aggregate", "first_max", "most_frequent", "performance_tier", "rank"]

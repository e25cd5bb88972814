"""
Insight selector: templated statements chosen by threshold rules.

Rules run in declaration order and each contributes at most one insight, so
the output order never depends on the computed values.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from store_analytics.aggregator import most_frequent
from store_analytics.domain.models import AggregateSnapshot, Insight, Record

EXPANSION_GROWTH_THRESHOLD = 10.0
DIVERSIFICATION_REVENUE_THRESHOLD = 500_000.0

INSUFFICIENT_DATA = Insight(
    tag="insufficient_data",
    text="Load data or generate a sample to produce insights.",
)

Rule = Callable[[AggregateSnapshot, Sequence[Record]], Optional[Insight]]


def _optimization(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    best, worst = snapshot.best, snapshot.worst
    if best is None or worst is None:
        return None
    best_score = best.quantum_score or 0.0
    worst_score = worst.quantum_score or 0.0
    if worst_score > 0:
        gain = f"{(best_score - worst_score) / worst_score * 100:.1f}%"
    else:
        gain = f"{best_score - worst_score:.1f} points"
    return Insight(
        tag="optimization",
        text=(
            f"{worst.name} can improve {gain} by adopting the practices "
            f"of {best.category} leader {best.name}"
        ),
    )


def _prediction(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    best = snapshot.best
    if best is None or best.prediction is None:
        return None
    forecast = best.prediction
    return Insight(
        tag="prediction",
        text=(
            f"{best.name} has a {forecast.confidence:.1f}% probability of "
            f"{forecast.trend} over the next {forecast.timeframe}"
        ),
    )


def _category(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    category = most_frequent(record.category for record in records if record.has_category)
    if category is None:
        return None
    return Insight(
        tag="category",
        text=f"The strongest growth pattern is concentrated in the {category} category",
    )


def _expansion(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    if snapshot.average_growth <= EXPANSION_GROWTH_THRESHOLD:
        return None
    return Insight(
        tag="expansion",
        text=(
            f"Average growth of {snapshot.average_growth:.1f}% favours "
            "accelerated expansion"
        ),
    )


def _diversification(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    if snapshot.total_revenue <= DIVERSIFICATION_REVENUE_THRESHOLD:
        return None
    return Insight(
        tag="diversification",
        text=(
            f"Total revenue of {snapshot.total_revenue:,.0f} supports "
            "diversifying the portfolio"
        ),
    )


def _technology(snapshot: AggregateSnapshot, records: Sequence[Record]) -> Optional[Insight]:
    return Insight(
        tag="technology",
        text="Adopt new AI tooling to lift operational efficiency",
    )


RULES: Sequence[Rule] = (
    _optimization,
    _prediction,
    _category,
    _expansion,
    _diversification,
    _technology,
)


def select_insights(snapshot: AggregateSnapshot, records: Sequence[Record] = ()) -> List[Insight]:
    if snapshot.is_empty:
        return [INSUFFICIENT_DATA]
    source = records or snapshot.ranking
    insights: List[Insight] = []
    for rule in RULES:
        insight = rule(snapshot, source)
        if insight is not None:
            insights.append(insight)
    return insights


__all__ = ["INSUFFICIENT_DATA", "RULES", "select_insights"]

"""
Report payloads for the document exporter.

Each report type extends a common header (totals, best and worst store by
revenue) with its own sub-aggregates. Payloads are plain JSON-friendly dicts;
rendering them into PDF or spreadsheet documents is left to the consumer.
Persisted copies go through `store_analytics.artifacts.persist_json`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from store_analytics.aggregator import first_max, performance_tier
from store_analytics.artifacts import persist_json
from store_analytics.config import get_settings
from store_analytics.domain.models import AggregateSnapshot, Recommendation, Record
from store_analytics.errors import ReportError
from store_analytics.normalizer import normalize
from store_analytics.scoring.advice import detect_anomalies
from store_analytics.scoring.clustering import kmeans
from store_analytics.scoring.quantum import optimize

REPORT_TITLES: Dict[str, str] = {
    "executive": "Executive Report",
    "financial": "Financial Report",
    "predictive": "Predictive Report",
    "trends": "Trends Report",
    "segmentation": "Segmentation Report",
    "quantum": "Quantum Report",
}

# Shares of revenue attributed to each cost line.
COST_SPLIT = {"operational": 0.40, "fixed": 0.25, "variable": 0.15}
SEGMENT_COUNT = 3
TOP_RANKING = 5


def _r(value: Optional[float], decimals: int = 2) -> Optional[float]:
    return round(value, decimals) if value is not None else None


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _store_summary(record: Record) -> Dict[str, Any]:
    return {
        "store": record.name,
        "category": record.category,
        "revenue": _r(record.revenue),
        "quantum_score": _r(record.quantum_score),
        "ai_score": _r(record.ai_score),
    }


def _advice_rows(store: str, recommendations: Sequence[Recommendation]) -> List[Dict[str, Any]]:
    return [{"store": store, **advice.model_dump()} for advice in recommendations]


def _by_priority(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda row: row["priority"] != "high")


def _extremes_by_revenue(records: Sequence[Record]) -> Tuple[Record, Record]:
    top, bottom = records[0], records[0]
    for record in records[1:]:
        if record.revenue > top.revenue:
            top = record
        if record.revenue < bottom.revenue:
            bottom = record
    return top, bottom


def _base(report_type: str, snapshot: AggregateSnapshot, records: Sequence[Record]) -> Dict[str, Any]:
    top, bottom = _extremes_by_revenue(records)
    return {
        "report_type": report_type,
        "title": REPORT_TITLES[report_type],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_stores": snapshot.record_count,
        "total_revenue": _r(snapshot.total_revenue),
        "average_growth": _r(snapshot.average_growth),
        "top_store": _store_summary(top),
        "bottom_store": _store_summary(bottom),
    }


def _executive(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    distribution: Dict[str, int] = {}
    for record in records:
        key = record.category if record.has_category else "Other"
        distribution[key] = distribution.get(key, 0) + 1
    return {
        "kpis": {
            "total_revenue": _r(snapshot.total_revenue),
            "active_stores": snapshot.record_count,
            "average_ticket": _r(snapshot.average_ticket),
            "top_category": snapshot.top_category,
            "growth_rate": _r(snapshot.average_growth),
            "quantum_score": _r(snapshot.average_quantum_score),
        },
        "category_distribution": distribution,
        "performance_ranking": [
            {"position": position, **_store_summary(record), "tier": performance_tier(record.quantum_score)}
            for position, record in enumerate(snapshot.ranking[:TOP_RANKING], start=1)
        ],
    }


def _financial(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    revenue = snapshot.total_revenue
    costs = {name: _r(revenue * share) for name, share in COST_SPLIT.items()}
    cost_share = sum(COST_SPLIT.values())
    total_sales = sum(record.sales for record in records)
    return {
        "financial_metrics": {
            "total_revenue": _r(revenue),
            "revenue_by_category": {k: _r(v) for k, v in snapshot.revenue_by_category.items()},
            "cost_analysis": costs,
            "profitability": {
                "margin_percent": _r((1.0 - cost_share) * 100.0),
                "efficiency_percent": _r(_mean([record.efficiency for record in records])),
                "return_on_cost_percent": _r((1.0 - cost_share) / cost_share * 100.0),
            },
            "revenue_per_sale": _r(revenue / total_sales) if total_sales else None,
        },
    }


def _predictive(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    growth = snapshot.average_growth
    revenue = snapshot.total_revenue
    predictions = [record.prediction for record in records if record.prediction is not None]
    declining = sum(1 for p in predictions if p.trend == "decline")
    decline_share = declining / len(predictions) if predictions else 0.0
    if decline_share > 0.5:
        risk = "high"
    elif decline_share > 0.25:
        risk = "medium"
    else:
        risk = "low"
    return {
        "predictions": {
            "revenue_forecast": {
                "next_quarter": _r(revenue * (1 + growth / 400.0)),
                "annual_projection": _r(revenue * (1 + growth / 100.0) * 4),
                "confidence": _r(_mean([p.confidence for p in predictions])),
            },
            "growth_scenarios": {
                "expected": _r(growth * 1.2),
                "optimistic": _r(growth * 1.5),
                "pessimistic": _r(growth * 0.8),
            },
            "risk_assessment": {
                "level": risk,
                "declining_share": _r(decline_share, 3),
                "opportunities": len(predictions) - declining,
            },
        },
        "anomalies": [anomaly.model_dump() for anomaly in detect_anomalies(records)],
        "recommendations": _by_priority(
            [
                row
                for record in records
                if record.prediction is not None
                for row in _advice_rows(record.name, record.prediction.recommendations)
            ]
        ),
    }


def _trends(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    predictions = [record.prediction for record in records if record.prediction is not None]
    outlooks: Dict[str, int] = {}
    for prediction in predictions:
        outlooks[prediction.outlook] = outlooks.get(prediction.outlook, 0) + 1
    growing = sum(1 for p in predictions if p.trend == "growth")
    return {
        "temporal_analysis": {
            "growth_count": growing,
            "decline_count": len(predictions) - growing,
            "mean_expected_change": _r(_mean([p.expected_change for p in predictions])),
            "mean_confidence": _r(_mean([p.confidence for p in predictions])),
            "outlook_distribution": outlooks,
            "dominant_outlook": first_max({k: float(v) for k, v in outlooks.items()}),
        },
    }


def segment_profile(revenue: float, growth: float, efficiency: float) -> str:
    if revenue > 200_000 and growth > 15 and efficiency > 80:
        return "high performance leaders"
    if revenue > 100_000 and efficiency > 70:
        return "solid establishments"
    if growth > 10:
        return "accelerated growth"
    return "improvement opportunities"


def _segmentation(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    result = kmeans([normalize(record).as_list() for record in records], k=SEGMENT_COUNT)
    clusters: List[Dict[str, Any]] = []
    for cluster in range(len(result.centroids)):
        members = [records[i] for i in result.members(cluster)]
        if not members:
            continue
        revenue = _mean([m.revenue for m in members])
        growth = _mean([m.growth for m in members])
        efficiency = _mean([m.efficiency for m in members])
        clusters.append(
            {
                "cluster": cluster + 1,
                "profile": segment_profile(revenue, growth, efficiency),
                "size": len(members),
                "stores": [m.name for m in members],
                "average_revenue": _r(revenue),
                "average_growth": _r(growth),
                "average_efficiency": _r(efficiency),
                "average_score": _r(_mean([m.quantum_score or 0.0 for m in members])),
            }
        )
    return {"segmentation": {"clusters": clusters}}


def _quantum(snapshot: AggregateSnapshot, records: Sequence[Record], metrics: Mapping[str, Any]) -> Dict[str, Any]:
    scores = [record.quantum_score or 0.0 for record in records]
    settings = get_settings()
    optimized = optimize(records)
    return {
        "quantum_analysis": {
            "scores": {
                "average": _r(_mean(scores), 3),
                "max": _r(max(scores), 3),
                "min": _r(min(scores), 3),
            },
            "entanglement": settings.entanglement,
            "coherence": settings.coherence,
            "engine": dict(metrics),
            "optimization": [
                {"store": item.store, "quantum_score": _r(item.quantum_score, 3), "potential": _r(item.potential)}
                for item in optimized
            ],
        },
        "quantum_recommendations": _by_priority(
            [row for item in optimized for row in _advice_rows(item.store, item.recommendations)]
        ),
    }


Builder = Callable[[AggregateSnapshot, Sequence[Record], Mapping[str, Any]], Dict[str, Any]]

_BUILDERS: Dict[str, Builder] = {
    "executive": _executive,
    "financial": _financial,
    "predictive": _predictive,
    "trends": _trends,
    "segmentation": _segmentation,
    "quantum": _quantum,
}


def available_reports() -> List[str]:
    return list(_BUILDERS)


def prepare_report(
    report_type: str,
    snapshot: AggregateSnapshot,
    records: Sequence[Record],
    quantum_metrics: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the payload for one report type.

    Raises
    ------
    ReportError
        For an unknown report type or an empty RecordSet.
    """
    if report_type not in _BUILDERS:
        raise ReportError(f"Unknown report type '{report_type}'. Available: {', '.join(_BUILDERS)}")
    if not records or snapshot.is_empty:
        raise ReportError("Load data before generating reports")
    payload = _base(report_type, snapshot, records)
    payload.update(_BUILDERS[report_type](snapshot, records, quantum_metrics or {}))
    return payload


def persist_report(payload: Dict[str, Any], results_dir: Path | str) -> Tuple[Path, Path]:
    return persist_json(payload, results_dir, f"{payload['report_type']}-report")


__all__ = [
    "REPORT_TITLES",
    "available_reports",
    "persist_report",
    "prepare_report",
    "segment_profile",
]

"""
Per-store recommendations and dataset-level anomaly detection.

Recommendations come from the forecast (a confident growth or decline call)
and from the store's normalized features (low efficiency, low revenue per
sale). Anomaly detection runs the z-score estimator over every record and
flags the ones above a fixed threshold.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from store_analytics.domain.models import Anomaly, FeatureVector, Recommendation, Record
from store_analytics.normalizer import normalize
from store_analytics.scoring.anomaly import AnomalyStrategy

CONFIDENT_FORECAST = 80.0
EFFICIENCY_FLOOR = 0.6
REVENUE_PER_SALE_FLOOR = 100.0

ANOMALY_THRESHOLD = 0.7
HIGH_SEVERITY = 0.9


def revenue_per_sale(record: Record) -> Optional[float]:
    """Revenue over (sales + 1); None when either figure is missing or zero."""
    if record.revenue and record.sales:
        return record.revenue / (record.sales + 1)
    return None


def forecast_recommendations(trend: str, confidence: float) -> List[Recommendation]:
    if confidence <= CONFIDENT_FORECAST:
        return []
    if trend == "growth":
        return [
            Recommendation(
                kind="expansion",
                message="Conditions favour expanding operations",
                priority="high",
                source="forecasting",
            )
        ]
    return [
        Recommendation(
            kind="optimization",
            message="Apply optimisation measures before the decline deepens",
            priority="high",
            source="trend_analysis",
        )
    ]


def feature_recommendation(record: Record, features: FeatureVector) -> Optional[Recommendation]:
    if features.efficiency < EFFICIENCY_FLOOR:
        return Recommendation(
            kind="efficiency_improvement",
            message="Streamline operating processes",
            source="efficiency_clustering",
        )
    per_sale = revenue_per_sale(record)
    if per_sale is not None and per_sale < REVENUE_PER_SALE_FLOOR:
        return Recommendation(
            kind="pricing_optimization",
            message=f"Revenue per sale is {per_sale:.2f}; review pricing",
            source="pricing_analysis",
        )
    return None


def recommend(record: Record, features: FeatureVector, trend: str, confidence: float) -> List[Recommendation]:
    advice = forecast_recommendations(trend, confidence)
    extra = feature_recommendation(record, features)
    if extra is not None:
        advice.append(extra)
    return advice


def anomaly_reasons(features: FeatureVector) -> List[str]:
    reasons: List[str] = []
    if features.revenue < 0.1 and features.sales > 0.5:
        reasons.append("unusual revenue to sales ratio")
    if features.growth > 0.8:
        reasons.append("extreme growth")
    if features.efficiency < 0.3:
        reasons.append("exceptionally low efficiency")
    return reasons or ["non-standard pattern"]


def detect_anomalies(
    records: Sequence[Record],
    estimator: Optional[AnomalyStrategy] = None,
    threshold: float = ANOMALY_THRESHOLD,
) -> List[Anomaly]:
    """
    Flag records whose anomaly score exceeds `threshold`, in input order.

    Severity is "high" above 0.9 and "medium" otherwise.
    """
    estimator = estimator or AnomalyStrategy()
    anomalies: List[Anomaly] = []
    for record in records:
        features = normalize(record)
        score = estimator.score(features)
        if score > threshold:
            anomalies.append(
                Anomaly(
                    store=record.name,
                    score=score,
                    severity="high" if score > HIGH_SEVERITY else "medium",
                    reasons=anomaly_reasons(features),
                )
            )
    return anomalies


__all__ = [
    "anomaly_reasons",
    "detect_anomalies",
    "feature_recommendation",
    "forecast_recommendations",
    "recommend",
    "revenue_per_sale",
]

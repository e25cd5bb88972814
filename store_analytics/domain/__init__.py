"""
Domain package for Alura Store Analytics.

Exports the data definitions shared by every pipeline stage. Keep this
package focused on data definitions and validation concerns.
"""

from store_analytics.domain.models import (
    AggregateSnapshot,
    Anomaly,
    FeatureVector,
    Insight,
    Optimization,
    Prediction,
    Recommendation,
    Record,
)

__all__ = [
    "AggregateSnapshot",
    "Anomaly",
    "FeatureVector",
    "Insight",
    "Optimization",
    "Prediction",
    "Recommendation",
    "Record",
]

"""
Scoring package for Alura Store Analytics.

Re-exports the strategy interfaces, the concrete estimators and the scorers
so downstream code can import from `store_analytics.scoring` directly.
"""

from store_analytics.scoring.abstract import AbstractScoringStrategy, ScoringStrategy
from store_analytics.scoring.advice import detect_anomalies, recommend
from store_analytics.scoring.anomaly import AnomalyStrategy
from store_analytics.scoring.clustering import CentroidStrategy, KMeansResult, kmeans
from store_analytics.scoring.ensemble import ENSEMBLE_WEIGHTS, AIScorer
from store_analytics.scoring.fallback import fallback_score
from store_analytics.scoring.forecast import Forecaster
from store_analytics.scoring.neural import NeuralNetworkStrategy
from store_analytics.scoring.quantum import QuantumScorer, optimize
from store_analytics.scoring.registry import available_strategies, build_strategies
from store_analytics.scoring.regression import LinearRegressionStrategy
from store_analytics.scoring.scorer import RecordScorer

__all__ = [
    # Abstracts
    "AbstractScoringStrategy",
    "ScoringStrategy",
    # Concrete strategies
    "AnomalyStrategy",
    "CentroidStrategy",
    "LinearRegressionStrategy",
    "NeuralNetworkStrategy",
    # Scorers
    "AIScorer",
    "ENSEMBLE_WEIGHTS",
    "Forecaster",
    "QuantumScorer",
    "RecordScorer",
    "fallback_score",
    # Advice and optimization
    "detect_anomalies",
    "optimize",
    "recommend",
    # Registry and clustering helpers
    "available_strategies",
    "build_strategies",
    "KMeansResult",
    "kmeans",
]

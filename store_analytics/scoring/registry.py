"""
Registry of the AI ensemble's scoring strategies.

The set is closed: configuration picks names from this registry, it cannot
plug in arbitrary objects. Tests that need a custom estimator pass strategy
instances straight to `AIScorer`.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from store_analytics.config import Settings, get_settings
from store_analytics.scoring.abstract import ScoringStrategy
from store_analytics.scoring.anomaly import AnomalyStrategy
from store_analytics.scoring.clustering import CentroidStrategy
from store_analytics.scoring.neural import NeuralNetworkStrategy
from store_analytics.scoring.regression import LinearRegressionStrategy


def _strategy_factories(settings: Optional[Settings] = None) -> Dict[str, Callable[[], ScoringStrategy]]:
    """Registry of available strategies."""
    settings = settings or get_settings()
    return {
        "regression": lambda: LinearRegressionStrategy(),
        "clustering": lambda: CentroidStrategy(),
        "classification": lambda: NeuralNetworkStrategy(seed=settings.network_seed),
        "anomaly": lambda: AnomalyStrategy(),
    }


def available_strategies() -> List[str]:
    """List available strategy names."""
    return sorted(_strategy_factories().keys())


def resolve_strategy(name: str, settings: Optional[Settings] = None) -> ScoringStrategy:
    factories = _strategy_factories(settings)
    if name not in factories:
        raise ValueError(f"Unknown scoring strategy '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def build_strategies(
    names: Optional[Iterable[str]] = None, settings: Optional[Settings] = None
) -> List[ScoringStrategy]:
    """Instantiate the named strategies, defaulting to AI_STRATEGIES from settings."""
    settings = settings or get_settings()
    selected = list(names) if names is not None else settings.ai_strategy_names
    if len(selected) == 1 and selected[0] == "all":
        selected = available_strategies()
    return [resolve_strategy(name, settings) for name in selected]


__all__ = ["available_strategies", "build_strategies", "resolve_strategy"]

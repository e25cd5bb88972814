"""
Scoring strategy interfaces for the AI ensemble.

Each sub-estimator (regression, clustering, classification, anomaly) maps a
FeatureVector to a value in [0, 1], or `None` when it has nothing to say for
that input. The ensemble treats `None` as "unavailable" and renormalizes the
remaining weights; an exception or a non-finite value sends the whole record
to the fallback formula instead.
"""

from __future__ import annotations

import abc
from typing import Optional, Protocol, runtime_checkable

from store_analytics.domain.models import FeatureVector


@runtime_checkable
class ScoringStrategy(Protocol):
    """
    Common interface all scoring strategies must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier, also the ensemble weight key.
    description : str
        A human-friendly summary of the estimator.
    """

    name: str
    description: str

    def score(self, features: FeatureVector) -> Optional[float]:
        """
        Score one feature vector.

        Returns
        -------
        float | None
            A value in [0, 1], or None when the estimator is unavailable.
        """
        ...


class AbstractScoringStrategy(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and `description` and implement `score`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def score(self, features: FeatureVector) -> Optional[float]:  # pragma: no cover - interface only
        """Score one feature vector."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["AbstractScoringStrategy", "ScoringStrategy"]

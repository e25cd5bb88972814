"""
Domain models for Alura Store Analytics.

A `Record` is one input row (a store) keyed by the lower-cased header names of
the source CSV. Scores and the forecast are attached by the scoring stage,
which returns a new frozen record instead of mutating the ingested one.
Snapshots and insights are frozen as well so presentation code can share them
without copying.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

FieldValue = Union[int, float, str]

FROZEN = {"frozen": True, "populate_by_name": True}


class Recommendation(BaseModel):
    """An action suggested for one store by a scoring model."""

    kind: str = Field(..., description='Machine tag such as "expansion".')
    message: str
    priority: str = Field("medium", description='"high" or "medium".')
    source: str = Field(..., description="Model or protocol that produced the advice.")

    model_config = FROZEN


class Prediction(BaseModel):
    """Short-term forecast attached to each scored record."""

    trend: str = Field(..., description='"growth" or "decline".')
    confidence: float = Field(..., ge=0.0, le=100.0)
    timeframe: str = Field("3 months")
    expected_change: float = Field(0.0, description="Signed percentage change.")
    factors: List[str] = Field(default_factory=list)
    outlook: str = Field("neutral")
    recommendations: List[Recommendation] = Field(default_factory=list)

    model_config = FROZEN


class Record(BaseModel):
    """
    One store row plus its derived scores.

    Base attributes are read from `data` on demand so that free-form CSV
    columns survive untouched next to the ones the scorers use.
    """

    data: Dict[str, FieldValue] = Field(default_factory=dict)
    ai_score: Optional[float] = Field(None, ge=0.0, le=100.0)
    quantum_score: Optional[float] = Field(None, ge=0.0, le=100.0)
    prediction: Optional[Prediction] = None

    model_config = FROZEN

    def _number(self, key: str, default: float) -> float:
        value = self.data.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        try:
            number = float(value)
        except OverflowError:
            # ints beyond float range count as non-finite
            return default
        return number if math.isfinite(number) else default

    @property
    def name(self) -> str:
        for key in ("store", "name"):
            value = self.data.get(key)
            if value not in (None, ""):
                return str(value)
        return "Unknown"

    @property
    def category(self) -> str:
        value = self.data.get("category")
        return str(value) if value not in (None, "") else "Unknown"

    @property
    def has_category(self) -> bool:
        return self.data.get("category") not in (None, "")

    @property
    def revenue(self) -> float:
        return self._number("revenue", 0.0)

    @property
    def sales(self) -> float:
        return self._number("sales", 0.0)

    @property
    def growth(self) -> float:
        return self._number("growth", 0.0)

    @property
    def efficiency(self) -> float:
        return self._number("efficiency", 50.0)

    @property
    def is_scored(self) -> bool:
        return self.ai_score is not None and self.quantum_score is not None


@dataclass(frozen=True)
class FeatureVector:
    """Normalized view of a record; every component lies in [0, 1]."""

    revenue: float
    growth: float
    efficiency: float
    sales: float
    category: float

    def as_list(self) -> List[float]:
        """The four numeric features, in scoring order."""
        return [self.revenue, self.growth, self.efficiency, self.sales]

    def with_category(self) -> List[float]:
        return [*self.as_list(), self.category]


class AggregateSnapshot(BaseModel):
    """Portfolio-level metrics computed over one RecordSet."""

    total_revenue: float = 0.0
    record_count: int = 0
    average_ticket: Optional[float] = None
    revenue_by_category: Dict[str, float] = Field(default_factory=dict)
    category_counts: Dict[str, int] = Field(default_factory=dict)
    top_category: Optional[str] = None
    average_growth: float = 0.0
    average_quantum_score: float = 0.0
    average_ai_score: float = 0.0
    ranking: Tuple[Record, ...] = ()

    model_config = FROZEN

    @property
    def is_empty(self) -> bool:
        return self.record_count == 0

    @property
    def best(self) -> Optional[Record]:
        return self.ranking[0] if self.ranking else None

    @property
    def worst(self) -> Optional[Record]:
        return self.ranking[-1] if self.ranking else None


class Anomaly(BaseModel):
    """A record whose feature profile stands out from the rest of its own features."""

    store: str
    score: float = Field(..., ge=0.0, le=1.0)
    severity: str
    reasons: List[str] = Field(default_factory=list)

    model_config = FROZEN


class Optimization(BaseModel):
    """Quantum optimization result for one store."""

    store: str
    quantum_score: float
    potential: float = Field(..., ge=0.0, le=50.0, description="Estimated improvement, percent.")
    recommendations: List[Recommendation] = Field(default_factory=list)

    model_config = FROZEN


class Insight(BaseModel):
    """A templated statement selected from threshold rules."""

    tag: str
    text: str

    model_config = FROZEN


__all__ = [
    "AggregateSnapshot",
    "Anomaly",
    "FeatureVector",
    "FieldValue",
    "Insight",
    "Optimization",
    "Prediction",
    "Recommendation",
    "Record",
]

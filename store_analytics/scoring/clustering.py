"""
Centroid-distance estimator and a small K-Means for segmentation.

Scoring compares a record with three fixed archetypes in feature space; the
closer it sits to any of them, the higher the score. `fit` runs a plain
Lloyd iteration over a RecordSet and is used by the segmentation report.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from store_analytics.domain.models import FeatureVector
from store_analytics.normalizer import clamp
from store_analytics.scoring.abstract import AbstractScoringStrategy

Point = Sequence[float]

# revenue, growth, efficiency, sales
DEFAULT_CENTROIDS = (
    (0.80, 0.85, 0.90, 0.80),  # high performance leaders
    (0.50, 0.60, 0.75, 0.50),  # solid establishments
    (0.20, 0.40, 0.60, 0.20),  # improvement opportunities
)
# Diagonal of the unit 4-cube, the largest possible distance between features.
MAX_DISTANCE = 2.0


def euclidean_distance(a: Point, b: Point) -> float:
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


@dataclass
class KMeansResult:
    labels: List[int] = field(default_factory=list)
    centroids: List[List[float]] = field(default_factory=list)

    def members(self, cluster: int) -> List[int]:
        return [index for index, label in enumerate(self.labels) if label == cluster]


def _nearest(point: Point, centroids: Sequence[Point]) -> int:
    best, best_distance = 0, math.inf
    for index, centroid in enumerate(centroids):
        distance = euclidean_distance(point, centroid)
        if distance < best_distance:
            best, best_distance = index, distance
    return best


def kmeans(points: Sequence[Point], k: int = 3, iterations: int = 10) -> KMeansResult:
    """
    Lloyd's algorithm with a fixed iteration count.

    Initial centroids are points spread evenly through the input order, so
    the result depends only on the data. A cluster that loses all members
    keeps its previous centroid.
    """
    if not points or k <= 0:
        return KMeansResult()
    k = min(k, len(points))
    n = len(points)
    if k == 1:
        seeds = [0]
    else:
        seeds = [round(i * (n - 1) / (k - 1)) for i in range(k)]
    centroids = [list(points[i]) for i in seeds]

    labels: List[int] = []
    for _ in range(iterations):
        labels = [_nearest(point, centroids) for point in points]
        for cluster in range(k):
            members = [points[i] for i, label in enumerate(labels) if label == cluster]
            if members:
                centroids[cluster] = [sum(dim) / len(members) for dim in zip(*members)]
    labels = [_nearest(point, centroids) for point in points]
    return KMeansResult(labels=labels, centroids=centroids)


class CentroidStrategy(AbstractScoringStrategy):
    """1 - (distance to the nearest centroid / MAX_DISTANCE)."""

    name: str = "clustering"
    description: str = "Distance to the nearest of three fixed performance archetypes."

    def __init__(self, centroids: Optional[Sequence[Point]] = None) -> None:
        self.centroids = [list(c) for c in (centroids if centroids is not None else DEFAULT_CENTROIDS)]

    def score(self, features: FeatureVector) -> Optional[float]:
        if not self.centroids:
            return None
        point = features.as_list()
        nearest = min(euclidean_distance(point, centroid) for centroid in self.centroids)
        return clamp(1.0 - nearest / MAX_DISTANCE)

    def fit(self, points: Sequence[Point], k: int = 3, iterations: int = 10) -> KMeansResult:
        return kmeans(points, k=k, iterations=iterations)


__all__ = ["CentroidStrategy", "KMeansResult", "euclidean_distance", "kmeans"]

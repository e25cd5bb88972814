"""
Feed-forward classifier: 4 inputs, 6 sigmoid hidden units, 1 sigmoid output.

Weights are drawn once from a seeded generator so every process scores the
same record identically.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence

from store_analytics.domain.models import FeatureVector
from store_analytics.scoring.abstract import AbstractScoringStrategy

Matrix = List[List[float]]

INPUTS = 4
HIDDEN = 6


def sigmoid(x: float) -> float:
    # math.exp overflows for large negative inputs
    if x < -60.0:
        return 0.0
    return 1.0 / (1.0 + math.exp(-x))


def random_matrix(rows: int, cols: int, rng: random.Random) -> Matrix:
    return [[rng.uniform(-1.0, 1.0) for _ in range(cols)] for _ in range(rows)]


def _layer(inputs: Sequence[float], weights: Matrix) -> List[float]:
    cols = len(weights[0])
    return [sigmoid(sum(x * weights[row][col] for row, x in enumerate(inputs))) for col in range(cols)]


class NeuralNetworkStrategy(AbstractScoringStrategy):
    name: str = "classification"
    description: str = "Two-layer sigmoid network over revenue, growth, efficiency and sales."

    def __init__(
        self,
        seed: int = 973,
        hidden: Optional[Matrix] = None,
        output: Optional[Matrix] = None,
    ) -> None:
        rng = random.Random(seed)
        self.hidden = hidden if hidden is not None else random_matrix(INPUTS, HIDDEN, rng)
        self.output = output if output is not None else random_matrix(len(self.hidden[0]), 1, rng)
        if len(self.hidden) != INPUTS or len(self.output) != len(self.hidden[0]):
            raise ValueError("weight matrices do not chain: expected 4xH and Hx1")

    def score(self, features: FeatureVector) -> float:
        hidden = _layer(features.as_list(), self.hidden)
        return _layer(hidden, self.output)[0]


__all__ = ["NeuralNetworkStrategy", "sigmoid"]

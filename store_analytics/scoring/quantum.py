"""
Quantum score: a feature blend with "entanglement", "coherence" and
"measurement" adjustments.

    base      = mean(revenue, growth, efficiency, sales)
    entangled = base * (1 + 0.3 * E * sum_{i<j} cos(pi*f_i) * cos(pi*f_j))
    coherent  = C * entangled + (1 - C) * 0.1 * r1
    measured  = 100 * coherent + (r2 - 0.5) * 0.5 * sqrt(n)

with E the entanglement constant, C the coherence fraction, r1/r2 draws from
the injected random source and n the scorer's measurement counter (incremented
before each measurement). The counter is instance state: `reset()` restarts
it, which together with a fixed random source makes scores reproducible.

`optimize` ranks scored records and estimates how much each one could improve
with a simulated amplitude-amplification search over its feature headroom.
"""

from __future__ import annotations

import itertools
import math
from typing import Any, Dict, List, Optional, Sequence

from store_analytics.config import get_settings
from store_analytics.domain.models import FeatureVector, Optimization, Recommendation, Record
from store_analytics.normalizer import normalize
from store_analytics.scoring.fallback import fallback_score
from store_analytics.utils.logging import get_logger
from store_analytics.utils.randomness import RandomSource, SystemRandomSource

log = get_logger(__name__)

QUBITS = 256
ENTANGLEMENT_WEIGHT = 0.3
COHERENCE_NOISE = 0.1
UNCERTAINTY_SCALE = 0.5
FIDELITY_DECAY = 0.999

SEARCH_SPACE = 100
AMPLIFICATION = 1.1
MAX_POTENTIAL = 50.0
OPTIMIZATION_THRESHOLD = 10.0
STABLE_SCORE = 70.0
EFFICIENT_STORE = 80.0


class QuantumScorer:
    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        entanglement: Optional[float] = None,
        coherence: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.rng = rng or SystemRandomSource(settings.random_seed)
        self.entanglement = settings.entanglement if entanglement is None else entanglement
        self.coherence = settings.coherence if coherence is None else coherence
        self.measurements = 0
        self.fidelity = 1.0

    def reset(self) -> None:
        self.measurements = 0
        self.fidelity = 1.0

    def entangle(self, features: FeatureVector) -> float:
        values = features.as_list()
        correlation = sum(
            math.cos(a * math.pi) * math.cos(b * math.pi)
            for a, b in itertools.combinations(values, 2)
        )
        base = sum(values) / len(values)
        return base * (1.0 + correlation * self.entanglement * ENTANGLEMENT_WEIGHT)

    def cohere(self, score: float) -> float:
        noise = (1.0 - self.coherence) * self.rng.next() * COHERENCE_NOISE
        return score * self.coherence + noise

    def measure(self, coherent: float) -> float:
        self.measurements += 1
        self.fidelity *= FIDELITY_DECAY
        uncertainty = math.sqrt(self.measurements) * UNCERTAINTY_SCALE
        return coherent * 100.0 + (self.rng.next() - 0.5) * uncertainty

    def score(self, record: Record, features: Optional[FeatureVector] = None) -> float:
        try:
            vector = features if features is not None else normalize(record)
            measured = self.measure(self.cohere(self.entangle(vector)))
            if not math.isfinite(measured):
                raise ArithmeticError(f"quantum score is {measured!r}")
            return max(0.0, min(100.0, measured))
        except Exception as exc:  # noqa: BLE001 - any failure falls back
            log.warning(
                f"[SCORING FALLBACK] quantum score for {record.name}",
                extra={"record": record.name, "scorer": "quantum", "error": str(exc)},
            )
            return fallback_score(record)

    def metrics(self) -> Dict[str, Any]:
        return {
            "qubits": QUBITS,
            "coherence": self.coherence,
            "entanglement": self.entanglement,
            "fidelity": self.fidelity,
            "measurements": self.measurements,
        }


def optimization_potential(features: FeatureVector) -> float:
    """
    Estimated improvement in percent, in [0, 50].

    The amplitude of one marked item in a search space of 100 grows by 10%
    per iteration over floor(pi/4 * sqrt(100)) = 7 iterations; the result
    scales the mean headroom (100 - feature%) of the four numeric features.
    """
    iterations = math.floor(math.pi / 4.0 * math.sqrt(SEARCH_SPACE))
    amplitude = AMPLIFICATION**iterations / math.sqrt(SEARCH_SPACE)
    values = features.as_list()
    headroom = sum(100.0 * (1.0 - value) for value in values) / len(values)
    return max(0.0, min(MAX_POTENTIAL, amplitude * headroom))


def quantum_recommendations(record: Record, quantum_score: float, potential: float) -> List[Recommendation]:
    advice: List[Recommendation] = []
    if potential > OPTIMIZATION_THRESHOLD:
        advice.append(
            Recommendation(
                kind="quantum_optimization",
                message=f"Entangled scheduling could lift efficiency by {potential:.1f}%",
                priority="high",
                source="quantum_protocol",
            )
        )
    if quantum_score < STABLE_SCORE:
        advice.append(
            Recommendation(
                kind="coherence_improvement",
                message="Apply coherence routines to stabilise performance",
                source="coherence_protocol",
            )
        )
    if record.efficiency < EFFICIENT_STORE:
        advice.append(
            Recommendation(
                kind="superposition_analysis",
                message="Evaluate several operating scenarios side by side",
                source="superposition_protocol",
            )
        )
    return advice


def optimize(records: Sequence[Record]) -> List[Optimization]:
    """Optimization results for scored records, highest quantum score first."""
    results: List[Optimization] = []
    for record in records:
        score = record.quantum_score if record.quantum_score is not None else fallback_score(record)
        potential = optimization_potential(normalize(record))
        results.append(
            Optimization(
                store=record.name,
                quantum_score=score,
                potential=potential,
                recommendations=quantum_recommendations(record, score, potential),
            )
        )
    results.sort(key=lambda result: result.quantum_score, reverse=True)
    return results


__all__ = ["QuantumScorer", "optimization_potential", "optimize", "quantum_recommendations"]

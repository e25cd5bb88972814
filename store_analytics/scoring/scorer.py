"""
Record scorer: attaches ai_score, quantum_score and prediction to a record.

Each record is normalized once and the same FeatureVector feeds the AI
ensemble, the quantum scorer and the forecaster. The input record is left
untouched; a scored copy with its own `data` mapping is returned.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from store_analytics.config import get_settings
from store_analytics.domain.models import Record
from store_analytics.normalizer import normalize
from store_analytics.scoring.ensemble import AIScorer
from store_analytics.scoring.forecast import Forecaster
from store_analytics.scoring.quantum import QuantumScorer
from store_analytics.utils.randomness import RandomSource, SystemRandomSource


class RecordScorer:
    def __init__(
        self,
        ai: Optional[AIScorer] = None,
        quantum: Optional[QuantumScorer] = None,
        forecaster: Optional[Forecaster] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        source = rng or SystemRandomSource(get_settings().random_seed)
        self.ai = ai or AIScorer()
        self.quantum = quantum or QuantumScorer(rng=source)
        self.forecaster = forecaster or Forecaster(rng=source)

    def reset(self) -> None:
        """Restart the quantum measurement counter."""
        self.quantum.reset()

    def score(self, record: Record) -> Record:
        features = normalize(record)
        return record.model_copy(
            update={
                "ai_score": self.ai.score(record, features),
                "quantum_score": self.quantum.score(record, features),
                "prediction": self.forecaster.predict(record, features),
            },
            deep=True,
        )

    def score_all(self, records: Iterable[Record]) -> List[Record]:
        return [self.score(record) for record in records]


__all__ = ["RecordScorer"]

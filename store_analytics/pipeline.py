"""
Pipeline driver: ingestion -> scoring -> aggregation -> insights.

Usage (example from CLI):
    from store_analytics.pipeline import AnalyticsPipeline

    pipeline = AnalyticsPipeline()
    outcome = pipeline.ingest_file("stores.csv")
    if outcome.ok:
        print(outcome.state.snapshot.total_revenue)

The driver owns the current RecordSet, its AggregateSnapshot and the insight
list. Every ingestion event runs the whole pipeline synchronously and swaps
in a new `PipelineState` only when the run succeeds; a failed ingestion keeps
the previous state. A non-blocking lock rejects a run that starts while
another one is still in flight.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from store_analytics import ingestion
from store_analytics.aggregator import aggregate, performance_tier
from store_analytics.config import get_settings
from store_analytics.domain.models import AggregateSnapshot, Insight, Record
from store_analytics.errors import IngestionError
from store_analytics.insights import select_insights
from store_analytics.scoring.scorer import RecordScorer
from store_analytics.utils.logging import get_logger
from store_analytics.utils.profiler import profile_block
from store_analytics.utils.randomness import RandomSource

log = get_logger(__name__)

Loader = Callable[[], List[Record]]


def _round_float(value: Optional[float], decimals: int = 2) -> Optional[float]:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals) if value is not None else None


class PipelineState(BaseModel):
    """Everything one successful run produced."""

    run_id: int = 0
    source: str = "empty"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    records: Tuple[Record, ...] = ()
    snapshot: AggregateSnapshot = Field(default_factory=AggregateSnapshot)
    insights: Tuple[Insight, ...] = ()
    profile: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_payload(self) -> Dict[str, Any]:
        """JSON-friendly summary: KPIs, ranking and insights."""
        snapshot = self.snapshot
        return {
            "run_id": self.run_id,
            "source": self.source,
            "created_at": self.created_at.isoformat(),
            "kpis": {
                "total_revenue": _round_float(snapshot.total_revenue),
                "record_count": snapshot.record_count,
                "average_ticket": _round_float(snapshot.average_ticket),
                "top_category": snapshot.top_category,
                "average_growth": _round_float(snapshot.average_growth),
                "average_quantum_score": _round_float(snapshot.average_quantum_score),
                "average_ai_score": _round_float(snapshot.average_ai_score),
            },
            "revenue_by_category": {
                category: _round_float(value) for category, value in snapshot.revenue_by_category.items()
            },
            "ranking": [
                {
                    "position": position,
                    "store": record.name,
                    "category": record.category,
                    "revenue": _round_float(record.revenue),
                    "ai_score": _round_float(record.ai_score),
                    "quantum_score": _round_float(record.quantum_score),
                    "tier": performance_tier(record.quantum_score),
                    "trend": record.prediction.trend if record.prediction else None,
                    "recommendations": (
                        [advice.kind for advice in record.prediction.recommendations] if record.prediction else []
                    ),
                }
                for position, record in enumerate(snapshot.ranking, start=1)
            ],
            "insights": [insight.model_dump() for insight in self.insights],
            "profile": self.profile,
        }


class PipelineOutcome(BaseModel):
    """Result of one ingestion event, successful or not."""

    accepted: bool = True
    ok: bool = True
    error: Optional[str] = None
    source: str
    state: PipelineState

    model_config = {"frozen": True}


class AnalyticsPipeline:
    def __init__(self, scorer: Optional[RecordScorer] = None) -> None:
        self.scorer = scorer or RecordScorer()
        self._lock = threading.Lock()
        self._state = PipelineState()
        self._runs = 0

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def ingest_text(self, text: str, delimiter: Optional[str] = None, source: str = "text") -> PipelineOutcome:
        separator = delimiter or get_settings().csv_delimiter
        return self._run(source, lambda: ingestion.parse_csv(text, separator))

    def ingest_file(self, path: Path | str, delimiter: Optional[str] = None) -> PipelineOutcome:
        return self._run(f"file:{Path(path).name}", lambda: ingestion.load_csv(path, delimiter))

    def generate_sample(self, size: Optional[int] = None, rng: Optional[RandomSource] = None) -> PipelineOutcome:
        return self._run("sample", lambda: ingestion.generate_sample(size, rng))

    def _build_state(self, records: List[Record], source: str) -> PipelineState:
        self.scorer.reset()
        scored = self.scorer.score_all(records)
        snapshot = aggregate(scored)
        insights = select_insights(snapshot, scored)
        return PipelineState(
            run_id=self._runs + 1,
            source=source,
            records=tuple(scored),
            snapshot=snapshot,
            insights=tuple(insights),
        )

    def _run(self, source: str, loader: Loader) -> PipelineOutcome:
        if not self._lock.acquire(blocking=False):
            log.warning(f"[PIPELINE BUSY] rejected {source}", extra={"source": source})
            return PipelineOutcome(
                accepted=False, ok=False, error="pipeline is busy", source=source, state=self._state
            )
        try:
            log.info(f"[PIPELINE START] {source}", extra={"source": source})
            error: Optional[str] = None
            built: Optional[PipelineState] = None
            with profile_block(source) as stats:
                try:
                    records = loader()
                    stats.extra["records"] = len(records)
                    built = self._build_state(records, source)
                except IngestionError as exc:
                    error = str(exc)
                    log.warning(f"[INGESTION FAILED] {source}: {error}", extra={"source": source})
                except Exception as exc:  # noqa: BLE001 - keep the previous state on any failure
                    error = f"{type(exc).__name__}: {exc}"
                    log.exception(f"[PIPELINE FAILED] {source}", extra={"source": source})

            if built is None:
                return PipelineOutcome(ok=False, error=error, source=source, state=self._state)

            self._runs += 1
            self._state = built.model_copy(update={"profile": stats.as_dict()})
            log.info(
                f"[PIPELINE SUCCESS] {source}",
                extra={
                    "source": source,
                    "records": self._state.snapshot.record_count,
                    "duration": round(stats.duration_seconds, 4),
                },
            )
            return PipelineOutcome(source=source, state=self._state)
        finally:
            self._lock.release()


__all__ = ["AnalyticsPipeline", "PipelineOutcome", "PipelineState"]

"""
Pytest configuration for Alura Store Analytics.

Provides fixtures for:
- Settings cache isolation between tests
- Deterministic randomness sources
- Small hand-written RecordSets and CSV files
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

import pytest

from store_analytics.config import get_settings
from store_analytics.domain.models import Record
from store_analytics.scoring.scorer import RecordScorer
from store_analytics.utils.randomness import FixedSequenceSource

STORES_CSV = """store,category,revenue,sales,growth,efficiency
TechNova,AI Systems,240000,1200,18,92
QuantumX,Quantum Computing,180000,900,12,85
BioLab,Biotech,90000,450,-6,58
RoboTech,Robotics,130000,700,4,72
"""


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """
    Clear the cached Settings around every test and point RESULTS_DIR at a
    temporary directory so nothing is written into the working tree.
    """
    monkeypatch.setenv("RESULTS_DIR", str(tmp_path / "results"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def half_source() -> FixedSequenceSource:
    """Every draw returns 0.5, which zeroes all centred noise terms."""
    return FixedSequenceSource([0.5])


@pytest.fixture
def fixed_scorer(half_source: FixedSequenceSource) -> RecordScorer:
    return RecordScorer(rng=half_source)


@pytest.fixture
def midpoint_record() -> Record:
    """A record whose four numeric features all normalize to 0.5."""
    return Record(
        data={
            "store": "Midpoint",
            "category": "Biotech",
            "revenue": 150_000,
            "sales": 500,
            "growth": 0,
            "efficiency": 50,
        }
    )


@pytest.fixture
def stores_csv_text() -> str:
    return STORES_CSV


@pytest.fixture
def stores_csv(tmp_path: Path) -> Path:
    path = tmp_path / "stores.csv"
    path.write_text(STORES_CSV, encoding="utf-8")
    return path


@pytest.fixture
def scored_records(fixed_scorer: RecordScorer, stores_csv_text: str) -> List[Record]:
    from store_analytics.ingestion import parse_csv

    return fixed_scorer.score_all(parse_csv(stores_csv_text))

import csv
from pathlib import Path
from time import sleep

import pytest

from scripts import generate_data
from store_analytics import config
from store_analytics.scoring.registry import available_strategies, build_strategies, resolve_strategy
from store_analytics.utils import profiler

EXPECTED_SAMPLE_SIZE = 8
EXPECTED_NETWORK_SEED = 973


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.app_env == "development"
    assert settings.csv_delimiter == ","
    assert settings.sample_size == EXPECTED_SAMPLE_SIZE
    assert settings.network_seed == EXPECTED_NETWORK_SEED
    assert settings.random_seed is None
    assert settings.entanglement == pytest.approx(0.973)
    assert settings.coherence == pytest.approx(0.997)
    assert settings.ai_strategy_names == ["regression", "clustering", "classification", "anomaly"]


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SAMPLE_SIZE", "3")
    monkeypatch.setenv("AI_STRATEGIES", " regression , anomaly ,")
    config.get_settings.cache_clear()

    settings = config.get_settings()

    assert settings.sample_size == 3
    assert settings.ai_strategy_names == ["regression", "anomaly"]


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    if stats.cpu_percent is not None:
        assert isinstance(stats.cpu_percent, float)
    assert stats.as_dict()["label"] == "sleep"


def test_profile_block_fills_stats_when_block_raises():
    with pytest.raises(RuntimeError):
        with profiler.profile_block("boom") as stats:
            raise RuntimeError("boom")
    assert stats.end_ts >= stats.start_ts


def test_available_strategies_contains_known_entries():
    names = available_strategies()
    assert names == sorted(names)
    assert set(names) == {"regression", "clustering", "classification", "anomaly"}


def test_build_strategies_supports_all_and_rejects_unknown():
    assert [s.name for s in build_strategies(["all"])] == available_strategies()
    with pytest.raises(ValueError, match="Unknown scoring strategy"):
        resolve_strategy("telepathy")


def test_generate_data_writes_csv(tmp_path: Path):
    csv_path = tmp_path / "stores.csv"
    generate_data._generate_rows_csv(csv_path, rows=10, seed=123)
    assert csv_path.exists()
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    # header + 10 rows
    assert len(rows) == 11
    assert rows[0] == ["store", "category", "revenue", "sales", "growth", "efficiency"]
    assert rows[1][0] == "TechNova"
    assert rows[9][0] == "TechNova-2"
    assert float(rows[1][2]) >= 50_000


def test_generate_data_is_deterministic(tmp_path: Path):
    first, second = tmp_path / "a.csv", tmp_path / "b.csv"
    generate_data._generate_rows_csv(first, rows=5, seed=7)
    generate_data._generate_rows_csv(second, rows=5, seed=7)
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")

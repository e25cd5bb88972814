from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from store_analytics.aggregator import aggregate
from store_analytics.domain.models import AggregateSnapshot, Record
from store_analytics.errors import ReportError
from store_analytics.reports import available_reports, persist_report, prepare_report, segment_profile

EXPECTED_TOTAL_REVENUE = 640_000.0
EXPECTED_STORES = 4


@pytest.fixture
def snapshot(scored_records: List[Record]) -> AggregateSnapshot:
    return aggregate(scored_records)


class TestPrepareReport:
    @pytest.mark.parametrize("report_type", available_reports())
    def test_every_report_has_common_header(
        self, report_type: str, snapshot: AggregateSnapshot, scored_records: List[Record]
    ):
        payload = prepare_report(report_type, snapshot, scored_records)

        assert payload["report_type"] == report_type
        assert payload["total_stores"] == EXPECTED_STORES
        assert payload["total_revenue"] == pytest.approx(EXPECTED_TOTAL_REVENUE)
        assert payload["top_store"]["store"] == "TechNova"
        assert payload["bottom_store"]["store"] == "BioLab"
        json.dumps(payload)

    def test_unknown_type_is_rejected(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        with pytest.raises(ReportError, match="Unknown report type"):
            prepare_report("horoscope", snapshot, scored_records)

    def test_empty_recordset_is_rejected(self):
        with pytest.raises(ReportError, match="Load data"):
            prepare_report("executive", AggregateSnapshot(), [])

    def test_executive_ranking_is_top_five(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        payload = prepare_report("executive", snapshot, scored_records)
        ranking = payload["performance_ranking"]
        assert [entry["position"] for entry in ranking] == [1, 2, 3, 4]
        assert payload["category_distribution"]["Biotech"] == 1
        assert payload["kpis"]["active_stores"] == EXPECTED_STORES

    def test_financial_cost_split(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        metrics = prepare_report("financial", snapshot, scored_records)["financial_metrics"]
        assert metrics["cost_analysis"]["operational"] == pytest.approx(EXPECTED_TOTAL_REVENUE * 0.40)
        assert metrics["profitability"]["margin_percent"] == pytest.approx(20.0)
        # 640000 / (1200 + 900 + 450 + 700)
        assert metrics["revenue_per_sale"] == pytest.approx(196.92, abs=0.01)

    def test_predictive_projections(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        predictions = prepare_report("predictive", snapshot, scored_records)["predictions"]
        growth = snapshot.average_growth
        assert predictions["revenue_forecast"]["next_quarter"] == pytest.approx(
            EXPECTED_TOTAL_REVENUE * (1 + growth / 400), abs=0.01
        )
        assert predictions["growth_scenarios"]["optimistic"] == pytest.approx(growth * 1.5, abs=0.01)
        assert predictions["risk_assessment"]["level"] in {"low", "medium", "high"}

    def test_predictive_recommendations_and_anomalies(
        self, snapshot: AggregateSnapshot, scored_records: List[Record]
    ):
        payload = prepare_report("predictive", snapshot, scored_records)

        rows = payload["recommendations"]
        pairs = {(row["store"], row["kind"]) for row in rows}
        assert ("BioLab", "efficiency_improvement") in pairs
        assert ("TechNova", "expansion") in pairs
        priorities = [row["priority"] for row in rows]
        assert priorities == sorted(priorities, key=lambda priority: priority != "high")
        assert all(set(anomaly) == {"store", "score", "severity", "reasons"} for anomaly in payload["anomalies"])

    def test_trends_counts_add_up(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        analysis = prepare_report("trends", snapshot, scored_records)["temporal_analysis"]
        assert analysis["growth_count"] + analysis["decline_count"] == EXPECTED_STORES
        assert sum(analysis["outlook_distribution"].values()) == EXPECTED_STORES

    def test_segmentation_covers_every_store(self, snapshot: AggregateSnapshot, scored_records: List[Record]):
        clusters = prepare_report("segmentation", snapshot, scored_records)["segmentation"]["clusters"]
        assert sum(cluster["size"] for cluster in clusters) == EXPECTED_STORES
        stores = sorted(store for cluster in clusters for store in cluster["stores"])
        assert stores == ["BioLab", "QuantumX", "RoboTech", "TechNova"]

    def test_quantum_report_includes_engine_metrics(
        self, snapshot: AggregateSnapshot, scored_records: List[Record]
    ):
        payload = prepare_report("quantum", snapshot, scored_records, {"qubits": 256})
        analysis = payload["quantum_analysis"]
        assert analysis["engine"] == {"qubits": 256}
        assert analysis["scores"]["min"] <= analysis["scores"]["average"] <= analysis["scores"]["max"]

    def test_quantum_report_ranks_optimization_potential(
        self, snapshot: AggregateSnapshot, scored_records: List[Record]
    ):
        payload = prepare_report("quantum", snapshot, scored_records)

        optimization = payload["quantum_analysis"]["optimization"]
        assert len(optimization) == EXPECTED_STORES
        scores = [entry["quantum_score"] for entry in optimization]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= entry["potential"] <= 50.0 for entry in optimization)
        pairs = {(row["store"], row["kind"]) for row in payload["quantum_recommendations"]}
        assert ("BioLab", "superposition_analysis") in pairs


@pytest.mark.parametrize(
    "revenue, growth, efficiency, profile",
    [
        (250_000, 18, 85, "high performance leaders"),
        (150_000, 5, 75, "solid establishments"),
        (80_000, 12, 60, "accelerated growth"),
        (80_000, 2, 60, "improvement opportunities"),
    ],
)
def test_segment_profile(revenue, growth, efficiency, profile):
    assert segment_profile(revenue, growth, efficiency) == profile


def test_persist_report_writes_latest_and_archive(
    tmp_path: Path, snapshot: AggregateSnapshot, scored_records: List[Record]
):
    payload = prepare_report("executive", snapshot, scored_records)

    latest, archive = persist_report(payload, tmp_path)

    assert latest.name == "executive-report-latest.json"
    assert archive.exists()
    assert json.loads(latest.read_text(encoding="utf-8"))["report_type"] == "executive"

from __future__ import annotations

from pathlib import Path

import pytest

from store_analytics.config import get_settings
from store_analytics.errors import IngestionError
from store_analytics.ingestion import coerce_value, generate_sample, load_csv, parse_csv
from store_analytics.utils.randomness import FixedSequenceSource

EXPECTED_STORES = 4


class TestCoerceValue:
    def test_integers_and_floats(self):
        assert coerce_value("12") == 12
        assert isinstance(coerce_value("12"), int)
        assert coerce_value("-3.5") == pytest.approx(-3.5)
        assert coerce_value("1e3") == pytest.approx(1000.0)
        assert coerce_value(".5") == pytest.approx(0.5)

    def test_text_stays_text(self):
        assert coerce_value("TechNova") == "TechNova"
        assert coerce_value("12abc") == "12abc"
        assert coerce_value("nan") == "nan"
        assert coerce_value("inf") == "inf"

    def test_overflowing_number_stays_text(self):
        assert coerce_value("1e999") == "1e999"

    def test_integer_beyond_float_range_stays_text(self):
        huge = "1" + "0" * 400
        assert coerce_value(huge) == huge
        assert coerce_value("-" + huge) == "-" + huge

    def test_integer_past_the_digit_limit_stays_text(self):
        digits = "9" * 5000
        assert coerce_value(digits) == digits


class TestParseCsv:
    def test_parses_header_and_rows(self, stores_csv_text: str):
        records = parse_csv(stores_csv_text)

        assert len(records) == EXPECTED_STORES
        first = records[0]
        assert first.name == "TechNova"
        assert first.category == "AI Systems"
        assert first.revenue == 240_000
        assert first.growth == 18
        assert first.efficiency == 92
        assert not first.is_scored

    def test_header_is_lowercased_and_trimmed(self):
        records = parse_csv(" Store , REVENUE \nA, 100 \n")
        assert records[0].data == {"store": "A", "revenue": 100}

    def test_empty_and_missing_cells_leave_keys_out(self):
        records = parse_csv("store,revenue,growth\nA,,5\nB,200\n")

        assert "revenue" not in records[0].data
        assert records[0].revenue == 0.0
        assert "growth" not in records[1].data
        assert records[1].growth == 0.0

    def test_oversized_number_counts_as_missing(self):
        record = parse_csv("store,revenue\nBig,1" + "0" * 400 + "\n")[0]
        assert isinstance(record.data["revenue"], str)
        assert record.revenue == 0.0

    def test_missing_efficiency_defaults_to_fifty(self):
        record = parse_csv("store,efficiency\nA,\n")[0]
        assert record.efficiency == 50.0

    def test_zero_efficiency_is_kept(self):
        record = parse_csv("store,efficiency\nA,0\n")[0]
        assert record.efficiency == 0.0

    def test_non_numeric_attribute_falls_back_to_default(self):
        record = parse_csv("store,revenue,efficiency\nA,lots,high\n")[0]
        assert record.data["revenue"] == "lots"
        assert record.revenue == 0.0
        assert record.efficiency == 50.0

    def test_name_falls_back_to_name_column_then_unknown(self):
        records = parse_csv("name,category\nShop,\n,Robotics\n")
        assert records[0].name == "Shop"
        assert records[0].category == "Unknown"
        assert not records[0].has_category
        assert records[1].name == "Unknown"

    def test_blank_lines_and_bom_are_ignored(self):
        records = parse_csv("\ufeffstore,revenue\n\nA,1\n\n")
        assert len(records) == 1
        assert records[0].name == "A"

    def test_quoted_fields_with_delimiters(self):
        records = parse_csv('store,category\n"Nova, Inc",Robotics\n')
        assert records[0].name == "Nova, Inc"

    def test_custom_delimiter(self):
        records = parse_csv("store;revenue\nA;10\n", delimiter=";")
        assert records[0].revenue == 10

    def test_header_only_gives_empty_list(self):
        assert parse_csv("store,revenue\n") == []

    @pytest.mark.parametrize("text", ["", "   \n\n"])
    def test_empty_input_is_rejected(self, text: str):
        with pytest.raises(IngestionError, match="empty"):
            parse_csv(text)

    def test_row_wider_than_header_is_rejected_with_line(self):
        with pytest.raises(IngestionError) as excinfo:
            parse_csv("store,revenue\nA,1\nB,2,3\n")
        assert excinfo.value.line == 3
        assert "line 3" in str(excinfo.value)

    def test_duplicate_header_is_rejected(self):
        with pytest.raises(IngestionError, match="duplicate"):
            parse_csv("store,store\nA,B\n")

    def test_bad_delimiter_is_rejected(self):
        with pytest.raises(IngestionError, match="single character"):
            parse_csv("a,b\n1,2\n", delimiter=";;")


class TestLoadCsv:
    def test_loads_file(self, stores_csv: Path):
        assert len(load_csv(stores_csv)) == EXPECTED_STORES

    def test_rejects_non_csv_suffix(self, tmp_path: Path):
        path = tmp_path / "stores.txt"
        path.write_text("store\nA\n", encoding="utf-8")
        with pytest.raises(IngestionError, match="not a CSV"):
            load_csv(path)

    def test_rejects_missing_file(self, tmp_path: Path):
        with pytest.raises(IngestionError, match="cannot read"):
            load_csv(tmp_path / "missing.csv")

    def test_rejects_oversized_file(self, stores_csv: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "10")
        get_settings.cache_clear()
        with pytest.raises(IngestionError, match="byte limit"):
            load_csv(stores_csv)

    def test_strips_utf8_bom(self, tmp_path: Path):
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffstore,revenue\nA,5\n".encode("utf-8"))
        assert load_csv(path)[0].data == {"store": "A", "revenue": 5}


class TestGenerateSample:
    def test_fixed_source_gives_midpoint_values(self):
        records = generate_sample(10, FixedSequenceSource([0.5]))

        assert len(records) == 10
        first = records[0]
        assert first.name == "TechNova"
        assert first.category == "Biotech"
        assert first.revenue == pytest.approx(150_000)
        assert first.sales == 750
        assert first.growth == pytest.approx(5.0)
        assert first.efficiency == pytest.approx(80.0)
        assert records[8].name == "TechNova-2"

    def test_default_size_comes_from_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SAMPLE_SIZE", "3")
        get_settings.cache_clear()
        assert len(generate_sample()) == 3

    def test_values_stay_in_range(self):
        for record in generate_sample(40):
            assert 50_000 <= record.revenue < 250_000
            assert -10 <= record.growth < 20
            assert 60 <= record.efficiency < 100

    def test_negative_size_is_rejected(self):
        with pytest.raises(ValueError):
            generate_sample(-1)

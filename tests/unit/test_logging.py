from __future__ import annotations

import json
import logging

import pytest

from store_analytics.utils.logging import _json_formatter, configure_logging, get_logger

EXPECTED_RECORDS = 10


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.records = EXPECTED_RECORDS
    record.source = "sample"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["records"] == EXPECTED_RECORDS
    assert payload["source"] == "sample"


def test_configure_logging_emits_json_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="INFO", json_logs=True)

    get_logger("store_analytics.test").info("[PIPELINE START] sample", extra={"source": "sample"})

    lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
    payload = json.loads(lines[-1])
    assert payload["message"] == "[PIPELINE START] sample"
    assert payload["source"] == "sample"

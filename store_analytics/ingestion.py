"""
Record ingestion: delimited text, CSV files and synthetic samples.

All three entry points return plain lists of unscored `Record` objects. Bad
input raises `IngestionError`; the pipeline driver turns that into a failed
outcome and keeps its previous RecordSet.
"""

from __future__ import annotations

import csv
import io
import math
import re
from pathlib import Path
from typing import Dict, List, Optional

from store_analytics.config import get_settings
from store_analytics.domain.models import FieldValue, Record
from store_analytics.errors import IngestionError
from store_analytics.utils.logging import get_logger
from store_analytics.utils.randomness import RandomSource, SystemRandomSource, choice, uniform

log = get_logger(__name__)

_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER = re.compile(r"^[+-]?\d+$")

SAMPLE_STORE_NAMES = (
    "TechNova",
    "QuantumX",
    "NeuralSync",
    "SpaceCore",
    "BioLab",
    "RoboTech",
    "AIGen",
    "FutureStore",
)
SAMPLE_CATEGORIES = (
    "Quantum Computing",
    "Neural Interfaces",
    "Space Tech",
    "Biotech",
    "Robotics",
    "AI Systems",
)


def coerce_value(raw: str) -> FieldValue:
    """Parse numeric-looking text to int/float, leave everything else as text."""
    if not _NUMBER.match(raw):
        return raw
    number = float(raw)
    if not math.isfinite(number):
        return raw
    if _INTEGER.match(raw):
        return int(raw)
    return number


def parse_csv(text: str, delimiter: str = ",") -> List[Record]:
    """
    Turn header + data lines into records.

    Header names are stripped and lower-cased. Empty cells and missing
    trailing cells leave their key out of the record. A row with more cells
    than the header has columns is rejected.
    """
    if not text or not text.strip():
        raise IngestionError("input is empty")
    if len(delimiter) != 1:
        raise IngestionError(f"delimiter must be a single character, got {delimiter!r}")

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")), delimiter=delimiter)
    try:
        header: Optional[List[str]] = None
        records: List[Record] = []
        for row in reader:
            cells = [cell.strip() for cell in row]
            if not any(cells):
                continue
            if header is None:
                header = [cell.lower() for cell in cells]
                if any(not name for name in header):
                    raise IngestionError("header contains an empty column name", reader.line_num)
                if len(set(header)) != len(header):
                    raise IngestionError("header contains duplicate column names", reader.line_num)
                continue
            if len(cells) > len(header):
                raise IngestionError(
                    f"row has {len(cells)} values but the header has {len(header)} columns",
                    reader.line_num,
                )
            data: Dict[str, FieldValue] = {
                name: coerce_value(cell) for name, cell in zip(header, cells) if cell
            }
            records.append(Record(data=data))
    except csv.Error as exc:
        raise IngestionError(f"unparseable CSV: {exc}", reader.line_num) from exc

    if header is None:
        raise IngestionError("input has no header line")

    log.debug("Parsed CSV", extra={"records": len(records), "columns": header})
    return records


def load_csv(path: Path | str, delimiter: Optional[str] = None) -> List[Record]:
    """Read a CSV file from disk and parse it."""
    settings = get_settings()
    file_path = Path(path)
    if file_path.suffix.lower() != ".csv":
        raise IngestionError(f"'{file_path.name}' is not a CSV file")
    try:
        size = file_path.stat().st_size
        if size > settings.max_upload_bytes:
            raise IngestionError(
                f"'{file_path.name}' is {size} bytes, above the {settings.max_upload_bytes} byte limit"
            )
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise IngestionError(f"cannot read '{file_path}': {exc}") from exc
    return parse_csv(text, delimiter or settings.csv_delimiter)


def generate_sample(size: Optional[int] = None, rng: Optional[RandomSource] = None) -> List[Record]:
    """
    Produce synthetic store records.

    Every call with the default source yields a different set; pass a seeded
    or fixed source for reproducible output.
    """
    settings = get_settings()
    count = settings.sample_size if size is None else size
    if count < 0:
        raise ValueError("sample size must be non-negative")
    source = rng or SystemRandomSource(settings.random_seed)

    records: List[Record] = []
    for index in range(count):
        base = SAMPLE_STORE_NAMES[index % len(SAMPLE_STORE_NAMES)]
        cycle = index // len(SAMPLE_STORE_NAMES)
        name = base if cycle == 0 else f"{base}-{cycle + 1}"
        category = choice(source, SAMPLE_CATEGORIES)
        revenue = uniform(source, 50_000, 250_000)
        sales = math.floor(revenue / uniform(source, 100, 300))
        records.append(
            Record(
                data={
                    "store": name,
                    "category": category,
                    "revenue": revenue,
                    "sales": sales,
                    "growth": uniform(source, -10, 20),
                    "efficiency": uniform(source, 60, 100),
                }
            )
        )
    return records


__all__ = [
    "SAMPLE_CATEGORIES",
    "SAMPLE_STORE_NAMES",
    "coerce_value",
    "generate_sample",
    "load_csv",
    "parse_csv",
]

"""
JSON artifact persistence.

Each payload is written twice: `<stem>-latest.json` (overwritten on every
call) and `<stem>-<timestamp>.json` (archive copy).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Tuple

from store_analytics.utils.logging import get_logger

log = get_logger(__name__)


def persist_json(payload: Dict[str, Any], results_dir: Path | str, stem: str) -> Tuple[Path, Path]:
    directory = Path(results_dir)
    directory.mkdir(parents=True, exist_ok=True)
    latest_path = directory / f"{stem}-latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    archive_path = directory / f"{stem}-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True, default=str)

    log.info("Artifacts persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path, archive_path


__all__ = ["persist_json"]

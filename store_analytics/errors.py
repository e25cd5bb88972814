"""
Exception hierarchy for Alura Store Analytics.

Only ingestion and report preparation raise to their callers. Scoring problems
are recovered inside the scorers and never surface as exceptions.
"""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for errors raised by the analytics package."""


class IngestionError(AnalyticsError):
    """Raised when input text or a file cannot be turned into records."""

    def __init__(self, reason: str, line: int | None = None) -> None:
        self.reason = reason
        self.line = line
        message = reason if line is None else f"line {line}: {reason}"
        super().__init__(message)


class ReportError(AnalyticsError):
    """Raised when a report payload cannot be prepared."""


__all__ = ["AnalyticsError", "IngestionError", "ReportError"]

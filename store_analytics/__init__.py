"""
Alura Store Analytics - scoring and aggregation pipeline for store sales data.

The package turns tabular store records into portfolio KPIs, a performance
ranking and templated insights:

- Ingestion of delimited text, CSV files and synthetic samples
- Feature normalization
- Composite scoring (AI ensemble, quantum-inspired score, short-term forecast)
- Aggregation and rule-based insight selection
- Report payloads and a simulated realtime feed
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from store_analytics.aggregator import aggregate
from store_analytics.config import Settings, get_settings
from store_analytics.domain.models import AggregateSnapshot, Insight, Prediction, Record
from store_analytics.errors import AnalyticsError, IngestionError, ReportError
from store_analytics.ingestion import generate_sample, load_csv, parse_csv
from store_analytics.insights import select_insights
from store_analytics.pipeline import AnalyticsPipeline, PipelineOutcome, PipelineState
from store_analytics.scoring.scorer import RecordScorer
from store_analytics.utils.logging import configure_logging, get_logger
from store_analytics.utils.profiler import ProfileStats, profile_block

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "AggregateSnapshot",
    "Insight",
    "Prediction",
    "Record",
    # Errors
    "AnalyticsError",
    "IngestionError",
    "ReportError",
    # Pipeline stages
    "parse_csv",
    "load_csv",
    "generate_sample",
    "RecordScorer",
    "aggregate",
    "select_insights",
    "AnalyticsPipeline",
    "PipelineOutcome",
    "PipelineState",
    # Logging
    "configure_logging",
    "get_logger",
    # Profiling
    "ProfileStats",
    "profile_block",
]

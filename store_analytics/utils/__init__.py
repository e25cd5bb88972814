"""
Utilities package for Alura Store Analytics.

Exports shared helpers for logging, profiling and randomness. Keep this
package lightweight and free of scoring logic.
"""

from store_analytics.utils.logging import configure_logging, get_logger
from store_analytics.utils.profiler import ProfileStats, profile_block
from store_analytics.utils.randomness import (
    FixedSequenceSource,
    RandomSource,
    SystemRandomSource,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
    "FixedSequenceSource",
    "RandomSource",
    "SystemRandomSource",
]

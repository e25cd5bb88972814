"""
Realtime feed simulator.

Produces `FeedSnapshot` ticks (sales update, market data, system metrics) on a
fixed interval and pushes them onto an `asyncio.Queue`. The feed is decoupled
from the analytics pipeline; consumers decide what to do with each tick.

Usage:
    queue: asyncio.Queue[FeedSnapshot] = asyncio.Queue()
    feed = RealtimeFeed(interval=0.5)
    await feed.run(queue, ticks=3)
"""

from __future__ import annotations

import asyncio
import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from store_analytics.config import get_settings
from store_analytics.utils.logging import get_logger
from store_analytics.utils.randomness import RandomSource, SystemRandomSource, uniform

log = get_logger(__name__)


class SalesUpdate(BaseModel):
    new_sales: int
    revenue_change: float
    active_customers: int

    model_config = {"frozen": True}


class MarketData(BaseModel):
    trend_indicator: str = Field(..., description='"up" or "down".')
    volatility: float
    sentiment_score: float

    model_config = {"frozen": True}


class SystemMetrics(BaseModel):
    cpu_usage: float
    memory_usage: float
    response_time_ms: float

    model_config = {"frozen": True}


class FeedSnapshot(BaseModel):
    """One tick of simulated live data."""

    sequence: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sales_update: SalesUpdate
    market_data: MarketData
    system_metrics: SystemMetrics

    model_config = {"frozen": True}


class RealtimeFeed:
    def __init__(self, interval: Optional[float] = None, rng: Optional[RandomSource] = None) -> None:
        settings = get_settings()
        self.interval = settings.feed_interval_seconds if interval is None else interval
        if self.interval < 0:
            raise ValueError("feed interval must be non-negative")
        self.rng = rng or SystemRandomSource(settings.random_seed)
        self._sequence = 0

    def tick(self) -> FeedSnapshot:
        """Draw one snapshot; nine values are consumed from the random source."""
        self._sequence += 1
        rng = self.rng
        return FeedSnapshot(
            sequence=self._sequence,
            sales_update=SalesUpdate(
                new_sales=math.floor(rng.next() * 10) + 1,
                revenue_change=(rng.next() - 0.5) * 1000,
                active_customers=math.floor(rng.next() * 100) + 50,
            ),
            market_data=MarketData(
                trend_indicator="up" if rng.next() > 0.5 else "down",
                volatility=rng.next() * 0.1,
                sentiment_score=uniform(rng, 0.4, 1.0),
            ),
            system_metrics=SystemMetrics(
                cpu_usage=rng.next() * 100,
                memory_usage=rng.next() * 100,
                response_time_ms=uniform(rng, 50, 250),
            ),
        )

    async def run(self, queue: "asyncio.Queue[FeedSnapshot]", ticks: Optional[int] = None) -> int:
        """
        Push snapshots onto `queue` until `ticks` have been produced.

        With `ticks=None` the feed runs until cancelled. Returns the number of
        snapshots produced by this call.
        """
        if ticks is not None and ticks < 0:
            raise ValueError("ticks must be non-negative")
        produced = 0
        log.info("[FEED START]", extra={"interval": self.interval, "ticks": ticks})
        try:
            while ticks is None or produced < ticks:
                if produced:
                    await asyncio.sleep(self.interval)
                snapshot = self.tick()
                await queue.put(snapshot)
                produced += 1
                log.debug("[FEED TICK]", extra={"sequence": snapshot.sequence})
        except asyncio.CancelledError:
            log.info("[FEED CANCELLED]", extra={"produced": produced})
            raise
        log.info("[FEED STOP]", extra={"produced": produced})
        return produced


__all__ = ["FeedSnapshot", "MarketData", "RealtimeFeed", "SalesUpdate", "SystemMetrics"]

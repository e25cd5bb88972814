from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from store_analytics.feed import FeedSnapshot, RealtimeFeed
from store_analytics.utils.randomness import FixedSequenceSource

DEFAULT_TICKS = 3


@pytest.mark.asyncio
async def test_feed_produces_requested_ticks() -> None:
    queue: asyncio.Queue[FeedSnapshot] = asyncio.Queue()
    feed = RealtimeFeed(interval=0, rng=FixedSequenceSource([0.5]))

    produced = await feed.run(queue, ticks=DEFAULT_TICKS)

    assert produced == DEFAULT_TICKS
    snapshots = [queue.get_nowait() for _ in range(DEFAULT_TICKS)]
    assert [s.sequence for s in snapshots] == [1, 2, 3]
    assert queue.empty()


@pytest.mark.asyncio
async def test_feed_values_follow_the_random_source() -> None:
    queue: asyncio.Queue[FeedSnapshot] = asyncio.Queue()
    await RealtimeFeed(interval=0, rng=FixedSequenceSource([0.5])).run(queue, ticks=1)

    snapshot = queue.get_nowait()

    assert snapshot.sales_update.new_sales == 6
    assert snapshot.sales_update.revenue_change == pytest.approx(0.0)
    assert snapshot.sales_update.active_customers == 100
    assert snapshot.market_data.trend_indicator == "down"
    assert snapshot.market_data.sentiment_score == pytest.approx(0.7)
    assert snapshot.system_metrics.response_time_ms == pytest.approx(150.0)


@pytest.mark.asyncio
async def test_unbounded_feed_stops_on_cancel() -> None:
    queue: asyncio.Queue[FeedSnapshot] = asyncio.Queue()
    feed = RealtimeFeed(interval=0.01, rng=FixedSequenceSource([0.1, 0.9]))

    task = asyncio.create_task(feed.run(queue))
    first = await asyncio.wait_for(queue.get(), timeout=1.0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert first.sequence == 1


def test_feed_rejects_negative_interval() -> None:
    with pytest.raises(ValueError):
        RealtimeFeed(interval=-1)


def test_snapshot_is_frozen() -> None:
    snapshot = RealtimeFeed(interval=0, rng=FixedSequenceSource([0.5])).tick()
    with pytest.raises(ValidationError):
        snapshot.sequence = 99

"""Example: Driving the scoreboard feed from visibility triggers.

This example demonstrates how a viewer wires the feed:
1. A VisibilitySignal stands in for the end-of-list sentinel
2. Bursts of triggers while a page is loading are dropped
3. A flaky endpoint is retried on the next trigger
4. refresh() reloads page 1 and replaces the list
"""

from __future__ import annotations

import asyncio
import logging

from hpl_scoreboard.clients import MockScoresClient, generate_records
from hpl_scoreboard.feed import FeedController, VisibilitySignal

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def demo_scrolling() -> None:
    """Demo: scroll to the bottom until the leaderboard is exhausted."""
    logger.info("=" * 60)
    logger.info("Demo 1: Scrolling")
    logger.info("=" * 60)

    signal = VisibilitySignal()
    client = MockScoresClient(records=generate_records(57), latency_ms=30.0)

    async with FeedController(client, page_size=20, signal=signal) as feed:
        feed.subscribe(
            lambda s: logger.info(f"  [{s.phase.value}] {len(s.records)} row(s), more={s.has_more}")
        )

        while feed.has_more:
            # A fast scroll fires the sentinel several times in a row.
            await asyncio.gather(*signal.emit(), *signal.emit(), *signal.emit())

        logger.info(f"Requests issued: {client.requests}")

    await client.close()


async def demo_flaky_endpoint() -> None:
    """Demo: failed pages are retried by the next trigger."""
    logger.info("=" * 60)
    logger.info("Demo 2: Flaky endpoint")
    logger.info("=" * 60)

    client = MockScoresClient(records=generate_records(30))
    client.fail_page(2, times=2)

    async with FeedController(client, page_size=20) as feed:
        for _ in range(5):
            outcome = await feed.on_visible()
            logger.info(f"Trigger -> {outcome.value} (page {feed.last_successful_page})")

    await client.close()


async def demo_refresh() -> None:
    """Demo: pull-to-refresh after new submissions arrive."""
    logger.info("=" * 60)
    logger.info("Demo 3: Refresh")
    logger.info("=" * 60)

    client = MockScoresClient(records=generate_records(12, seed=1))

    async with FeedController(client, page_size=20) as feed:
        await feed.on_visible()
        logger.info(f"Before: {len(feed.records)} row(s), top={feed.records[0].gflops}")

        client.records = generate_records(25, seed=2)
        await feed.refresh()
        logger.info(f"After: {len(feed.records)} row(s), top={feed.records[0].gflops}")

    await client.close()


async def main() -> None:
    await demo_scrolling()
    await demo_flaky_endpoint()
    await demo_refresh()


if __name__ == "__main__":
    asyncio.run(main())

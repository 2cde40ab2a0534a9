"""Mock Scores API client for CI and testing.

This client serves pages from an in-memory, already ranked list of records
without any network. It supports:
- Configurable simulated latency
- Random or scripted failures (NetworkError / ParseError)
- A log of every page requested

Used for:
- CI/CD testing without a running Scores API
- CLI demos (``hpl-scoreboard fetch --mock``)
- Controller tests that need precise control over page contents
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from hpl_scoreboard.clients.base import ScoresClient, page_offset
from hpl_scoreboard.errors import FetchError, NetworkError
from hpl_scoreboard.types import Page, ScoreRecord

logger = logging.getLogger(__name__)

MOCK_URL = "mock://scores"


class MockScoresClient(ScoresClient):
    """Mock client that slices a ranked record list by limit/offset.

    Attributes:
        records: Server-side ranked records.
        latency_ms: Simulated response latency (ms).
        error_rate: Probability of a simulated NetworkError (0.0-1.0).
        requests: (page_number, page_size) of every fetch, in call order.
    """

    def __init__(
        self,
        records: Sequence[ScoreRecord] | None = None,
        latency_ms: float = 0.0,
        error_rate: float = 0.0,
        timeout: float = 10.0,
        seed: int | None = None,
    ) -> None:
        """Initialize mock client.

        Args:
            records: Ranked records to serve (default: empty leaderboard).
            latency_ms: Delay before each response (ms).
            error_rate: Probability of failure (0.0-1.0).
            timeout: Request timeout (seconds).
            seed: Random seed for reproducible failures.
        """
        super().__init__(name="mock", timeout=timeout)
        self.records: list[ScoreRecord] = list(records or [])
        self.latency_ms = latency_ms
        self.error_rate = error_rate
        self.requests: list[tuple[int, int]] = []
        self._rng = random.Random(seed)
        self._scripted_errors: dict[int, list[FetchError]] = {}

        logger.info(
            f"MockScoresClient initialized: records={len(self.records)}, "
            f"latency={latency_ms}ms, error_rate={error_rate}"
        )

    def fail_page(self, page_number: int, error: FetchError | None = None, times: int = 1) -> None:
        """Make the next ``times`` fetches of ``page_number`` raise ``error``."""
        err = error or NetworkError(MOCK_URL, "simulated connection reset")
        self._scripted_errors.setdefault(page_number, []).extend([err] * times)

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        offset = page_offset(page_number, page_size)
        self.requests.append((page_number, page_size))

        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000.0)

        scripted = self._scripted_errors.get(page_number)
        if scripted:
            err = scripted.pop(0)
            logger.warning(f"Mock page {page_number} failed (scripted): {err}")
            raise err

        if self._rng.random() < self.error_rate:
            logger.warning(f"Mock page {page_number} failed (simulated)")
            raise NetworkError(MOCK_URL, "simulated failure")

        chunk = tuple(self.records[offset : offset + page_size])
        return Page(records=chunk, page_number=page_number, page_size=page_size)


def generate_records(
    count: int,
    seed: int = 42,
    start: datetime | None = None,
) -> list[ScoreRecord]:
    """Generate a ranked list of plausible HPL submissions.

    Records are sorted by GFLOPS descending, like the real leaderboard.
    """
    rng = random.Random(seed)
    start = start or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    records = []
    for i in range(count):
        p = rng.choice([1, 2, 4])
        records.append(
            ScoreRecord(
                id=f"sub-{i + 1:05d}",
                user_id=f"s{rng.randint(10000000, 99999999)}",
                gflops=round(rng.uniform(20.0, 900.0), 2),
                problem_size_n=rng.choice([10000, 20000, 40000, 57600]),
                block_size_nb=rng.choice([128, 192, 232, 256]),
                p=p,
                q=rng.choice([1, 2, 4]),
                submitted_at=(start + timedelta(minutes=17 * i)).isoformat(),
            )
        )
    records.sort(key=lambda r: r.gflops, reverse=True)
    return records


def records_from_ids(ids: Iterable[int | str], gflops_start: float = 1000.0) -> list[ScoreRecord]:
    """Build minimal records with the given ids, in the given order."""
    return [
        ScoreRecord(
            id=str(record_id),
            user_id=f"user-{record_id}",
            gflops=gflops_start - i,
            problem_size_n=20000,
            block_size_nb=192,
            p=2,
            q=2,
            submitted_at="2025-03-01T09:00:00+00:00",
        )
        for i, record_id in enumerate(ids)
    ]

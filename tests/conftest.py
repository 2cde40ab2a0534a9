"""Common test fixtures for hpl-scoreboard."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest

from hpl_scoreboard.clients.base import ScoresClient
from hpl_scoreboard.clients.mock import records_from_ids
from hpl_scoreboard.types import Page


class ScriptedClient(ScoresClient):
    """Page source with hand-written page contents.

    ``pages`` maps page number to the record ids that page returns; missing
    pages return an empty list. Setting ``gate`` holds every fetch until the
    event is set, which keeps a fetch "in flight" for as long as a test needs.
    """

    def __init__(self, pages: dict[int, Iterable[int | str]] | None = None) -> None:
        super().__init__(name="scripted")
        self.pages = {number: list(ids) for number, ids in (pages or {}).items()}
        self.calls: list[tuple[int, int]] = []
        self.gate: asyncio.Event | None = None
        self.outstanding = 0
        self.max_outstanding = 0
        self._failures: dict[int, list[BaseException]] = {}

    def fail_next(self, page_number: int, error: BaseException) -> None:
        self._failures.setdefault(page_number, []).append(error)

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        self.calls.append((page_number, page_size))
        self.outstanding += 1
        self.max_outstanding = max(self.max_outstanding, self.outstanding)
        try:
            if self.gate is not None:
                await self.gate.wait()
            failures = self._failures.get(page_number)
            if failures:
                raise failures.pop(0)
            ids = self.pages.get(page_number, [])
            return Page(
                records=tuple(records_from_ids(ids)),
                page_number=page_number,
                page_size=page_size,
            )
        finally:
            self.outstanding -= 1


@pytest.fixture
def scripted_client():
    """Factory for ScriptedClient instances."""
    return ScriptedClient


@pytest.fixture
def score_payload():
    """Provide one Scores API record as JSON-decoded data."""
    return {
        "id": "0f8b6f1e-2d0a-4bb5-9a52-5a8a3c3a7e11",
        "user_id": "r12345678",
        "gflops": 412.73,
        "problem_size_n": 40000,
        "block_size_nb": 192,
        "p": 2,
        "q": 4,
        "submitted_at": "2025-03-14T08:21:07Z",
    }

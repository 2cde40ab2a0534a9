"""Incremental paginated feed controller.

FeedController turns visibility triggers into limit/offset page fetches and
keeps one cumulative, deduplicated, server-ordered record list:

- Idle(has_more)  + trigger   -> Fetching   (page last_successful_page + 1)
- Fetching        + success   -> Idle, or Exhausted on a short page
- Fetching        + failure   -> Idle       (records and page counter untouched)
- Exhausted       + trigger   -> Exhausted  (no fetch)
- any             + close()   -> Closed     (late responses are discarded)

At most one fetch is outstanding at a time; triggers arriving while a fetch
is in flight are dropped, not queued. Listeners receive a FeedSnapshot after
every state change.

Usage::

    async with HTTPScoresClient("http://localhost:8080") as client:
        async with FeedController(client, page_size=20) as feed:
            await feed.on_visible()
            print(len(feed.records), feed.has_more)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from hpl_scoreboard.config import DEFAULT_MAX_FAILURES, DEFAULT_PAGE_SIZE
from hpl_scoreboard.errors import FetchError
from hpl_scoreboard.feed.completion import is_last_page
from hpl_scoreboard.feed.dedup import merge_page
from hpl_scoreboard.feed.guard import ConcurrencyGuard
from hpl_scoreboard.types import FeedPhase, FeedSnapshot, FeedState, FetchOutcome

if TYPE_CHECKING:
    from hpl_scoreboard.clients.base import ScoresClient
    from hpl_scoreboard.feed.signal import VisibilitySignal
    from hpl_scoreboard.types import Page, ScoreRecord

logger = logging.getLogger(__name__)

FeedListener = Callable[[FeedSnapshot], None]


class FeedController:
    """Owns FeedState and drives page fetches from visibility triggers.

    Attributes:
        client: Page source.
        page_size: Fixed limit used for every request.
        max_failures: Consecutive failures tolerated by load_until_exhausted().
    """

    def __init__(
        self,
        client: ScoresClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        signal: VisibilitySignal | None = None,
        max_failures: int = DEFAULT_MAX_FAILURES,
    ) -> None:
        """Initialize controller.

        Args:
            client: Page source.
            page_size: Records per page.
            signal: Optional visibility signal; on_visible() is connected to it.
            max_failures: Consecutive failures tolerated by load_until_exhausted().
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.client = client
        self.page_size = page_size
        self.max_failures = max_failures
        self._state = FeedState()
        self._guard = ConcurrencyGuard()
        self._listeners: list[FeedListener] = []
        self._disconnect = signal.connect(self.on_visible) if signal is not None else None

        logger.info(f"FeedController initialized (client={client.name}, page_size={page_size})")

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[ScoreRecord, ...]:
        return tuple(self._state.records)

    @property
    def has_more(self) -> bool:
        return self._state.has_more

    @property
    def in_flight(self) -> bool:
        return self._guard.in_flight

    @property
    def last_successful_page(self) -> int:
        return self._state.last_successful_page

    @property
    def phase(self) -> FeedPhase:
        return self._state.phase

    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot.of(self._state)

    def subscribe(self, listener: FeedListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every change.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def on_visible(self) -> FetchOutcome:
        """Handle one visibility trigger.

        Fetches page ``last_successful_page + 1`` unless the feed is
        exhausted, closed or already fetching.
        """
        if self._state.phase is FeedPhase.CLOSED:
            logger.debug("Trigger ignored: feed closed")
            return FetchOutcome.DROPPED
        if not self._state.has_more:
            logger.debug("Trigger ignored: feed exhausted")
            return FetchOutcome.DROPPED
        return await self._fetch(self._state.last_successful_page + 1, new_session=False)

    async def refresh(self) -> FetchOutcome:
        """Reload page 1 and replace all records with it.

        Starts a new feed session, so an exhausted feed may grow again.
        Dropped if a fetch is already in flight.
        """
        if self._state.phase is FeedPhase.CLOSED:
            logger.debug("Refresh ignored: feed closed")
            return FetchOutcome.DROPPED
        return await self._fetch(1, new_session=True)

    async def load_until_exhausted(self, max_pages: int | None = None) -> FeedSnapshot:
        """Fire triggers back to back until the feed is exhausted.

        Stops early after ``max_pages`` merged pages, after ``max_failures``
        consecutive failed fetches, or if a trigger is dropped.

        Returns:
            Snapshot of the final state.
        """
        merged = 0
        failures = 0
        while self._state.has_more and self._state.phase is not FeedPhase.CLOSED:
            if max_pages is not None and merged >= max_pages:
                break

            outcome = await self.on_visible()
            if outcome is FetchOutcome.MERGED:
                merged += 1
                failures = 0
            elif outcome is FetchOutcome.FAILED:
                failures += 1
                if failures >= self.max_failures:
                    logger.error(f"Giving up after {failures} consecutive failed fetch(es)")
                    break
            else:
                break

        logger.info(
            f"Loaded {merged} page(s), {len(self._state.records)} record(s), "
            f"has_more={self._state.has_more}"
        )
        return self.snapshot()

    # ------------------------------------------------------------------
    # Fetch cycle
    # ------------------------------------------------------------------

    async def _fetch(self, page_number: int, new_session: bool) -> FetchOutcome:
        with self._guard.hold() as acquired:
            if not acquired:
                return FetchOutcome.DROPPED

            if new_session:
                self._state.generation += 1
            generation = self._state.generation

            self._state.in_flight = True
            self._state.phase = FeedPhase.FETCHING
            self._publish()
            try:
                try:
                    page = await self.client.fetch_page(page_number, self.page_size)
                except FetchError as e:
                    if self._is_stale(generation):
                        logger.debug(f"Discarding failure of stale page {page_number}: {e}")
                        return FetchOutcome.STALE
                    logger.warning(f"Fetch of page {page_number} failed: {e}")
                    self._state.last_error = str(e)
                    self._finish_fetch()
                    return FetchOutcome.FAILED
                except BaseException:
                    if not self._is_stale(generation):
                        self._finish_fetch()
                    raise

                if self._is_stale(generation):
                    logger.debug(f"Discarding stale page {page_number} ({len(page)} record(s))")
                    return FetchOutcome.STALE

                self._apply_page(page_number, page)
                self._finish_fetch()
                return FetchOutcome.MERGED
            finally:
                # Mirrors the guard, which hold() releases right after this.
                self._state.in_flight = False

    def _apply_page(self, page_number: int, page: Page) -> None:
        state = self._state
        last = is_last_page(page, self.page_size)
        before = len(state.records)

        state.records = merge_page(state.records, page.records, page_number)
        state.last_successful_page = page_number
        state.has_more = not last
        state.last_error = None

        if page_number == 1:
            logger.info(f"Page 1 loaded: {len(state.records)} record(s)")
        else:
            added = len(state.records) - before
            logger.info(
                f"Page {page_number} merged: {added} new, "
                f"{len(page) - added} duplicate(s), total {len(state.records)}"
            )
        if last:
            logger.info(
                f"Feed exhausted after page {page_number} "
                f"({len(page)} < {self.page_size})"
            )

    def _finish_fetch(self) -> None:
        self._state.in_flight = False
        self._state.phase = FeedPhase.IDLE if self._state.has_more else FeedPhase.EXHAUSTED
        self._publish()

    def _is_stale(self, generation: int) -> bool:
        return self._state.phase is FeedPhase.CLOSED or generation != self._state.generation

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Feed listener {listener!r} failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Tear down the feed.

        Detaches from the visibility signal and drops listeners. A fetch
        still in flight is not cancelled; its response is discarded.
        """
        if self._state.phase is FeedPhase.CLOSED:
            return
        if self._disconnect is not None:
            self._disconnect()
            self._disconnect = None
        self._state.generation += 1
        self._state.phase = FeedPhase.CLOSED
        self._publish()
        self._listeners.clear()
        logger.info("FeedController closed")

    async def __aenter__(self) -> FeedController:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

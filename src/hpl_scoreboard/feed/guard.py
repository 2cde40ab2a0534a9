"""Single in-flight fetch guard."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ConcurrencyGuard:
    """Non-blocking mutual-exclusion flag for page fetches.

    A caller that cannot acquire the guard is expected to drop its work, not
    wait. Everything runs on one event loop, so a plain bool is enough: the
    check-and-set in try_acquire() never spans an await.
    """

    def __init__(self) -> None:
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def try_acquire(self) -> bool:
        """Take the guard if it is free.

        Returns:
            True if acquired, False if a fetch is already outstanding.
        """
        if self._in_flight:
            return False
        self._in_flight = True
        return True

    def release(self) -> None:
        """Clear the guard unconditionally."""
        self._in_flight = False

    @contextmanager
    def hold(self) -> Iterator[bool]:
        """Try to acquire for the duration of a block.

        Yields True if the guard was acquired; the guard is then released on
        every exit path. Yields False (and releases nothing) otherwise.
        """
        acquired = self.try_acquire()
        if not acquired:
            logger.debug("Guard busy, dropping request")
        try:
            yield acquired
        finally:
            if acquired:
                self.release()

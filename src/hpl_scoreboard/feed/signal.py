"""Visibility signal channel.

A VisibilitySignal stands in for whatever notices that the end of the loaded
list is reachable (an intersection observer, a scroll position poll, a key
press in a terminal viewer). Producers call emit(); the feed controller is
just one connected handler.

Example:
    >>> signal = VisibilitySignal()
    >>> controller = FeedController(client, signal=signal)
    >>> await asyncio.gather(*signal.emit())
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

VisibilityHandler = Callable[[], Awaitable[Any]]


class VisibilitySignal:
    """Fan-out channel of "sentinel became visible" events."""

    def __init__(self) -> None:
        self._handlers: list[VisibilityHandler] = []

    def connect(self, handler: VisibilityHandler) -> Callable[[], None]:
        """Register an async handler.

        Returns:
            A callable that disconnects the handler. Calling it twice is a no-op.
        """
        self._handlers.append(handler)

        def disconnect() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return disconnect

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def emit(self) -> list[asyncio.Task[Any]]:
        """Schedule every connected handler on the running loop.

        Must be called from inside a running event loop.

        Returns:
            The scheduled tasks, so callers may await them.
        """
        loop = asyncio.get_running_loop()
        tasks = [loop.create_task(handler()) for handler in list(self._handlers)]
        for task in tasks:
            task.add_done_callback(_log_handler_failure)
        logger.debug(f"Visibility signal emitted to {len(tasks)} handler(s)")
        return tasks


def _log_handler_failure(task: asyncio.Task[Any]) -> None:
    # Callers often drop the tasks, so failures would otherwise go unreported.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Visibility handler failed: {exc}", exc_info=exc)

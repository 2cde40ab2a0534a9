"""Incremental paginated feed.

- is_last_page: short-page completion detection
- merge_page: order-preserving, id-unique merge
- ConcurrencyGuard: single in-flight fetch guard
- VisibilitySignal: trigger channel
- FeedController: state machine tying them together
"""

from __future__ import annotations

from hpl_scoreboard.feed.completion import is_last_page
from hpl_scoreboard.feed.controller import FeedController
from hpl_scoreboard.feed.dedup import merge_page
from hpl_scoreboard.feed.guard import ConcurrencyGuard
from hpl_scoreboard.feed.signal import VisibilitySignal

__all__ = [
    "ConcurrencyGuard",
    "FeedController",
    "VisibilitySignal",
    "is_last_page",
    "merge_page",
]

"""hpl-scoreboard: incremental client for the HPL performance leaderboard."""

from __future__ import annotations

from hpl_scoreboard.clients import HTTPScoresClient, MockScoresClient, ScoresClient
from hpl_scoreboard.config import ScoreboardConfig
from hpl_scoreboard.errors import FetchError, NetworkError, ParseError
from hpl_scoreboard.feed import FeedController, VisibilitySignal
from hpl_scoreboard.stats import ScoreSummary, summarize
from hpl_scoreboard.types import FeedPhase, FeedSnapshot, FetchOutcome, Page, ScoreRecord

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "ScoresClient",
    "HTTPScoresClient",
    "MockScoresClient",
    # Feed
    "FeedController",
    "VisibilitySignal",
    # Types
    "FeedPhase",
    "FeedSnapshot",
    "FetchOutcome",
    "Page",
    "ScoreRecord",
    # Errors
    "FetchError",
    "NetworkError",
    "ParseError",
    # Config / stats
    "ScoreboardConfig",
    "ScoreSummary",
    "summarize",
]

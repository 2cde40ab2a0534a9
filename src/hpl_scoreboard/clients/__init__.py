"""Scores API clients.

- ScoresClient: abstract page source
- HTTPScoresClient: remote Scores API over httpx
- MockScoresClient: in-memory page source for CI and demos
"""

from __future__ import annotations

from hpl_scoreboard.clients.base import ScoresClient, page_offset
from hpl_scoreboard.clients.http_client import HTTPScoresClient, parse_scores
from hpl_scoreboard.clients.mock import MockScoresClient, generate_records, records_from_ids

__all__ = [
    "ScoresClient",
    "HTTPScoresClient",
    "MockScoresClient",
    "generate_records",
    "page_offset",
    "parse_scores",
    "records_from_ids",
]

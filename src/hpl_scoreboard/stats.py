"""Leaderboard summary statistics (top score, average, total)."""

from __future__ import annotations

import statistics
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hpl_scoreboard.types import ScoreRecord


@dataclass
class ScoreSummary:
    """Summary of the records loaded so far.

    Attributes:
        top_gflops: GFLOPS of the first (server-ranked best) record.
        avg_gflops: Mean GFLOPS over all loaded records.
        total: Number of loaded submissions.
        top_user_id: Submitter of the top record.
    """

    top_gflops: float = 0.0
    avg_gflops: float = 0.0
    total: int = 0
    top_user_id: str | None = None


def summarize(records: Sequence[ScoreRecord]) -> ScoreSummary:
    """Summarize loaded records.

    Order is taken as authoritative, so the top score is the first record
    rather than the maximum.
    """
    if not records:
        return ScoreSummary()

    return ScoreSummary(
        top_gflops=records[0].gflops,
        avg_gflops=statistics.fmean(r.gflops for r in records),
        total=len(records),
        top_user_id=records[0].user_id,
    )

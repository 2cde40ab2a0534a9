"""Shared data types for the scoreboard feed.

- ScoreRecord: one HPL submission as returned by the Scores API
- Page: the records of one limit/offset fetch
- FeedPhase: controller state machine phases
- FetchOutcome: what a single trigger did
- FeedState: mutable state owned by FeedController
- FeedSnapshot: read-only view handed to listeners
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hpl_scoreboard.errors import ParseError

# Fields every record must carry; p and q are optional on older servers.
_REQUIRED_FIELDS = ("id", "user_id", "gflops", "problem_size_n", "block_size_nb", "submitted_at")


class FeedPhase(str, Enum):
    """Feed controller phases."""

    IDLE = "idle"
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class FetchOutcome(str, Enum):
    """Result of one visibility trigger or refresh."""

    MERGED = "merged"  # page fetched and applied
    FAILED = "failed"  # NetworkError / ParseError, state untouched
    DROPPED = "dropped"  # guard busy, exhausted or closed; no fetch issued
    STALE = "stale"  # response arrived after teardown, discarded


@dataclass(frozen=True)
class ScoreRecord:
    """One benchmark submission.

    Attributes:
        id: Opaque unique identifier.
        user_id: Submitter identifier.
        gflops: Measured performance (GFLOPS).
        problem_size_n: HPL problem size N.
        block_size_nb: HPL block size NB.
        p: Process grid rows.
        q: Process grid columns.
        submitted_at: ISO-8601 timestamp, kept verbatim.
    """

    id: str
    user_id: str
    gflops: float
    problem_size_n: int
    block_size_nb: int
    p: int = 1
    q: int = 1
    submitted_at: str = ""

    @classmethod
    def from_dict(cls, data: Any, index: int | None = None) -> ScoreRecord:
        """Build a record from one element of the API response array.

        Raises:
            ParseError: If the element is not an object or a field is missing
                or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ParseError(f"expected object, got {type(data).__name__}", index=index)

        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise ParseError(f"missing field(s) {', '.join(missing)}", index=index)

        try:
            return cls(
                id=_as_str(data["id"], "id"),
                user_id=_as_str(data["user_id"], "user_id"),
                gflops=_as_float(data["gflops"], "gflops"),
                problem_size_n=_as_int(data["problem_size_n"], "problem_size_n"),
                block_size_nb=_as_int(data["block_size_nb"], "block_size_nb"),
                p=_as_int(data.get("p", 1), "p"),
                q=_as_int(data.get("q", 1), "q"),
                submitted_at=_as_str(data["submitted_at"], "submitted_at"),
            )
        except (TypeError, ValueError) as e:
            raise ParseError(str(e), index=index) from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "gflops": self.gflops,
            "problem_size_n": self.problem_size_n,
            "block_size_nb": self.block_size_nb,
            "p": self.p,
            "q": self.q,
            "submitted_at": self.submitted_at,
        }


def _as_str(value: Any, name: str) -> str:
    # Identifiers may come back as JSON numbers from some backends.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(f"field {name!r} must be a string")
    return str(value)


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {name!r} must be an integer")
    return value


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"field {name!r} must be a number")
    try:
        number = float(value)
    except OverflowError as e:
        raise ValueError(f"field {name!r} is out of range") from e
    if not math.isfinite(number):
        raise ValueError(f"field {name!r} must be finite")
    return number


@dataclass(frozen=True)
class Page:
    """Ordered records returned by one fetch.

    Attributes:
        records: Records in server (ranked) order.
        page_number: 1-based page number requested.
        page_size: Limit used for the request.
    """

    records: tuple[ScoreRecord, ...]
    page_number: int
    page_size: int

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass
class FeedState:
    """Mutable feed state, owned and mutated only by FeedController.

    Attributes:
        records: Merged records in first-seen order, unique by id.
        last_successful_page: Highest page number merged so far.
        has_more: False once a short page was seen. Never reverts.
        in_flight: True while a fetch is outstanding.
        last_error: Message of the most recent failed fetch.
        generation: Feed session counter for the stale-response guard.
        phase: Current state machine phase.
    """

    records: list[ScoreRecord] = field(default_factory=list)
    last_successful_page: int = 0
    has_more: bool = True
    in_flight: bool = False
    last_error: str | None = None
    generation: int = 0
    phase: FeedPhase = FeedPhase.IDLE


@dataclass(frozen=True)
class FeedSnapshot:
    """Read-only copy of FeedState published to listeners."""

    records: tuple[ScoreRecord, ...]
    has_more: bool
    in_flight: bool
    last_successful_page: int
    phase: FeedPhase
    last_error: str | None = None

    @classmethod
    def of(cls, state: FeedState) -> FeedSnapshot:
        return cls(
            records=tuple(state.records),
            has_more=state.has_more,
            in_flight=state.in_flight,
            last_successful_page=state.last_successful_page,
            phase=state.phase,
            last_error=state.last_error,
        )

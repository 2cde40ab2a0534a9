"""Tests for record parsing and feed types."""

from __future__ import annotations

import pytest

from hpl_scoreboard.errors import ParseError
from hpl_scoreboard.types import FeedPhase, FeedSnapshot, FeedState, Page, ScoreRecord


def test_record_from_dict(score_payload) -> None:
    record = ScoreRecord.from_dict(score_payload)
    assert record.id == score_payload["id"]
    assert record.user_id == "r12345678"
    assert record.gflops == 412.73
    assert (record.problem_size_n, record.block_size_nb) == (40000, 192)
    assert (record.p, record.q) == (2, 4)
    assert record.submitted_at == "2025-03-14T08:21:07Z"


def test_record_round_trips_to_dict(score_payload) -> None:
    assert ScoreRecord.from_dict(score_payload).to_dict() == score_payload


def test_record_grid_defaults_when_missing(score_payload) -> None:
    """Older servers only report N and NB."""
    del score_payload["p"]
    del score_payload["q"]
    record = ScoreRecord.from_dict(score_payload)
    assert (record.p, record.q) == (1, 1)


def test_record_integer_gflops_and_numeric_id(score_payload) -> None:
    score_payload["gflops"] = 400
    score_payload["id"] = 17
    record = ScoreRecord.from_dict(score_payload)
    assert record.gflops == 400.0
    assert isinstance(record.gflops, float)
    assert record.id == "17"


def test_record_missing_field(score_payload) -> None:
    del score_payload["gflops"]
    with pytest.raises(ParseError, match="gflops"):
        ScoreRecord.from_dict(score_payload, index=3)


@pytest.mark.parametrize(
    "field,value",
    [
        ("gflops", "fast"),
        ("problem_size_n", 1.5),
        ("block_size_nb", True),
        ("user_id", None),
        ("submitted_at", ["2025"]),
    ],
)
def test_record_wrong_type(score_payload, field, value) -> None:
    score_payload[field] = value
    with pytest.raises(ParseError) as exc_info:
        ScoreRecord.from_dict(score_payload, index=0)
    assert exc_info.value.context["index"] == 0


def test_record_not_an_object() -> None:
    with pytest.raises(ParseError, match="expected object"):
        ScoreRecord.from_dict(["a", "b"])


def test_record_is_immutable(score_payload) -> None:
    record = ScoreRecord.from_dict(score_payload)
    with pytest.raises(AttributeError):
        record.gflops = 1.0  # type: ignore[misc]


def test_page_len_and_offset(score_payload) -> None:
    record = ScoreRecord.from_dict(score_payload)
    page = Page(records=(record, record), page_number=3, page_size=20)
    assert len(page) == 2
    assert page.offset == 40
    assert list(page) == [record, record]


def test_initial_feed_state() -> None:
    state = FeedState()
    assert state.records == []
    assert state.last_successful_page == 0
    assert state.has_more is True
    assert state.in_flight is False
    assert state.phase is FeedPhase.IDLE


def test_snapshot_is_a_copy(score_payload) -> None:
    state = FeedState()
    snapshot = FeedSnapshot.of(state)
    state.records.append(ScoreRecord.from_dict(score_payload))
    assert snapshot.records == ()

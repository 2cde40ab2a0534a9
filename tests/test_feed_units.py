"""Tests for completion detection, merging and the fetch guard."""

from __future__ import annotations

import random

import pytest

from hpl_scoreboard.clients.mock import records_from_ids
from hpl_scoreboard.feed import ConcurrencyGuard, is_last_page, merge_page
from hpl_scoreboard.types import Page


def _ids(records) -> list[str]:
    return [r.id for r in records]


class TestIsLastPage:
    """Tests for is_last_page."""

    def test_full_page_is_not_last(self) -> None:
        assert not is_last_page(records_from_ids(range(20)), 20)

    def test_short_page_is_last(self) -> None:
        assert is_last_page(records_from_ids(range(19)), 20)

    def test_empty_page_is_last(self) -> None:
        assert is_last_page([], 20)

    def test_accepts_page_objects(self) -> None:
        page = Page(records=tuple(records_from_ids(range(5))), page_number=2, page_size=5)
        assert not is_last_page(page, 5)

    def test_rejects_non_positive_page_size(self) -> None:
        with pytest.raises(ValueError):
            is_last_page([], 0)


class TestMergePage:
    """Tests for merge_page."""

    def test_first_page_replaces_existing(self) -> None:
        existing = records_from_ids(["a", "b", "c"])
        merged = merge_page(existing, records_from_ids(["x", "y"]), page_number=1)
        assert _ids(merged) == ["x", "y"]

    def test_appends_only_unseen_records(self) -> None:
        existing = records_from_ids(range(1, 21))
        merged = merge_page(existing, records_from_ids(range(18, 33)), page_number=2)
        assert _ids(merged) == [str(i) for i in range(1, 33)]

    def test_keeps_existing_positions(self) -> None:
        existing = records_from_ids(["b", "a"])
        merged = merge_page(existing, records_from_ids(["a", "c", "b", "d"]), page_number=2)
        assert _ids(merged) == ["b", "a", "c", "d"]

    def test_existing_version_wins(self) -> None:
        """A re-ranked duplicate does not replace the record already admitted."""
        existing = records_from_ids(["a"], gflops_start=10.0)
        incoming = records_from_ids(["a"], gflops_start=99.0)
        merged = merge_page(existing, incoming, page_number=2)
        assert merged[0].gflops == 10.0

    def test_duplicates_within_one_page(self) -> None:
        merged = merge_page([], records_from_ids(["a", "b", "a"]), page_number=1)
        assert _ids(merged) == ["a", "b"]

    def test_does_not_mutate_existing(self) -> None:
        existing = records_from_ids(["a"])
        merge_page(existing, records_from_ids(["b"]), page_number=2)
        assert _ids(existing) == ["a"]

    def test_empty_page(self) -> None:
        existing = records_from_ids(["a", "b"])
        assert _ids(merge_page(existing, [], page_number=3)) == ["a", "b"]

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_unique_and_first_seen_order(self, seed: int) -> None:
        rng = random.Random(seed)
        pages = [[rng.randint(0, 30) for _ in range(8)] for _ in range(6)]

        merged: list = []
        for number, ids in enumerate(pages, start=1):
            merged = merge_page(merged, records_from_ids(ids), page_number=number)

        expected = list(dict.fromkeys(str(i) for ids in pages for i in ids))
        assert _ids(merged) == expected
        assert len(set(_ids(merged))) == len(merged)


class TestConcurrencyGuard:
    """Tests for ConcurrencyGuard."""

    def test_acquire_then_busy(self) -> None:
        guard = ConcurrencyGuard()
        assert guard.try_acquire()
        assert guard.in_flight
        assert not guard.try_acquire()

    def test_release_frees_guard(self) -> None:
        guard = ConcurrencyGuard()
        guard.try_acquire()
        guard.release()
        assert not guard.in_flight
        assert guard.try_acquire()

    def test_release_is_unconditional(self) -> None:
        guard = ConcurrencyGuard()
        guard.release()
        assert not guard.in_flight

    def test_hold_releases_on_error(self) -> None:
        guard = ConcurrencyGuard()
        with pytest.raises(RuntimeError):
            with guard.hold() as acquired:
                assert acquired
                raise RuntimeError("boom")
        assert not guard.in_flight

    def test_hold_when_busy_keeps_holder(self) -> None:
        guard = ConcurrencyGuard()
        with guard.hold() as outer:
            assert outer
            with guard.hold() as inner:
                assert not inner
            # The failed inner attempt must not release the outer holder.
            assert guard.in_flight
        assert not guard.in_flight

"""Completion detection for limit/offset pagination."""

from __future__ import annotations

from collections.abc import Sized


def is_last_page(page: Sized, page_size: int) -> bool:
    """Return True if ``page`` is shorter than ``page_size``.

    The Scores API has no total-count field, so a short (or empty) page is the
    only exhaustion signal. When the total is an exact multiple of
    ``page_size``, exhaustion shows up one fetch later as an empty page.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return len(page) < page_size

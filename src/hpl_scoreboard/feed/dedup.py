"""Order-preserving merge of fetched pages into the cumulative record list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from hpl_scoreboard.types import ScoreRecord


def merge_page(
    existing: Sequence[ScoreRecord],
    incoming: Iterable[ScoreRecord],
    page_number: int,
) -> list[ScoreRecord]:
    """Merge one page into the records admitted so far.

    Page 1 replaces everything (refresh semantics). Any later page appends
    the records whose id has not been seen yet, in page order. Previously
    admitted records keep their position. ``existing`` is not mutated.

    Args:
        existing: Records merged so far, first-seen order.
        incoming: Records of the new page, server order.
        page_number: Page number the records were fetched as.

    Returns:
        New merged list, unique by id.
    """
    if page_number == 1:
        merged: list[ScoreRecord] = []
        seen: set[str] = set()
    else:
        merged = list(existing)
        seen = {record.id for record in existing}

    for record in incoming:
        if record.id in seen:
            continue
        seen.add(record.id)
        merged.append(record)

    return merged

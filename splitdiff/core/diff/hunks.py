"""
Hunk builder.

Groups maximal runs of aligned rows that are not equal-paired into hunks
and derives a raw-index lookup table for them.
"""

from __future__ import annotations

from typing import Optional, Sequence

from splitdiff.core.models import AlignedRow, Hunk


def _is_equal_pair(left: AlignedRow, right: AlignedRow) -> bool:
    return left.is_equal and right.is_equal


def first_line_number(
    rows: Sequence[AlignedRow],
    start: int,
    end: int
) -> Optional[int]:
    """First non-null line number in rows[start..end] (inclusive)."""
    for index in range(start, end + 1):
        if rows[index].line_number is not None:
            return rows[index].line_number
    return None


def build_hunks(
    left: Sequence[AlignedRow],
    right: Sequence[AlignedRow]
) -> list[Hunk]:
    """
    Scan the aligned rows and return hunks in ascending raw-index order.

    A hunk extends while either side is non-equal and stops exactly where
    both sides become equal, so hunks never overlap or touch.
    """
    hunks: list[Hunk] = []
    total = len(left)
    i = 0

    while i < total:
        if _is_equal_pair(left[i], right[i]):
            i += 1
            continue

        start = i
        while i < total and not _is_equal_pair(left[i], right[i]):
            i += 1
        end = i - 1

        left_start = first_line_number(left, start, end)
        right_start = first_line_number(right, start, end)
        hunks.append(Hunk(
            hunk_id=Hunk.make_id(start, end, left_start, right_start),
            start=start,
            end=end,
            left_start_line=left_start,
            right_start_line=right_start
        ))

    return hunks


def build_hunk_map(length: int, hunks: Sequence[Hunk]) -> list[Optional[str]]:
    """Map every raw index to the id of the hunk covering it, or None."""
    mapping: list[Optional[str]] = [None] * length
    for hunk in hunks:
        for index in hunk.iter_raw_indices():
            mapping[index] = hunk.hunk_id
    return mapping

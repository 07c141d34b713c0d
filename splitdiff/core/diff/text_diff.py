"""
Text diff engine.

Provides line-by-line comparison with support for:
- Line ending normalization
- Whitespace-insensitive matching
- Side-by-side alignment with placeholder rows
- Hunk detection with stable identifiers

The matcher is a classic longest-common-subsequence table over comparison
keys. Its cost is O(n*m) in both time and memory, where n and m are the
line counts of the two inputs; this is a known scaling limit and inputs
are never truncated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from splitdiff.core.diff.aligner import align_operations
from splitdiff.core.diff.hunks import build_hunk_map, build_hunks
from splitdiff.core.diff.tokenizer import split_lines
from splitdiff.core.models import (
    AlignedRow,
    DiffComputation,
    DiffStatistics,
    EditOperation,
    Hunk,
    RowType,
)


# Table size above which a comparison is logged as expensive
LARGE_INPUT_CELLS = 25_000_000

_WHITESPACE_RE = re.compile(r'\s+')


def strip_whitespace(line: str) -> str:
    """Comparison key that ignores all whitespace."""
    return _WHITESPACE_RE.sub('', line)


@dataclass
class TextCompareOptions:
    """Options for text comparison."""
    ignore_whitespace: bool = False
    large_input_cells: int = LARGE_INPUT_CELLS

    def comparison_key(self, line: str) -> str:
        """Normalize a line according to options."""
        if self.ignore_whitespace:
            return strip_whitespace(line)
        return line

    def key_function(self) -> Optional[Callable[[str], str]]:
        """Key function for the matcher, or None for identity."""
        return strip_whitespace if self.ignore_whitespace else None


def lcs_edit_script(
    left: Sequence[str],
    right: Sequence[str],
    key: Optional[Callable[[str], str]] = None
) -> list[EditOperation]:
    """
    Compute an edit script between two line sequences.

    Lines are matched on ``key(line)`` but every operation carries the
    raw lines. When backtracking hits a tie between moving up (delete)
    and moving left (insert), delete wins; this decides hunk shape on
    ambiguous inputs and must stay stable.

    Args:
        left: Lines of the left/original text
        right: Lines of the right/modified text
        key: Comparison key function (identity if None)

    Returns:
        Edit operations in top-to-bottom order
    """
    left_keys = [key(line) for line in left] if key else list(left)
    right_keys = [key(line) for line in right] if key else list(right)
    n = len(left_keys)
    m = len(right_keys)

    # table[i][j] = LCS length of left_keys[:i] and right_keys[:j]
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        row = table[i]
        prev = table[i - 1]
        left_key = left_keys[i - 1]
        for j in range(1, m + 1):
            if left_key == right_keys[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = prev[j] if prev[j] >= row[j - 1] else row[j - 1]

    ops: list[EditOperation] = []
    i, j = n, m
    while i > 0 and j > 0:
        if left_keys[i - 1] == right_keys[j - 1]:
            ops.append(EditOperation.equal(left[i - 1], right[j - 1]))
            i -= 1
            j -= 1
        elif table[i - 1][j] >= table[i][j - 1]:
            ops.append(EditOperation.delete(left[i - 1]))
            i -= 1
        else:
            ops.append(EditOperation.insert(right[j - 1]))
            j -= 1

    while i > 0:
        ops.append(EditOperation.delete(left[i - 1]))
        i -= 1
    while j > 0:
        ops.append(EditOperation.insert(right[j - 1]))
        j -= 1

    ops.reverse()
    return ops


class TextDiffEngine:
    """
    Engine for comparing two texts side by side.

    Stateless between calls: every computation starts from scratch and
    only reads its options.
    """

    def __init__(self, options: Optional[TextCompareOptions] = None):
        self.options = options or TextCompareOptions()

    def compute(self, left_text: str, right_text: str) -> DiffComputation:
        """
        Compare two texts.

        Args:
            left_text: Left/original text
            right_text: Right/modified text

        Returns:
            DiffComputation with aligned rows, hunks and lookup map
        """
        left_lines = split_lines(left_text)
        right_lines = split_lines(right_text)
        return self.compare_lines(left_lines, right_lines)

    def compare_lines(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str]
    ) -> DiffComputation:
        """Compare two already tokenized line sequences."""
        left = list(left_lines)
        right = list(right_lines)

        cells = (len(left) + 1) * (len(right) + 1)
        if cells > self.options.large_input_cells:
            logging.warning(
                f"TextDiffEngine - Large comparison ({len(left)} x {len(right)} lines, "
                f"{cells} table cells); this may be slow"
            )

        operations = lcs_edit_script(left, right, self.options.key_function())
        aligned_left, aligned_right = align_operations(operations)
        hunks = build_hunks(aligned_left, aligned_right)
        raw_to_hunk = build_hunk_map(len(aligned_left), hunks)

        stats = self._calculate_statistics(aligned_left, aligned_right, hunks)
        stats.total_lines_left = len(left)
        stats.total_lines_right = len(right)

        logging.debug(
            f"TextDiffEngine - {len(left)} vs {len(right)} lines: "
            f"{len(aligned_left)} rows, {len(hunks)} hunks"
        )

        return DiffComputation(
            aligned_left=aligned_left,
            aligned_right=aligned_right,
            hunks=hunks,
            raw_to_hunk=raw_to_hunk,
            left_lines=left,
            right_lines=right,
            statistics=stats
        )

    def has_changes(self, left_text: str, right_text: str) -> bool:
        """
        Quick check whether two texts differ under the active comparison.

        Does not run the matcher.
        """
        if not left_text and not right_text:
            return False

        left_lines = split_lines(left_text)
        right_lines = split_lines(right_text)
        if len(left_lines) != len(right_lines):
            return True

        key = self.options.comparison_key
        return any(key(l) != key(r) for l, r in zip(left_lines, right_lines))

    def _calculate_statistics(
        self,
        left: Sequence[AlignedRow],
        right: Sequence[AlignedRow],
        hunks: Sequence[Hunk]
    ) -> DiffStatistics:
        """Calculate diff statistics from aligned rows."""
        stats = DiffStatistics(hunk_count=len(hunks))

        for left_row, right_row in zip(left, right):
            if left_row.is_equal and right_row.is_equal:
                stats.unchanged_lines += 1
                continue
            if left_row.row_type == RowType.DELETE:
                stats.removed_lines += 1
            if right_row.row_type == RowType.INSERT:
                stats.added_lines += 1

        return stats


def compute_diff(
    left_text: str,
    right_text: str,
    ignore_whitespace: bool = False
) -> DiffComputation:
    """Compute the aligned diff of two texts."""
    options = TextCompareOptions(ignore_whitespace=ignore_whitespace)
    return TextDiffEngine(options).compute(left_text, right_text)

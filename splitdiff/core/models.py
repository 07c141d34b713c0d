"""
Core data models for the side-by-side diff engine.

This module defines all data structures used across the engine:
- Edit script models
- Aligned row and hunk models
- Display projection models
- Result containers and statistics

All models are designed to be:
- UI-agnostic (can be used with any frontend)
- Type-hinted for IDE support
- Immutable where practical
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional


# =============================================================================
# Enumerations
# =============================================================================

class EditType(Enum):
    """Type of operation in an edit script."""
    EQUAL = auto()      # Line present on both sides
    DELETE = auto()     # Line present only on the left
    INSERT = auto()     # Line present only on the right


class RowType(Enum):
    """Type of a row in the aligned or display sequence."""
    EQUAL = auto()      # Unchanged line, paired with an EQUAL row opposite
    DELETE = auto()     # Removed line (left side only)
    INSERT = auto()     # Added line (right side only)
    EMPTY = auto()      # Placeholder opposite an unmatched line
    COLLAPSED = auto()  # Synthetic row standing in for a folded run


# =============================================================================
# Edit Script Models
# =============================================================================

@dataclass(frozen=True)
class EditOperation:
    """
    A single step of an edit script.

    EQUAL operations carry the raw text of both sides, which may differ
    when lines were matched under a whitespace-insensitive key.
    """
    op_type: EditType
    left: Optional[str] = None
    right: Optional[str] = None

    @classmethod
    def equal(cls, left: str, right: str) -> EditOperation:
        return cls(EditType.EQUAL, left, right)

    @classmethod
    def delete(cls, left: str) -> EditOperation:
        return cls(EditType.DELETE, left, None)

    @classmethod
    def insert(cls, right: str) -> EditOperation:
        return cls(EditType.INSERT, None, right)

    @property
    def is_equal(self) -> bool:
        return self.op_type == EditType.EQUAL


# =============================================================================
# Aligned Row Models
# =============================================================================

@dataclass(frozen=True)
class AlignedRow:
    """
    One row of one side of the aligned sequence.

    Left and right aligned sequences always have the same length; the
    row at a given raw index on each side forms a visual pair.
    """
    row_type: RowType
    text: str
    line_number: Optional[int]  # 1-based, None for EMPTY rows
    raw_index: int              # 0-based position in the aligned sequence

    @property
    def is_equal(self) -> bool:
        return self.row_type == RowType.EQUAL

    @property
    def is_empty(self) -> bool:
        return self.row_type == RowType.EMPTY

    @property
    def is_change(self) -> bool:
        """True for DELETE and INSERT rows."""
        return self.row_type in (RowType.DELETE, RowType.INSERT)


@dataclass(frozen=True)
class Hunk:
    """
    A maximal contiguous span of aligned rows that are not equal-paired.

    The identifier is a pure function of the span and the first line
    numbers, so an unchanged span keeps its id across recomputation.
    """
    hunk_id: str
    start: int                       # First raw index (inclusive)
    end: int                         # Last raw index (inclusive)
    left_start_line: Optional[int]   # First left line number in span
    right_start_line: Optional[int]  # First right line number in span

    @staticmethod
    def make_id(
        start: int,
        end: int,
        left_start_line: Optional[int],
        right_start_line: Optional[int]
    ) -> str:
        """Build the deterministic hunk identifier."""
        left = left_start_line if left_start_line is not None else "n"
        right = right_start_line if right_start_line is not None else "n"
        return f"h-{left}-{right}-{start}-{end}"

    @property
    def size(self) -> int:
        """Number of aligned rows covered."""
        return self.end - self.start + 1

    def contains(self, raw_index: int) -> bool:
        return self.start <= raw_index <= self.end

    def iter_raw_indices(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))


# =============================================================================
# Display Models
# =============================================================================

@dataclass(frozen=True)
class DisplayRow:
    """
    A row of the display projection handed to a renderer.

    Either a pass-through copy of an aligned row, or a COLLAPSED row that
    summarizes the hidden raw range [raw_start, raw_end].
    """
    row_type: RowType
    text: str
    line_number: Optional[int]
    raw_index: int
    block_id: Optional[str] = None
    raw_start: Optional[int] = None
    raw_end: Optional[int] = None

    @classmethod
    def from_aligned(cls, row: AlignedRow) -> DisplayRow:
        return cls(
            row_type=row.row_type,
            text=row.text,
            line_number=row.line_number,
            raw_index=row.raw_index
        )

    @property
    def is_collapsed(self) -> bool:
        return self.row_type == RowType.COLLAPSED

    @property
    def hidden_count(self) -> int:
        """Number of raw rows folded into this row (0 if not collapsed)."""
        if not self.is_collapsed or self.raw_start is None or self.raw_end is None:
            return 0
        return self.raw_end - self.raw_start + 1


# =============================================================================
# Result Models
# =============================================================================

@dataclass
class DiffStatistics:
    """Statistics about a diff result."""
    total_lines_left: int = 0
    total_lines_right: int = 0
    added_lines: int = 0
    removed_lines: int = 0
    unchanged_lines: int = 0
    hunk_count: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added_lines + self.removed_lines

    @property
    def total_lines(self) -> int:
        """Line count of the longer side."""
        return max(self.total_lines_left, self.total_lines_right)

    @property
    def similarity_ratio(self) -> float:
        """
        Calculate similarity ratio (0.0 to 1.0).

        1.0 means identical, 0.0 means completely different.
        """
        total = self.total_lines
        if total == 0:
            return 1.0
        return self.unchanged_lines / total

    def __str__(self) -> str:
        return f"+{self.added_lines} -{self.removed_lines} ={self.unchanged_lines}"


@dataclass
class DiffComputation:
    """
    Complete result of one diff pass.

    Contains everything a presentation layer needs to render rows,
    jump between hunks and look up the hunk under any raw index.
    """
    aligned_left: list[AlignedRow] = field(default_factory=list)
    aligned_right: list[AlignedRow] = field(default_factory=list)
    hunks: list[Hunk] = field(default_factory=list)
    raw_to_hunk: list[Optional[str]] = field(default_factory=list)
    left_lines: list[str] = field(default_factory=list)
    right_lines: list[str] = field(default_factory=list)
    statistics: DiffStatistics = field(default_factory=DiffStatistics)

    @property
    def is_empty(self) -> bool:
        """True when neither side has any content."""
        return not self.left_lines and not self.right_lines

    @property
    def is_identical(self) -> bool:
        return not self.hunks

    @property
    def hunk_count(self) -> int:
        return len(self.hunks)

    @property
    def hunk_ids(self) -> set[str]:
        return {hunk.hunk_id for hunk in self.hunks}

    @property
    def row_count(self) -> int:
        return len(self.aligned_left)

    def hunk_index(self, hunk_id: Optional[str]) -> int:
        """Position of the hunk with the given id, or -1."""
        if hunk_id is None:
            return -1
        for index, hunk in enumerate(self.hunks):
            if hunk.hunk_id == hunk_id:
                return index
        return -1

    def hunk_at(self, raw_index: int) -> Optional[str]:
        """Hunk id covering a raw index, if any."""
        if 0 <= raw_index < len(self.raw_to_hunk):
            return self.raw_to_hunk[raw_index]
        return None


@dataclass
class DisplayPlan:
    """Display projection of an aligned diff."""
    display_left: list[DisplayRow] = field(default_factory=list)
    display_right: list[DisplayRow] = field(default_factory=list)
    raw_to_display: list[int] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.display_left)

    @property
    def collapsed_count(self) -> int:
        return sum(1 for row in self.display_left if row.is_collapsed)

    @property
    def block_ids(self) -> list[str]:
        """Ids of the blocks currently folded, in display order."""
        return [row.block_id for row in self.display_left
                if row.is_collapsed and row.block_id]

    def iter_pairs(self) -> Iterator[tuple[DisplayRow, DisplayRow]]:
        return zip(self.display_left, self.display_right)

"""
Plain-text side-by-side formatting of a display plan.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from splitdiff.core.models import DisplayPlan, DisplayRow, Hunk, RowType


class SideBySideFormatter:
    """Format display rows for terminal output."""

    COLORS = {
        RowType.DELETE: '\033[31m',     # Red
        RowType.INSERT: '\033[32m',     # Green
        RowType.COLLAPSED: '\033[36m',  # Cyan
    }
    RESET = '\033[0m'

    def __init__(
        self,
        width: int = 160,
        tab_size: int = 4,
        show_line_numbers: bool = True,
        use_colors: bool = False
    ):
        self.width = width
        self.tab_size = tab_size
        self.show_line_numbers = show_line_numbers
        self.use_colors = use_colors

    @property
    def column_width(self) -> int:
        """Width available to each pane."""
        return max(10, (self.width - 3) // 2)

    def format(self, plan: DisplayPlan) -> Iterator[tuple[str, str, str]]:
        """
        Format a plan for side-by-side display.

        Yields tuples of (left_line, separator, right_line)
        """
        for left, right in plan.iter_pairs():
            yield (
                self._format_row(left),
                self._separator(left, right),
                self._format_row(right)
            )

    def render(self, plan: DisplayPlan, active_rows: Optional[Sequence[int]] = None) -> str:
        """Render a plan as text, marking any active rows with '*'."""
        marked = set(active_rows or ())
        lines = []
        for index, (left, sep, right) in enumerate(self.format(plan)):
            marker = '*' if index in marked else ' '
            lines.append(f"{marker}{left}{sep}{right}".rstrip())
        return '\n'.join(lines)

    def format_hunk_list(self, hunks: Sequence[Hunk]) -> str:
        """One line per hunk: index, id, raw span and start lines."""
        lines = []
        for index, hunk in enumerate(hunks, start=1):
            left = hunk.left_start_line if hunk.left_start_line is not None else '-'
            right = hunk.right_start_line if hunk.right_start_line is not None else '-'
            lines.append(
                f"{index:4d}. {hunk.hunk_id}  rows {hunk.start}-{hunk.end}  "
                f"left {left}  right {right}"
            )
        return '\n'.join(lines)

    def _separator(self, left: DisplayRow, right: DisplayRow) -> str:
        if left.is_collapsed:
            return " ~ "
        if left.row_type == RowType.EQUAL and right.row_type == RowType.EQUAL:
            return "   "
        if right.row_type == RowType.EMPTY:
            return " < "
        if left.row_type == RowType.EMPTY:
            return " > "
        return " | "

    def _format_row(self, row: DisplayRow) -> str:
        """Format a single row with line number, padded to the pane width."""
        content = row.text.replace('\t', ' ' * self.tab_size)

        if self.show_line_numbers and not row.is_collapsed:
            number = f"{row.line_number:5d} " if row.line_number is not None else " " * 6
        else:
            number = ""

        max_content = self.column_width - len(number)
        if len(content) > max_content:
            content = content[:max(0, max_content - 3)] + "..."

        cell = f"{number}{content}".ljust(self.column_width)

        color = self.COLORS.get(row.row_type) if self.use_colors else None
        if color:
            return f"{color}{cell}{self.RESET}"
        return cell

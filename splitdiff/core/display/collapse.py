"""
Collapse planner.

Projects aligned rows into display rows, folding long runs of unchanged
lines into a single placeholder row while keeping a few context rows
visible on each side of the fold.
"""

from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

from splitdiff.core.models import AlignedRow, DisplayPlan, DisplayRow, RowType


COLLAPSE_CONTEXT = 2
COLLAPSE_MIN = COLLAPSE_CONTEXT * 2 + 4


def block_id_for(start: int, end: int) -> str:
    """Identifier of the equal run spanning raw indices [start, end]."""
    return f"block-{start}-{end}"


def equal_run_ids(
    aligned_left: Sequence[AlignedRow],
    aligned_right: Sequence[AlignedRow]
) -> set[str]:
    """Block ids of every maximal equal-paired run."""
    ids: set[str] = set()
    total = len(aligned_left)
    i = 0
    while i < total:
        if not (aligned_left[i].is_equal and aligned_right[i].is_equal):
            i += 1
            continue
        start = i
        while i < total and aligned_left[i].is_equal and aligned_right[i].is_equal:
            i += 1
        ids.add(block_id_for(start, i - 1))
    return ids


def collapsed_label(hidden_count: int) -> str:
    """Label text shown on a collapsed row."""
    noun = "line" if hidden_count == 1 else "lines"
    return f"... {hidden_count} unchanged {noun} (click to expand)"


class CollapsePlanner:
    """
    Builds display projections of aligned diffs.

    Attributes:
        context: Rows kept visible at each end of a folded run
        min_run: Shortest equal run that may be folded
    """

    def __init__(self, context: int = COLLAPSE_CONTEXT):
        if context < 0:
            raise ValueError(f"context must be non-negative, got {context}")
        self.context = context
        self.min_run = context * 2 + 4

    def plan(
        self,
        aligned_left: Sequence[AlignedRow],
        aligned_right: Sequence[AlignedRow],
        collapse_enabled: bool,
        expanded_block_ids: Optional[AbstractSet[str]] = None
    ) -> DisplayPlan:
        """
        Produce the display rows for both sides.

        Args:
            aligned_left: Left aligned rows
            aligned_right: Right aligned rows (same length)
            collapse_enabled: Whether long equal runs may be folded
            expanded_block_ids: Blocks the caller has unfolded (read only)

        Returns:
            DisplayPlan with both sides and the raw-to-display map
        """
        expanded = expanded_block_ids or frozenset()
        plan = DisplayPlan(raw_to_display=[0] * len(aligned_left))
        total = len(aligned_left)
        i = 0

        while i < total:
            if not (aligned_left[i].is_equal and aligned_right[i].is_equal):
                self._emit(plan, aligned_left, aligned_right, i, i)
                i += 1
                continue

            start = i
            while i < total and aligned_left[i].is_equal and aligned_right[i].is_equal:
                i += 1
            end = i - 1

            block_id = block_id_for(start, end)
            if (not collapse_enabled
                    or end - start + 1 < self.min_run
                    or block_id in expanded):
                self._emit(plan, aligned_left, aligned_right, start, end)
                continue

            head_end = start + self.context - 1
            tail_start = end - self.context + 1
            self._emit(plan, aligned_left, aligned_right, start, head_end)
            self._emit_collapsed(plan, block_id, head_end + 1, tail_start - 1)
            self._emit(plan, aligned_left, aligned_right, tail_start, end)

        return plan

    def _emit(
        self,
        plan: DisplayPlan,
        aligned_left: Sequence[AlignedRow],
        aligned_right: Sequence[AlignedRow],
        start: int,
        end: int
    ) -> None:
        """Pass rows [start, end] through unchanged."""
        for k in range(start, end + 1):
            plan.raw_to_display[k] = len(plan.display_left)
            plan.display_left.append(DisplayRow.from_aligned(aligned_left[k]))
            plan.display_right.append(DisplayRow.from_aligned(aligned_right[k]))

    def _emit_collapsed(
        self,
        plan: DisplayPlan,
        block_id: str,
        hidden_start: int,
        hidden_end: int
    ) -> None:
        """Emit one placeholder per side for the hidden range."""
        hidden_count = hidden_end - hidden_start + 1
        label = collapsed_label(hidden_count)
        display_index = len(plan.display_left)

        # Separate instances per side so the panes stay independent
        for side in (plan.display_left, plan.display_right):
            side.append(DisplayRow(
                row_type=RowType.COLLAPSED,
                text=label,
                line_number=None,
                raw_index=hidden_start,
                block_id=block_id,
                raw_start=hidden_start,
                raw_end=hidden_end
            ))

        for k in range(hidden_start, hidden_end + 1):
            plan.raw_to_display[k] = display_index


def plan_display(
    aligned_left: Sequence[AlignedRow],
    aligned_right: Sequence[AlignedRow],
    collapse_enabled: bool,
    expanded_block_ids: Optional[AbstractSet[str]] = None,
    context: int = COLLAPSE_CONTEXT
) -> DisplayPlan:
    """Fold long unchanged runs of an aligned diff for display."""
    planner = CollapsePlanner(context)
    return planner.plan(aligned_left, aligned_right, collapse_enabled, expanded_block_ids)

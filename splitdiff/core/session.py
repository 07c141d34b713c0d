"""
Diff session state.

Holds the caller-side state around the stateless engine: the two texts,
option toggles, unfolded blocks, reviewed hunks, the active hunk and the
search position. Every change triggers a full recompute through
``refresh``; the engine itself never sees or mutates this state.

A session has a single owner and is not thread-safe.
"""

from __future__ import annotations

import logging
from typing import Optional

from splitdiff.core.diff.text_diff import TextCompareOptions, TextDiffEngine
from splitdiff.core.display.collapse import COLLAPSE_CONTEXT, CollapsePlanner, equal_run_ids
from splitdiff.core.display.search import SearchState
from splitdiff.core.models import DiffComputation, DisplayPlan, Hunk


EMPTY_PROMPT = "Load text on either side to get started."


class DiffSession:
    """
    Stateful controller for one left/right comparison.
    """

    def __init__(
        self,
        left_text: str = "",
        right_text: str = "",
        ignore_whitespace: bool = False,
        collapse_unchanged: bool = False,
        context: int = COLLAPSE_CONTEXT,
        left_name: str = "Left",
        right_name: str = "Right"
    ):
        self.left_text = left_text
        self.right_text = right_text
        self.left_name = left_name
        self.right_name = right_name
        self.ignore_whitespace = ignore_whitespace
        self.collapse_unchanged = collapse_unchanged
        self.planner = CollapsePlanner(context)

        self.expanded_blocks: set[str] = set()
        self.reviewed: set[str] = set()
        self.active_hunk_index = -1
        self.active_hunk_id: Optional[str] = None
        self.search = SearchState()

        self.computation = DiffComputation()
        self.plan = DisplayPlan()
        self.refresh()

    # -------------------------------------------------------------------------
    # Recompute
    # -------------------------------------------------------------------------

    @property
    def engine(self) -> TextDiffEngine:
        return TextDiffEngine(TextCompareOptions(ignore_whitespace=self.ignore_whitespace))

    @property
    def hunks(self) -> list[Hunk]:
        return self.computation.hunks

    @property
    def is_empty(self) -> bool:
        return not self.left_text and not self.right_text

    def refresh(self) -> None:
        """Recompute the diff and display plan from the current state."""
        if self.is_empty:
            self.computation = DiffComputation()
            self.plan = DisplayPlan()
            self.expanded_blocks.clear()
            self.active_hunk_index = -1
            self.active_hunk_id = None
            self.search.update([], [], keep_active=False)
            logging.debug("DiffSession - Both sides empty, nothing to compare")
            return

        self.computation = self.engine.compute(self.left_text, self.right_text)
        self.expanded_blocks &= equal_run_ids(
            self.computation.aligned_left, self.computation.aligned_right
        )
        self.plan = self.planner.plan(
            self.computation.aligned_left,
            self.computation.aligned_right,
            self.collapse_unchanged,
            self.expanded_blocks
        )

        current_ids = self.computation.hunk_ids
        stale = self.reviewed - current_ids
        if stale:
            logging.debug(f"DiffSession - Dropping {len(stale)} stale reviewed hunk id(s)")
        self.reviewed &= current_ids

        self._restore_active_hunk()
        self.search.update(self.plan.display_left, self.plan.display_right, keep_active=True)

        logging.debug(
            f"DiffSession - Refreshed: {self.computation.hunk_count} hunks, "
            f"{self.plan.row_count} display rows, {self.search.count} matches"
        )

    def _restore_active_hunk(self) -> None:
        """Keep the active hunk by id, else by position, else the first."""
        hunks = self.computation.hunks
        if not hunks:
            self.active_hunk_index = -1
            self.active_hunk_id = None
            return

        if self.active_hunk_id is not None:
            desired = self.computation.hunk_index(self.active_hunk_id)
        else:
            desired = self.active_hunk_index

        if desired < 0 or desired >= len(hunks):
            desired = 0
        self.active_hunk_index = desired
        self.active_hunk_id = hunks[desired].hunk_id

    # -------------------------------------------------------------------------
    # Inputs and options
    # -------------------------------------------------------------------------

    def set_texts(self, left_text: str, right_text: str) -> None:
        self.left_text = left_text
        self.right_text = right_text
        self.expanded_blocks.clear()
        self.refresh()

    def set_left_text(self, text: str, name: Optional[str] = None) -> None:
        self.left_text = text
        if name:
            self.left_name = name
        self.expanded_blocks.clear()
        self.refresh()

    def set_right_text(self, text: str, name: Optional[str] = None) -> None:
        self.right_text = text
        if name:
            self.right_name = name
        self.expanded_blocks.clear()
        self.refresh()

    def set_ignore_whitespace(self, enabled: bool) -> None:
        self.ignore_whitespace = enabled
        self.refresh()

    def set_collapse_unchanged(self, enabled: bool) -> None:
        """Toggle folding; turning it off forgets every unfolded block."""
        self.collapse_unchanged = enabled
        if not enabled:
            self.expanded_blocks.clear()
        self.refresh()

    def expand_block(self, block_id: str) -> bool:
        """
        Unfold a collapsed block.

        Returns:
            True if the block was folded and is now expanded
        """
        if block_id not in self.plan.block_ids:
            return False
        self.expanded_blocks.add(block_id)
        self.refresh()
        return True

    def swap_sides(self) -> None:
        self.left_text, self.right_text = self.right_text, self.left_text
        self.left_name, self.right_name = self.right_name, self.left_name
        self.expanded_blocks.clear()
        self.refresh()

    def clear(self) -> None:
        """Reset both sides and all per-comparison state."""
        self.left_text = ""
        self.right_text = ""
        self.expanded_blocks.clear()
        self.reviewed.clear()
        self.active_hunk_index = -1
        self.active_hunk_id = None
        self.refresh()

    # -------------------------------------------------------------------------
    # Hunk navigation and review
    # -------------------------------------------------------------------------

    @property
    def active_hunk(self) -> Optional[Hunk]:
        if 0 <= self.active_hunk_index < len(self.hunks):
            return self.hunks[self.active_hunk_index]
        return None

    def set_active_hunk(self, index: int) -> Optional[Hunk]:
        """Activate a hunk by position, clamped to the valid range."""
        if not self.hunks:
            return None
        clamped = max(0, min(index, len(self.hunks) - 1))
        self.active_hunk_index = clamped
        self.active_hunk_id = self.hunks[clamped].hunk_id
        return self.hunks[clamped]

    def first_hunk(self) -> Optional[Hunk]:
        return self.set_active_hunk(0)

    def last_hunk(self) -> Optional[Hunk]:
        return self.set_active_hunk(len(self.hunks) - 1)

    def next_hunk(self) -> Optional[Hunk]:
        return self.set_active_hunk(self.active_hunk_index + 1)

    def previous_hunk(self) -> Optional[Hunk]:
        return self.set_active_hunk(self.active_hunk_index - 1)

    def toggle_reviewed(self) -> Optional[bool]:
        """
        Flip the reviewed mark of the active hunk.

        Returns:
            New reviewed state, or None when there is no active hunk
        """
        hunk = self.active_hunk
        if hunk is None:
            return None
        if hunk.hunk_id in self.reviewed:
            self.reviewed.discard(hunk.hunk_id)
            return False
        self.reviewed.add(hunk.hunk_id)
        return True

    def is_reviewed(self, hunk_id: str) -> bool:
        return hunk_id in self.reviewed

    @property
    def reviewed_count(self) -> int:
        return len(self.reviewed)

    # -------------------------------------------------------------------------
    # Row lookups
    # -------------------------------------------------------------------------

    def hunk_for_display_row(self, display_index: int) -> Optional[Hunk]:
        """Hunk under a display row; collapsed rows never belong to a hunk."""
        if not 0 <= display_index < self.plan.row_count:
            return None
        row = self.plan.display_left[display_index]
        if row.is_collapsed:
            return None
        hunk_index = self.computation.hunk_index(self.computation.hunk_at(row.raw_index))
        return self.hunks[hunk_index] if hunk_index >= 0 else None

    def display_index_for_hunk(self, hunk: Hunk) -> Optional[int]:
        """First display row showing any part of the hunk."""
        raw_to_display = self.plan.raw_to_display
        for raw_index in hunk.iter_raw_indices():
            if raw_index < len(raw_to_display):
                return raw_to_display[raw_index]
        return None

    def activate_row(self, display_index: int) -> Optional[Hunk]:
        """
        Handle a click on a display row.

        A collapsed row is unfolded; any other row makes the hunk under
        it active.
        """
        if not 0 <= display_index < self.plan.row_count:
            return None

        row = self.plan.display_left[display_index]
        if row.is_collapsed and row.block_id:
            self.expand_block(row.block_id)
            return None

        hunk = self.hunk_for_display_row(display_index)
        if hunk is not None:
            self.set_active_hunk(self.computation.hunk_index(hunk.hunk_id))
        return hunk

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def set_search_query(self, query: str) -> list[int]:
        self.search.update(
            self.plan.display_left, self.plan.display_right, query, keep_active=False
        )
        return self.search.rows

    def next_match(self) -> Optional[int]:
        return self.search.next()

    def previous_match(self) -> Optional[int]:
        return self.search.previous()

    # -------------------------------------------------------------------------
    # Status text
    # -------------------------------------------------------------------------

    @property
    def summary_text(self) -> str:
        if self.is_empty:
            return EMPTY_PROMPT
        stats = self.computation.statistics
        return (
            f"Lines: {stats.total_lines} · +{stats.added_lines} added · "
            f"-{stats.removed_lines} removed"
        )

    @property
    def hunk_status(self) -> str:
        if not self.hunks:
            return "No changes"
        index = max(self.active_hunk_index, 0)
        hunk = self.hunks[index]
        state = "Reviewed" if hunk.hunk_id in self.reviewed else "Unreviewed"
        return f"Hunk {index + 1}/{len(self.hunks)} · {state}"

    @property
    def search_status(self) -> str:
        if self.search.query.strip() and not self.search.has_matches:
            return "No matches"
        return self.search.status()

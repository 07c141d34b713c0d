"""
Search over display rows.

Finds the display rows whose text contains a query, case-insensitively,
on either side. Collapsed placeholder rows are never searchable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from splitdiff.core.models import DisplayRow


def normalize_query(query: str) -> str:
    return query.strip().casefold()


def find_matches(
    display_left: Sequence[DisplayRow],
    display_right: Sequence[DisplayRow],
    query: str
) -> list[int]:
    """
    Return display indices where either side contains the query.

    Args:
        display_left: Left display rows
        display_right: Right display rows
        query: Text to look for (whitespace-trimmed, case-insensitive)

    Returns:
        Ascending list of matching display indices
    """
    needle = normalize_query(query)
    if not needle:
        return []

    rows: list[int] = []
    for index, (left, right) in enumerate(zip(display_left, display_right)):
        if left.is_collapsed or right.is_collapsed:
            continue
        if needle in left.text.casefold() or needle in right.text.casefold():
            rows.append(index)
    return rows


@dataclass
class SearchState:
    """Search matches plus the active match position."""
    query: str = ""
    rows: list[int] = field(default_factory=list)
    active_index: int = -1

    @property
    def count(self) -> int:
        return len(self.rows)

    @property
    def has_matches(self) -> bool:
        return len(self.rows) > 0

    @property
    def active_row(self) -> Optional[int]:
        """Display index of the active match."""
        if 0 <= self.active_index < len(self.rows):
            return self.rows[self.active_index]
        return None

    def update(
        self,
        display_left: Sequence[DisplayRow],
        display_right: Sequence[DisplayRow],
        query: Optional[str] = None,
        keep_active: bool = False
    ) -> None:
        """
        Recompute matches against a new display projection.

        With keep_active the current position survives unless it is now
        out of range; otherwise the first match becomes active.
        """
        if query is not None:
            self.query = query
        self.rows = find_matches(display_left, display_right, self.query)

        if not keep_active or self.active_index >= len(self.rows) or self.active_index < 0:
            self.active_index = 0 if self.rows else -1

    def next(self) -> Optional[int]:
        """Advance to the next match, wrapping around."""
        if not self.rows:
            return None
        self.active_index = (self.active_index + 1) % len(self.rows)
        return self.active_row

    def previous(self) -> Optional[int]:
        """Step back to the previous match, wrapping around."""
        if not self.rows:
            return None
        self.active_index = (self.active_index - 1) % len(self.rows)
        return self.active_row

    def status(self) -> str:
        current = self.active_index + 1 if self.rows else 0
        return f"{current}/{len(self.rows)}"

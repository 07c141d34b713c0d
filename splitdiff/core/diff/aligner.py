"""
Side-by-side aligner.

Turns an edit script into two parallel row sequences of equal length.
A run of changes is laid out as paired rows, deletes on the left and
inserts on the right, with EMPTY placeholders padding the shorter side.
"""

from __future__ import annotations

from typing import Sequence

from splitdiff.core.models import AlignedRow, EditOperation, EditType, RowType


class Aligner:
    """Builds aligned left/right rows with per-side line numbers."""

    def __init__(self):
        self.left: list[AlignedRow] = []
        self.right: list[AlignedRow] = []
        self._left_line = 0
        self._right_line = 0

    def align(
        self,
        operations: Sequence[EditOperation]
    ) -> tuple[list[AlignedRow], list[AlignedRow]]:
        """
        Align an edit script.

        Args:
            operations: Chronologically ordered edit operations

        Returns:
            Tuple of (left_rows, right_rows), always the same length
        """
        i = 0
        total = len(operations)

        while i < total:
            op = operations[i]
            if op.op_type == EditType.EQUAL:
                self._append_equal(op)
                i += 1
                continue

            deletes: list[str] = []
            inserts: list[str] = []
            while i < total and operations[i].op_type != EditType.EQUAL:
                if operations[i].op_type == EditType.DELETE:
                    deletes.append(operations[i].left)
                else:
                    inserts.append(operations[i].right)
                i += 1

            self._append_change_block(deletes, inserts)

        return self.left, self.right

    def _append_equal(self, op: EditOperation) -> None:
        raw_index = len(self.left)
        self._left_line += 1
        self._right_line += 1
        self.left.append(AlignedRow(RowType.EQUAL, op.left, self._left_line, raw_index))
        self.right.append(AlignedRow(RowType.EQUAL, op.right, self._right_line, raw_index))

    def _append_change_block(self, deletes: list[str], inserts: list[str]) -> None:
        """Interleave deletes and inserts row by row, padding with EMPTY."""
        for k in range(max(len(deletes), len(inserts))):
            raw_index = len(self.left)

            if k < len(deletes):
                self._left_line += 1
                self.left.append(AlignedRow(
                    RowType.DELETE, deletes[k], self._left_line, raw_index
                ))
            else:
                self.left.append(AlignedRow(RowType.EMPTY, "", None, raw_index))

            if k < len(inserts):
                self._right_line += 1
                self.right.append(AlignedRow(
                    RowType.INSERT, inserts[k], self._right_line, raw_index
                ))
            else:
                self.right.append(AlignedRow(RowType.EMPTY, "", None, raw_index))


def align_operations(
    operations: Sequence[EditOperation]
) -> tuple[list[AlignedRow], list[AlignedRow]]:
    """Align an edit script into (left_rows, right_rows)."""
    return Aligner().align(operations)

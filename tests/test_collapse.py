import unittest

from splitdiff import compute_diff, plan_display
from splitdiff.core.display.collapse import (
    COLLAPSE_CONTEXT,
    COLLAPSE_MIN,
    CollapsePlanner,
    block_id_for,
    collapsed_label,
    equal_run_ids,
)
from splitdiff.core.models import RowType


def numbered(count, prefix="line"):
    return "\n".join(f"{prefix} {i}" for i in range(count))


class TestCollapsePlanner(unittest.TestCase):
    def test_constants(self):
        self.assertEqual(COLLAPSE_CONTEXT, 2)
        self.assertEqual(COLLAPSE_MIN, 8)
        self.assertEqual(CollapsePlanner(3).min_run, 10)

    def test_disabled_passes_everything_through(self):
        diff = compute_diff(numbered(20), numbered(20))
        plan = plan_display(diff.aligned_left, diff.aligned_right, False, set())
        self.assertEqual(plan.row_count, 20)
        self.assertEqual(plan.raw_to_display, list(range(20)))
        self.assertEqual(plan.collapsed_count, 0)

    def test_long_run_before_appended_line(self):
        base = numbered(20)
        diff = compute_diff(base, base + "\nextra")
        plan = plan_display(diff.aligned_left, diff.aligned_right, True, set())

        # 2 head + 1 collapsed + 2 tail for the run, then the inserted row
        self.assertEqual(plan.row_count, 6)
        collapsed = plan.display_left[2]
        self.assertTrue(collapsed.is_collapsed)
        self.assertEqual(collapsed.block_id, "block-0-19")
        self.assertEqual((collapsed.raw_start, collapsed.raw_end), (2, 17))
        self.assertEqual(collapsed.hidden_count, 16)
        self.assertEqual(collapsed.text, "... 16 unchanged lines (click to expand)")
        self.assertEqual(plan.raw_to_display, [0, 1] + [2] * 16 + [3, 4, 5])
        self.assertEqual(plan.display_right[5].row_type, RowType.INSERT)

    def test_both_sides_get_separate_collapsed_rows(self):
        diff = compute_diff(numbered(10), numbered(10))
        plan = plan_display(diff.aligned_left, diff.aligned_right, True, set())
        self.assertEqual(plan.display_left[2], plan.display_right[2])
        self.assertIsNot(plan.display_left[2], plan.display_right[2])

    def test_threshold(self):
        for length in range(1, 12):
            with self.subTest(length=length):
                diff = compute_diff(numbered(length), numbered(length) + "\nextra")
                plan = plan_display(diff.aligned_left, diff.aligned_right, True, set())
                if length >= COLLAPSE_MIN:
                    self.assertEqual(plan.row_count, 2 * COLLAPSE_CONTEXT + 1 + 1)
                else:
                    self.assertEqual(plan.row_count, length + 1)
                    self.assertEqual(plan.collapsed_count, 0)

    def test_runs_between_changes_fold_independently(self):
        left = numbered(10, "a") + "\nold\n" + numbered(12, "b")
        right = numbered(10, "a") + "\nnew\n" + numbered(12, "b")
        diff = compute_diff(left, right)
        plan = plan_display(diff.aligned_left, diff.aligned_right, True, set())

        self.assertEqual(plan.block_ids, ["block-0-9", "block-11-22"])
        self.assertEqual(plan.row_count, 5 + 1 + 5)

    def test_every_raw_index_maps_to_one_display_row(self):
        left = numbered(30) + "\nx\n" + numbered(3)
        right = numbered(30) + "\ny\nz\n" + numbered(3)
        diff = compute_diff(left, right)
        plan = plan_display(diff.aligned_left, diff.aligned_right, True, set())

        self.assertEqual(len(plan.raw_to_display), len(diff.aligned_left))
        for raw_index, display_index in enumerate(plan.raw_to_display):
            row = plan.display_left[display_index]
            if row.is_collapsed:
                self.assertTrue(row.raw_start <= raw_index <= row.raw_end)
            else:
                self.assertEqual(row.raw_index, raw_index)

    def test_expand_and_fold_round_trip(self):
        diff = compute_diff(numbered(15), numbered(15) + "\nextra")
        folded = plan_display(diff.aligned_left, diff.aligned_right, True, set())
        block_id = folded.block_ids[0]
        self.assertEqual(block_id, block_id_for(0, 14))

        expanded = plan_display(diff.aligned_left, diff.aligned_right, True, {block_id})
        self.assertEqual(expanded.collapsed_count, 0)
        self.assertEqual(
            [(r.row_type, r.text, r.line_number) for r in expanded.display_left],
            [(r.row_type, r.text, r.line_number) for r in diff.aligned_left]
        )
        self.assertEqual(expanded.raw_to_display, list(range(len(diff.aligned_left))))

        again = plan_display(diff.aligned_left, diff.aligned_right, True, {block_id})
        self.assertEqual(again, expanded)

        refolded = plan_display(diff.aligned_left, diff.aligned_right, True, set())
        self.assertEqual(refolded, folded)

    def test_unknown_expanded_ids_are_ignored(self):
        diff = compute_diff(numbered(15), numbered(15))
        plan = plan_display(diff.aligned_left, diff.aligned_right, True, {"block-3-4"})
        self.assertEqual(plan.collapsed_count, 1)

    def test_empty_input(self):
        plan = plan_display([], [], True, set())
        self.assertEqual(plan.row_count, 0)
        self.assertEqual(plan.raw_to_display, [])

    def test_label_singular(self):
        self.assertEqual(collapsed_label(1), "... 1 unchanged line (click to expand)")

    def test_custom_context(self):
        diff = compute_diff(numbered(20), numbered(20))
        plan = CollapsePlanner(context=0).plan(diff.aligned_left, diff.aligned_right, True)
        self.assertEqual(plan.row_count, 1)
        self.assertEqual(plan.display_left[0].hidden_count, 20)

    def test_negative_context_rejected(self):
        with self.assertRaises(ValueError):
            CollapsePlanner(context=-1)

    def test_equal_run_ids_include_short_runs(self):
        diff = compute_diff("a\nb\nc\nd", "a\nx\nc\nd")
        self.assertEqual(
            equal_run_ids(diff.aligned_left, diff.aligned_right),
            {"block-0-0", "block-2-3"}
        )
        self.assertEqual(equal_run_ids([], []), set())


if __name__ == '__main__':
    unittest.main()

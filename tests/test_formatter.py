import unittest

from splitdiff import compute_diff, plan_display
from splitdiff.core.display.formatter import SideBySideFormatter


def build_plan(left, right, collapse=False):
    diff = compute_diff(left, right)
    return diff, plan_display(diff.aligned_left, diff.aligned_right, collapse)


class TestSideBySideFormatter(unittest.TestCase):
    def setUp(self):
        self.formatter = SideBySideFormatter(width=40)

    def test_column_width(self):
        self.assertEqual(self.formatter.column_width, 18)
        self.assertEqual(SideBySideFormatter(width=5).column_width, 10)

    def test_separators(self):
        _, plan = build_plan("a\nb\nc", "a\nx")
        rows = list(self.formatter.format(plan))

        self.assertEqual([sep for _, sep, _ in rows], ["   ", " | ", " < "])
        self.assertEqual(rows[0][0], "    1 a".ljust(18))
        self.assertEqual(rows[2][2], " " * 18)

        _, plan = build_plan("a", "a\nb")
        self.assertEqual(list(self.formatter.format(plan))[1][1], " > ")

    def test_collapsed_separator(self):
        text = "\n".join(f"line {i}" for i in range(12))
        _, plan = build_plan(text, text + "\nmore", collapse=True)
        separators = [sep for _, sep, _ in self.formatter.format(plan)]
        self.assertEqual(separators.count(" ~ "), 1)

    def test_long_lines_are_truncated(self):
        _, plan = build_plan("x" * 30, "x" * 30)
        left, _, _ = next(self.formatter.format(plan))
        self.assertEqual(left, "    1 " + "x" * 9 + "...")

    def test_tabs_expand(self):
        formatter = SideBySideFormatter(width=40, tab_size=2, show_line_numbers=False)
        _, plan = build_plan("\tx", "\tx")
        left, _, _ = next(formatter.format(plan))
        self.assertEqual(left, "  x".ljust(18))

    def test_render_marks_active_rows(self):
        _, plan = build_plan("a\nb", "a\nc")
        lines = self.formatter.render(plan, active_rows=[1]).split("\n")
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith(" "))
        self.assertTrue(lines[1].startswith("*"))
        self.assertEqual(lines[1], "*    2 b" + " " * 12 + "|     2 c")

    def test_colors(self):
        formatter = SideBySideFormatter(width=40, use_colors=True)
        _, plan = build_plan("a\nb", "a\nc")
        rows = list(formatter.format(plan))
        self.assertEqual(rows[0][0], "    1 a".ljust(18))
        self.assertTrue(rows[1][0].startswith('\033[31m'))
        self.assertTrue(rows[1][2].startswith('\033[32m'))
        self.assertTrue(rows[1][2].endswith(SideBySideFormatter.RESET))

    def test_hunk_list(self):
        diff, _ = build_plan("a\nb", "a")
        self.assertEqual(
            self.formatter.format_hunk_list(diff.hunks),
            "   1. h-2-n-1-1  rows 1-1  left 2  right -"
        )
        self.assertEqual(self.formatter.format_hunk_list([]), "")


if __name__ == '__main__':
    unittest.main()

"""
SplitDiff: side-by-side line diff engine.

Public entry points:
- compute_diff: align two texts and group changes into hunks
- plan_display: fold long unchanged runs for display
- find_matches: case-insensitive search over display rows
"""

__version__ = "1.0.0"

from splitdiff.core.diff.text_diff import compute_diff
from splitdiff.core.display.collapse import plan_display
from splitdiff.core.display.search import find_matches

__all__ = [
    '__version__',
    'compute_diff',
    'plan_display',
    'find_matches',
]

"""
Diff module for text comparison.

Provides:
- Tokenizer (line splitting with line ending normalization)
- LCS sequence matcher
- Side-by-side aligner
- Hunk builder
"""

from splitdiff.core.diff.tokenizer import (
    normalize_line_endings,
    split_lines,
    tokenize,
)
from splitdiff.core.diff.text_diff import (
    TextDiffEngine,
    TextCompareOptions,
    compute_diff,
    lcs_edit_script,
)
from splitdiff.core.diff.aligner import align_operations
from splitdiff.core.diff.hunks import build_hunk_map, build_hunks

__all__ = [
    # Tokenizer
    'normalize_line_endings',
    'split_lines',
    'tokenize',
    # Matcher
    'TextDiffEngine',
    'TextCompareOptions',
    'compute_diff',
    'lcs_edit_script',
    # Alignment and hunks
    'align_operations',
    'build_hunk_map',
    'build_hunks',
]

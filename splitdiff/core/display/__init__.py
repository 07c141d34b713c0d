"""
Display projection: folding, search and text formatting.
"""

from splitdiff.core.display.collapse import (
    COLLAPSE_CONTEXT,
    COLLAPSE_MIN,
    CollapsePlanner,
    equal_run_ids,
    plan_display,
)
from splitdiff.core.display.search import SearchState, find_matches
from splitdiff.core.display.formatter import SideBySideFormatter

__all__ = [
    'COLLAPSE_CONTEXT',
    'COLLAPSE_MIN',
    'CollapsePlanner',
    'equal_run_ids',
    'plan_display',
    'SearchState',
    'find_matches',
    'SideBySideFormatter',
]

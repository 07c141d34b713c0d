"""
Core diff engine: stateless functions and their data models.
"""

from splitdiff.core.diff import (
    TextDiffEngine,
    TextCompareOptions,
    compute_diff,
)
from splitdiff.core.display import (
    CollapsePlanner,
    SearchState,
    find_matches,
    plan_display,
)
from splitdiff.core.models import (
    AlignedRow,
    DiffComputation,
    DiffStatistics,
    DisplayPlan,
    DisplayRow,
    EditOperation,
    EditType,
    Hunk,
    RowType,
)

__all__ = [
    'TextDiffEngine',
    'TextCompareOptions',
    'compute_diff',
    'CollapsePlanner',
    'SearchState',
    'find_matches',
    'plan_display',
    'AlignedRow',
    'DiffComputation',
    'DiffStatistics',
    'DisplayPlan',
    'DisplayRow',
    'EditOperation',
    'EditType',
    'Hunk',
    'RowType',
]

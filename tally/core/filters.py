"""
FILE: tally/core/filters.py
PURPOSE: View filtering of the task collection (all / pending / completed)
EXPORTS:
  - apply_filter(mode, tasks) -> List[Task]
  - normalize_filter(mode) -> str
  - FilterSelector (holds the active mode)
DEPENDENCIES:
  - tally.core.models (Task)
  - tally.core.constants (filter modes)
  - tally.core.exceptions (InvalidFilterError)
NOTES:
  - apply_filter is pure and preserves source order
  - Active mode is transient UI state, never persisted
"""

from typing import List

from .constants import (
    VALID_FILTERS,
    DEFAULT_FILTER,
    FILTER_PENDING,
    FILTER_COMPLETED,
)
from .exceptions import InvalidFilterError
from .models import Task


def normalize_filter(mode: str) -> str:
    """
    Validate a filter mode name (case-insensitive).

    Raises:
        InvalidFilterError: If mode isn't all, pending or completed
    """
    normalized = (mode or "").strip().lower()
    if normalized not in VALID_FILTERS:
        raise InvalidFilterError(mode)
    return normalized


def apply_filter(mode: str, tasks: List[Task]) -> List[Task]:
    """
    Return the tasks visible under a filter mode.

    Args:
        mode: One of VALID_FILTERS
        tasks: Source collection

    Returns:
        New list; 'all' keeps every task, 'pending' keeps incomplete
        tasks, 'completed' keeps completed ones. Order is preserved.
    """
    mode = normalize_filter(mode)
    if mode == FILTER_PENDING:
        return [t for t in tasks if not t.completed]
    if mode == FILTER_COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


class FilterSelector:
    """Active filter mode for the task list view."""

    def __init__(self, mode: str = DEFAULT_FILTER):
        self.mode = normalize_filter(mode)

    def set_filter(self, mode: str) -> str:
        self.mode = normalize_filter(mode)
        return self.mode

    def apply(self, tasks: List[Task]) -> List[Task]:
        return apply_filter(self.mode, tasks)

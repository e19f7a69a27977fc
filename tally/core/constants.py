"""
FILE: tally/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - STORAGE_KEY: Fixed key the task collection is stored under
  - FILTER_ALL, FILTER_PENDING, FILTER_COMPLETED: Filter modes
  - VALID_FILTERS: All filter modes, in display order
  - DEFAULT_FILTER: Filter mode on startup
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Alert titles/messages live on the exception classes
"""

# Persistence
STORAGE_KEY = "tasks"

# Filter modes
FILTER_ALL = "all"
FILTER_PENDING = "pending"
FILTER_COMPLETED = "completed"
VALID_FILTERS = (FILTER_ALL, FILTER_PENDING, FILTER_COMPLETED)
DEFAULT_FILTER = FILTER_ALL

# Screen text
HEADER_TEXT = "Task Manager"
INPUT_PLACEHOLDER = "What needs to be done?"
EMPTY_STATE_TEXT = "No tasks found"

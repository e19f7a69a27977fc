"""
FILE: tally/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TallyError (base exception)
  - LoadFailure
  - SaveFailure
  - InvalidInputError
  - EmptyInput
  - InvalidFilterError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TallyError for easy catching
  - Each carries the alert title/message shown to the user
  - Core layer raises these, UI layers catch and display
"""


class TallyError(Exception):
    """Base exception for all Tally errors."""

    title = "Error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LoadFailure(TallyError):
    """Stored tasks could not be read or decoded."""

    def __init__(self, message: str = "Failed to load tasks"):
        super().__init__(message)


class SaveFailure(TallyError):
    """Task collection could not be written."""

    def __init__(self, message: str = "Failed to save tasks"):
        super().__init__(message)


class InvalidInputError(TallyError):
    """Input validation failed."""
    pass


class EmptyInput(InvalidInputError):
    """Task title was blank or whitespace-only."""

    title = "Oops!"

    def __init__(self, message: str = "Task cannot be empty"):
        super().__init__(message)


class InvalidFilterError(InvalidInputError):
    """Filter mode isn't one of all/pending/completed."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"Invalid filter '{mode}'")

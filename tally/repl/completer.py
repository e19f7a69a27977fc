"""
FILE: tally/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - TallyCompleter (Completer for command/arg completion)
  - create_completer(app) -> TallyCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - tally.core.constants (filter modes)
NOTES:
  - Suggests command names when at start of line
  - Suggests filter modes after "filter"
  - Suggests visible row numbers (with titles) after toggle/done/rm
  - Case-insensitive matching
"""

from typing import Iterable, TYPE_CHECKING

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.constants import VALID_FILTERS

if TYPE_CHECKING:
    from ..app import TodoApp


class TallyCompleter(Completer):
    """
    Custom completer for the Tally REPL.

    Args:
        app: Controller used to look up visible rows (optional)
    """

    COMMANDS = [
        "add", "toggle", "done", "rm", "ls", "filter",
        "all", "pending", "completed", "help", "clear", "exit", "quit",
    ]

    ROW_COMMANDS = {"toggle", "done", "rm"}

    def __init__(self, app: "TodoApp" = None):
        self.app = app

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. At start of input -> suggest commands
            2. After "filter" -> suggest filter modes
            3. After toggle/done/rm -> suggest row numbers
            4. Otherwise (e.g. a task title) -> no suggestions
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()

        if not words or (not text_before_cursor.endswith(" ") and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_commands(word)
            return

        command = words[0].lower()
        at_second_word = (
            (len(words) == 1 and text_before_cursor.endswith(" "))
            or (len(words) == 2 and not text_before_cursor.endswith(" "))
        )
        if not at_second_word:
            return

        word = words[1] if len(words) == 2 else ""
        if command == "filter":
            yield from self._complete_filters(word)
        elif command in self.ROW_COMMANDS:
            yield from self._complete_rows(word)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for command in self.COMMANDS:
            if command.startswith(word_lower):
                yield Completion(
                    command,
                    start_position=-len(word),
                    display=command,
                    display_meta=self._get_command_description(command),
                )

    def _complete_filters(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for mode in VALID_FILTERS:
            if mode.startswith(word_lower):
                yield Completion(mode, start_position=-len(word), display=mode)

    def _complete_rows(self, word: str) -> Iterable[Completion]:
        """Complete row numbers in the current view, labelled with titles."""
        if self.app is None:
            return

        for row, task in enumerate(self.app.visible_tasks()[:200], start=1):
            row_str = str(row)
            if row_str.startswith(word):
                title = task.title.strip()
                display_title = title if len(title) <= 40 else title[:37] + "..."
                yield Completion(
                    row_str,
                    start_position=-len(word),
                    display=row_str,
                    display_meta=display_title,
                )

    @staticmethod
    def _get_command_description(command: str) -> str:
        """Get description for a command (shown in autocomplete menu)."""
        descriptions = {
            "add": "Add a new task",
            "toggle": "Mark a task done / not done",
            "done": "Mark a task done / not done",
            "rm": "Delete a task",
            "ls": "Show the task list",
            "filter": "Set the view filter",
            "all": "Show all tasks",
            "pending": "Show pending tasks",
            "completed": "Show completed tasks",
            "help": "Show help",
            "clear": "Clear screen",
            "exit": "Exit REPL",
            "quit": "Exit REPL",
        }
        return descriptions.get(command, "")


def create_completer(app: "TodoApp" = None) -> TallyCompleter:
    """
    Create and return a TallyCompleter instance.

    Usage:
        completer = create_completer(app)
        session = PromptSession(completer=completer)
    """
    return TallyCompleter(app)

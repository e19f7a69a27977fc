"""
FILE: tally/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - COMPLETED_TITLE_STYLE: Rich style for completed titles (strikethrough)
  - format_title(task) -> Text
  - format_marker(task) -> Text
  - TaskFormatter: Class for formatting tasks (table, JSON, raw lines)
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - tally.core.models (Task)
NOTES:
  - Titles are wrapped in Text so user input is never parsed as markup
  - The CLI addresses tasks by id, so its table shows ids; the REPL
    table (repl/display.py) shows row numbers instead
  - JSON output uses the stored task shape (id/title/completed)
"""

import json
from typing import List

from rich.table import Table
from rich.text import Text

from .core.models import Task

COMPLETED_TITLE_STYLE = "strike #888888"


def format_title(task: Task) -> Text:
    """Task title, struck through and greyed out once completed."""
    if task.completed:
        return Text(task.title, style=COMPLETED_TITLE_STYLE)
    return Text(task.title)


def format_marker(task: Task) -> Text:
    if task.completed:
        return Text("✓", style="green")
    return Text("○", style="dim")


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks") -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: List of tasks to display
            title: Table title

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("", width=2, no_wrap=True)
        table.add_column("Title", style="white")

        for task in tasks:
            table.add_row(str(task.id), format_marker(task), format_title(task))

        return table

    @staticmethod
    def to_json_array(tasks: List[Task]) -> str:
        """Convert task list to JSON array string."""
        return json.dumps([task.to_dict() for task in tasks], indent=2)

    @staticmethod
    def to_raw_lines(tasks: List[Task]) -> List[str]:
        """
        Convert task list to plain text lines.

        Returns:
            One "id: [x] title" line per task
        """
        lines = []
        for task in tasks:
            status_marker = "x" if task.completed else " "
            lines.append(f"{task.id}: [{status_marker}] {task.title}")
        return lines

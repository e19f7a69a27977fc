"""
FILE: tally/repl/display.py
PURPOSE: Rendering of the task screen, task rows and alerts
EXPORTS:
  - render_header() - Static app header
  - render_filter_bar() - The three filter triggers, active one highlighted
  - build_task_table() -> Table
  - render_task_list() - Task table or empty-state message
  - render_screen() - Header, input hint, filter bar and list
  - render_alert() - Modal-style alert panel
DEPENDENCIES:
  - rich (formatted output)
  - tally.core.models (Task)
  - tally.core.constants (screen text, filter modes)
  - tally.formatting (title/marker styling)
NOTES:
  - Takes the console as a parameter; no module-level app state
  - Titles are rendered as rich Text so user input is never parsed as markup
"""

from typing import Dict, List, Optional, TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.constants import (
    HEADER_TEXT,
    INPUT_PLACEHOLDER,
    EMPTY_STATE_TEXT,
    VALID_FILTERS,
)
from ..core.models import Task
from ..formatting import format_marker, format_title

if TYPE_CHECKING:
    from ..app import TodoApp

console = Console()

ACTIVE_FILTER_STYLE = "bold white on #007AFF"
INACTIVE_FILTER_STYLE = "#888888"


def render_header(console_instance: Console = None) -> None:
    console_instance = console_instance or console
    console_instance.rule(f"[bold]{HEADER_TEXT}[/bold]")


def render_filter_bar(
    mode: str,
    counts: Optional[Dict[str, int]] = None,
    console_instance: Console = None,
) -> None:
    """
    Show All / Pending / Completed with the active mode highlighted.

    Args:
        mode: Active filter mode
        counts: Optional per-mode totals shown next to each label
        console_instance: Optional Rich console instance (defaults to module console)
    """
    console_instance = console_instance or console

    bar = Text()
    for i, name in enumerate(VALID_FILTERS):
        if i:
            bar.append("  ")
        label = f" {name.capitalize()} "
        if counts is not None:
            label = f" {name.capitalize()} ({counts.get(name, 0)}) "
        bar.append(label, style=ACTIVE_FILTER_STYLE if name == mode else INACTIVE_FILTER_STYLE)

    console_instance.print(bar)


def build_task_table(tasks: List[Task]) -> Table:
    """
    Create the task table; row numbers are what toggle/rm take.

    Completed titles are struck through and dimmed.
    """
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("#", style="cyan", width=4, no_wrap=True)
    table.add_column("", width=2, no_wrap=True)
    table.add_column("Task")
    table.add_column("", style="#ff3b30", width=2, no_wrap=True)

    for row, task in enumerate(tasks, start=1):
        table.add_row(str(row), format_marker(task), format_title(task), "×")

    return table


def render_task_list(tasks: List[Task], console_instance: Console = None) -> None:
    console_instance = console_instance or console

    if not tasks:
        console_instance.print(f"[dim]{EMPTY_STATE_TEXT}[/dim]")
        return

    console_instance.print(build_task_table(tasks))


def render_screen(app: "TodoApp", console_instance: Console = None, header: bool = True) -> None:
    """
    Render the whole task screen from controller state.

    Args:
        app: Controller to read tasks and filter from
        console_instance: Optional Rich console instance (defaults to module console)
        header: Include the header and input hint (off for post-command refreshes)
    """
    console_instance = console_instance or console

    if header:
        render_header(console_instance)
        console_instance.print(f"[dim]{INPUT_PLACEHOLDER}  (add <title>)[/dim]")
    render_filter_bar(app.filter_mode, app.store.counts(), console_instance)
    render_task_list(app.visible_tasks(), console_instance)


def render_alert(title: str, message: str, console_instance: Console = None) -> None:
    """Show an alert as a red bordered panel."""
    console_instance = console_instance or console
    console_instance.print(
        Panel(Text(message), title=f"[bold]{title}[/bold]", border_style="red", expand=False)
    )

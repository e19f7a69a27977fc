"""
FILE: tally/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL (add, toggle/done, rm, ls)
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ...app import TodoApp
from ...core.models import Task
from ..display import render_filter_bar, render_task_list, render_screen
from ..parser import ParseResult, parse_row


def _refresh(app: TodoApp, console: Console) -> None:
    """Re-render the filter bar and list after a change."""
    render_filter_bar(app.filter_mode, app.store.counts(), console)
    render_task_list(app.visible_tasks(), console)


def _resolve_row(app: TodoApp, result: ParseResult, console: Console) -> Optional[Task]:
    """Map the first argument (a row number in the current view) to a task."""
    if not result.args:
        console.print("[red]Error:[/red] Row number required")
        console.print(f"[dim]Usage: {result.command} <row>[/dim]")
        return None

    row = parse_row(result.args[0])
    if row is None:
        console.print(f"[red]Error:[/red] Invalid row '{escape(result.args[0])}'")
        return None

    task = app.task_at(row)
    if task is None:
        console.print(f"[red]Error:[/red] No task at row {row}")
        return None

    return task


async def handle_add_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """
    Handle 'add' command - create new task.

    Usage:
        add Buy groceries
        add "Task with spaces"

    A missing or blank title is passed through so the empty-input
    alert is shown.
    """
    app.set_input(result.text)
    task = await app.submit()
    if task is None:
        return

    console.print(f"[green]✓ Added:[/green] {escape(task.title)}")
    _refresh(app, console)


async def handle_toggle_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """
    Handle 'toggle' / 'done' command - flip a task's completed flag.

    Usage:
        toggle 2
        done 2
    """
    task = _resolve_row(app, result, console)
    if task is None:
        return

    updated = await app.toggle(task.id)
    if updated is None:
        return

    if updated.completed:
        console.print(f"[green]✓ Completed:[/green] {escape(updated.title)}")
    else:
        console.print(f"[yellow]○ Reopened:[/yellow] {escape(updated.title)}")
    _refresh(app, console)


async def handle_rm_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """
    Handle 'rm' command - delete a task.

    Usage:
        rm 3
    """
    task = _resolve_row(app, result, console)
    if task is None:
        return

    removed = await app.delete(task.id)
    if removed is None:
        return

    console.print(f"[red]× Deleted:[/red] {escape(removed.title)}")
    _refresh(app, console)


def handle_ls_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """Handle 'ls' command - redraw the whole screen."""
    render_screen(app, console)

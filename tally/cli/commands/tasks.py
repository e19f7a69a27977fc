"""
FILE: tally/cli/commands/tasks.py
PURPOSE: Task commands (add, ls, toggle, rm)
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

import typer
from rich.markup import escape

from ..main import app, console, error_console, storage_path
from ...app import TodoApp, create_app
from ...core.constants import DEFAULT_FILTER
from ...formatting import TaskFormatter

T = TypeVar("T")


def run_with_app(ctx: typer.Context, operation: Callable[[TodoApp], Awaitable[T]]) -> T:
    """
    Load tasks, run one operation, and exit 1 if anything alerted.

    A failed load stops before the operation so a one-shot command
    never overwrites unreadable storage.
    """
    alerts: List[Tuple[str, str]] = []

    def alert(title: str, message: str) -> None:
        alerts.append((title, message))
        error_console.print(f"[red]{escape(title)}[/red] {escape(message)}")

    todo_app = create_app(storage_path(ctx), alert)

    async def _run() -> Optional[T]:
        await todo_app.start()
        if alerts:
            return None
        return await operation(todo_app)

    result = asyncio.run(_run())
    if alerts:
        raise typer.Exit(1)
    return result


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task.

    Example:
        tally add "Buy milk"
    """
    task = run_with_app(ctx, lambda todo_app: todo_app.add(title))

    if json_output:
        console.print_json(task.to_json())
    elif raw:
        console.print(f"{task.id}: {task.title}", markup=False, highlight=False)
    else:
        console.print(f"[green]✓ Created task [bold]#{task.id}[/bold]:[/green] {escape(task.title)}")


@app.command()
def ls(
    ctx: typer.Context,
    filter_mode: str = typer.Option(
        DEFAULT_FILTER, "--filter", "-f", help="all, pending or completed"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks.

    Example:
        tally ls
        tally ls --filter pending
        tally ls --json
    """

    async def _list(todo_app: TodoApp):
        if not todo_app.set_filter(filter_mode):
            return []
        return todo_app.visible_tasks()

    tasks = run_with_app(ctx, _list)

    if json_output:
        console.print_json(TaskFormatter.to_json_array(tasks))
    elif raw:
        for line in TaskFormatter.to_raw_lines(tasks):
            console.print(line, markup=False, highlight=False)
    elif not tasks:
        console.print("[dim]No tasks found[/dim]")
    else:
        console.print(TaskFormatter.create_table(tasks))


def _require_task(todo_app: TodoApp, task_id: int) -> None:
    if todo_app.store.get(task_id) is None:
        error_console.print(f"[red]Error:[/red] Task {task_id} not found")
        raise typer.Exit(1)


@app.command()
def toggle(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Mark a task done, or back to pending.

    Example:
        tally toggle 1760870000000
    """

    async def _toggle(todo_app: TodoApp):
        _require_task(todo_app, task_id)
        return await todo_app.toggle(task_id)

    task = run_with_app(ctx, _toggle)

    if json_output:
        console.print_json(task.to_json())
    elif raw:
        console.print(f"{task.id}: {'done' if task.completed else 'pending'}", markup=False, highlight=False)
    elif task.completed:
        console.print(f"[green]✓ Completed task [bold]#{task.id}[/bold]:[/green] {escape(task.title)}")
    else:
        console.print(f"[yellow]○ Reopened task [bold]#{task.id}[/bold]:[/yellow] {escape(task.title)}")


@app.command()
def rm(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Delete a task.

    Example:
        tally rm 1760870000000
    """

    async def _delete(todo_app: TodoApp):
        _require_task(todo_app, task_id)
        return await todo_app.delete(task_id)

    task = run_with_app(ctx, _delete)

    if json_output:
        console.print_json(task.to_json())
    elif raw:
        console.print(f"{task.id}: deleted", markup=False, highlight=False)
    else:
        console.print(f"[red]× Deleted task [bold]#{task.id}[/bold]:[/red] {escape(task.title)}")

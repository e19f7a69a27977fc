"""
FILE: tally/repl/commands/system.py
PURPOSE: System command handlers for REPL (filter, help, clear)
"""

from rich.console import Console
from rich.panel import Panel

from ...app import TodoApp
from ...core.constants import VALID_FILTERS
from ..display import render_filter_bar, render_task_list
from ..parser import ParseResult


def handle_filter_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """
    Handle filter commands - set the view mode.

    Usage:
        filter              # Show current filter
        filter pending      # Only pending tasks
        all / pending / completed   # Shortcuts
    """
    if result.command == "filter":
        if not result.args:
            console.print(f"Current filter: [cyan]{app.filter_mode}[/cyan]")
            console.print(f"[dim]Valid filters: {', '.join(VALID_FILTERS)}[/dim]")
            return
        mode = result.args[0]
    else:
        mode = result.command

    if not app.set_filter(mode):
        return

    render_filter_bar(app.filter_mode, app.store.counts(), console)
    render_task_list(app.visible_tasks(), console)


def handle_help_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """Handle 'help' command - show available commands."""
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]add <title>[/cyan]              Add a new task
  [cyan]toggle <row>[/cyan]             Mark a task done / not done
  [cyan]done <row>[/cyan]               Same as toggle
  [cyan]rm <row>[/cyan]                 Delete a task
  [cyan]ls[/cyan]                       Show the task screen
  [cyan]filter <mode>[/cyan]            Show all, pending or completed tasks
  [cyan]all[/cyan] | [cyan]pending[/cyan] | [cyan]completed[/cyan]  Filter shortcuts
  [cyan]help[/cyan]                     Show this help
  [cyan]clear[/cyan]                    Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]            Exit REPL

[bold cyan]Examples:[/bold cyan]

  [dim]add Buy milk
  add "Call the plumber"
  done 1                      # Row numbers refer to the list as shown
  pending                     # Hide completed tasks
  rm 2[/dim]
"""
    console.print(Panel(help_text, title="Tally Help", border_style="cyan"))


def handle_clear_command(app: TodoApp, result: ParseResult, console: Console) -> None:
    """Clear the screen."""
    console.clear()

"""
FILE: tally/repl/main.py
PURPOSE: Interactive task screen REPL with prompt-toolkit
EXPORTS:
  - main(storage_path) - Entry point for REPL mode
  - run_repl(app) - Main REPL loop (coroutine)
  - execute_command(app, result, console) - Dispatch one parsed command
DEPENDENCIES:
  - asyncio (stdlib, event loop for storage I/O)
  - prompt_toolkit (prompt, history, completion, toolbar)
  - rich (formatted output)
  - tally.app (TodoApp controller)
  - tally.repl.parser, tally.repl.completer, tally.repl.display
NOTES:
  - One TodoApp per session, built in main() and passed down explicitly
  - Command history is in-memory (not persisted)
  - Bottom toolbar shows task counts; right prompt shows rows in view
  - Ctrl+D or "exit"/"quit" to exit, Ctrl+C cancels the current line
  - Falls back to plain input() (in a worker thread) without a TTY
"""

import asyncio
import inspect
import sys
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.markup import escape

from .. import config
from ..app import TodoApp, create_app
from ..core.constants import FILTER_ALL, INPUT_PLACEHOLDER
from .commands import (
    handle_add_command,
    handle_toggle_command,
    handle_rm_command,
    handle_ls_command,
    handle_filter_command,
    handle_help_command,
    handle_clear_command,
)
from .completer import create_completer
from .display import render_alert, render_screen
from .parser import ParseResult, parse_command

# Rich console for formatted output
console = Console()

HANDLERS = {
    "add": handle_add_command,
    "toggle": handle_toggle_command,
    "done": handle_toggle_command,
    "rm": handle_rm_command,
    "ls": handle_ls_command,
    "filter": handle_filter_command,
    "all": handle_filter_command,
    "pending": handle_filter_command,
    "completed": handle_filter_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
}


def plain_prompt(app: TodoApp) -> str:
    """Prompt for simple input mode: "tally> " or "tally:[pending]> "."""
    if app.filter_mode != FILTER_ALL:
        return f"tally:[{app.filter_mode}]> "
    return "tally> "


def format_prompt(app: TodoApp) -> HTML:
    """Prompt with the active filter in color (omitted for 'all')."""
    if app.filter_mode != FILTER_ALL:
        return HTML(f"<b>tally:[<ansibrightmagenta>{app.filter_mode}</ansibrightmagenta>]&gt; </b>")
    return HTML("<b>tally&gt; </b>")


def get_bottom_toolbar(app: TodoApp) -> HTML:
    counts = app.store.counts()
    stats = (
        f"{counts['all']} tasks | {counts['pending']} pending | "
        f"{counts['completed']} completed | type 'help' for commands"
    )
    return HTML(f"<style bg='#444444' fg='#ffffff'> {stats} </style>")


def get_right_prompt(app: TodoApp) -> HTML:
    return HTML(f"<style fg='#888888'>[{len(app.visible_tasks())} in view]</style>")


async def execute_command(app: TodoApp, result: ParseResult, console: Console) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler is None:
        console.print(f"[red]Unknown command:[/red] {escape(command)}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()
        return True

    outcome = handler(app, result, console)
    if inspect.isawaitable(outcome):
        await outcome
    console.print()
    return True


async def run_repl(app: TodoApp) -> None:
    """
    Main REPL loop.

    Loads tasks once, draws the screen, then reads and executes commands
    until exit. Storage I/O runs on this coroutine's event loop.
    """
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()

    session: Optional[PromptSession] = None
    use_simple_input = not has_tty

    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(app),
                complete_while_typing=True,
                bottom_toolbar=lambda: get_bottom_toolbar(app),
                rprompt=lambda: get_right_prompt(app),
                placeholder=HTML(f"<style fg='#888888'>add {INPUT_PLACEHOLDER}</style>"),
            )
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            use_simple_input = True

    await app.start()

    console.print("[bold cyan]Tally[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()
    render_screen(app, console)
    console.print()

    while True:
        try:
            if use_simple_input or session is None:
                user_input = await asyncio.to_thread(input, plain_prompt(app))
            else:
                user_input = await session.prompt_async(format_prompt(app))

            if not await execute_command(app, parse_command(user_input), console):
                break

        except KeyboardInterrupt:
            console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            console.print()
            console.print("[dim]Goodbye![/dim]")
            break
        except Exception as e:
            # Unexpected error - show but don't crash
            console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")


def main(storage_path: Optional[Path] = None) -> None:
    """
    Entry point for REPL mode.

    Args:
        storage_path: Key-value storage file (defaults to config.STORAGE_PATH)
    """
    path = storage_path or config.STORAGE_PATH
    app = create_app(path, alert=lambda title, message: render_alert(title, message, console))
    try:
        asyncio.run(run_repl(app))
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()

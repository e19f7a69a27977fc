"""
FILE: tally/cli/main.py
PURPOSE: Typer-based CLI for one-shot task commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - version() - Show version
  - repl() - Launch interactive REPL
  - add() - Create task
  - ls() - List tasks
  - toggle() - Flip a task's completed flag
  - rm() - Delete task
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - logging (stdlib, --debug)
  - tally.app (TodoApp controller)
  - tally.repl (interactive mode)
NOTES:
  - Task commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Global options: --storage PATH, --debug
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .. import config

# Typer app setup
app = typer.Typer(
    name="tally",
    help="Single-screen terminal to-do list",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


def storage_path(ctx: typer.Context) -> Path:
    """Storage file chosen with --storage, or the configured default."""
    obj = ctx.find_root().obj or {}
    return obj.get("storage") or config.STORAGE_PATH


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    storage: Optional[Path] = typer.Option(
        None, "--storage", "-s", help="Storage file (default: ~/.tally/storage.json)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only records the global options.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.obj = {"storage": storage}

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        repl_main(storage_path(ctx))


# Import command modules to register commands with app
from .commands import (  # noqa: E402
    version,
    repl,
    add,
    ls,
    toggle,
    rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()

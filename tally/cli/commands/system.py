"""
FILE: tally/cli/commands/system.py
PURPOSE: System commands (version, repl)
"""

import typer

from ..main import app, console, storage_path
from ... import __version__


@app.command()
def version():
    """Show Tally version."""
    console.print(f"Tally v{__version__}")


@app.command()
def repl(ctx: typer.Context):
    """Launch the interactive task screen."""
    from ...repl import main as repl_main
    repl_main(storage_path(ctx))

"""
FILE: tally/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

from .tasks import (
    add,
    ls,
    toggle,
    rm,
)
from .system import (
    version,
    repl,
)

__all__ = [
    "add",
    "ls",
    "toggle",
    "rm",
    "version",
    "repl",
]

"""
FILE: tally/repl/parser.py
PURPOSE: Parse user input into a command and arguments for the REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
  - parse_row(value) -> Optional[int]
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
NOTES:
  - Handles quoted strings: add "task with spaces"
  - Unbalanced quotes (e.g. add Call Mom's doctor) fall back to whitespace split
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "toggle", "pending")
        args: Positional arguments (e.g., ["Buy milk"] or ["2"])
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    raw_input: str = ""

    @property
    def text(self) -> str:
        """All arguments joined back into one string (used for titles)."""
        return " ".join(self.args)


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command and args.

    Examples:
        >>> parse_command("add Buy milk")
        ParseResult(command="add", args=["Buy", "milk"], raw_input="add Buy milk")

        >>> parse_command('add "Task with spaces"')
        ParseResult(command="add", args=["Task with spaces"], ...)

        >>> parse_command("rm 2")
        ParseResult(command="rm", args=["2"], ...)

    Args:
        input_str: Raw user input from REPL prompt

    Returns:
        ParseResult; empty input returns command="" with no args
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", args=[], raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # Unclosed quote: treat as plain split
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", args=[], raw_input=input_str)

    return ParseResult(
        command=tokens[0].lower(),
        args=tokens[1:],
        raw_input=input_str,
    )


def parse_row(value: str) -> Optional[int]:
    """Parse a 1-based row number; None if it isn't a positive integer."""
    try:
        row = int(value.strip())
    except (ValueError, AttributeError):
        return None
    return row if row >= 1 else None

"""
FILE: tally/repl/__init__.py
PURPOSE: REPL package for the interactive task screen
EXPORTS:
  - main() (from repl.main)
"""

from .main import main

__all__ = ["main"]

"""
FILE: tally/cli/__init__.py
PURPOSE: Typer CLI package
"""

"""
FILE: tally/__init__.py
PURPOSE: Tally - a single-screen terminal to-do list
"""

__version__ = "0.1.0"

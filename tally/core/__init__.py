"""
FILE: tally/core/__init__.py
PURPOSE: Domain models, persistence and task/filter state
"""

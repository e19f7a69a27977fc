"""
FILE: tally/config.py
PURPOSE: Filesystem locations for Tally data
EXPORTS:
  - TALLY_HOME: Data directory (env TALLY_HOME, default ~/.tally)
  - STORAGE_PATH: Key-value storage file
DEPENDENCIES:
  - os, pathlib (stdlib)
NOTES:
  - Resolved at import time; tests monkeypatch STORAGE_PATH
  - The CLI --storage option overrides STORAGE_PATH per invocation
"""

import os
from pathlib import Path

TALLY_HOME = Path(os.environ.get("TALLY_HOME", Path.home() / ".tally")).expanduser()
STORAGE_PATH = TALLY_HOME / "storage.json"

"""
FILE: tally/core/storage.py
PURPOSE: Key-value storage backends and the task persistence adapter
EXPORTS:
  - KeyValueStorage (Protocol)
  - FileStorage: JSON-file backed key-value store
  - MemoryStorage: in-memory key-value store (tests, scratch sessions)
  - TaskPersistence: load()/save() of the task collection under one key
DEPENDENCIES:
  - asyncio, json, logging, os, tempfile, pathlib (stdlib)
  - tally.core.models (Task)
  - tally.core.exceptions (LoadFailure, SaveFailure)
NOTES:
  - All storage calls are coroutines; file I/O runs in a worker thread
  - The whole collection is written on every save (no diffs)
  - No schema versioning; unknown task fields are ignored on load
  - FileStorage writes over an unreadable file after moving it to *.corrupt
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from .constants import STORAGE_KEY
from .exceptions import LoadFailure, SaveFailure
from .models import Task

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Interface for an asynchronous string key-value store."""

    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""
        ...


class FileStorage:
    """
    Key-value storage in a single JSON object file.

    Implements KeyValueStorage. The file maps keys to string values;
    a missing file means every key is absent.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file, then rename over the target
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def _set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError as e:
            # Unreadable file: keep a copy aside and start a fresh one
            corrupt_path = self.path.with_name(self.path.name + ".corrupt")
            logger.warning("Moving unreadable %s to %s: %s", self.path, corrupt_path, e)
            os.replace(self.path, corrupt_path)
            data = {}
        data[key] = value
        self._write_all(data)

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)


class MemoryStorage:
    """
    Dict-backed KeyValueStorage.

    Set fail_reads / fail_writes to make the next calls raise OSError.
    """

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("storage unavailable")
        self.items[key] = value
        self.write_count += 1


def encode_tasks(tasks: List[Task]) -> str:
    """Serialize the task collection to its stored JSON array form."""
    return json.dumps([task.to_dict() for task in tasks])


def decode_tasks(raw: str) -> List[Task]:
    """
    Parse a stored JSON array back into tasks.

    Raises:
        ValueError: If the value isn't a string holding a JSON array of task objects
    """
    if not isinstance(raw, str):
        raise ValueError(f"Expected stored text, got {type(raw).__name__}")
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return [Task.from_dict(item) for item in data]


class TaskPersistence:
    """Reads and writes the full task collection under a fixed key."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    async def load(self) -> List[Task]:
        """
        Load the stored collection.

        Returns:
            Stored tasks in order, or an empty list if nothing is stored

        Raises:
            LoadFailure: If storage can't be read or the value is corrupt
        """
        try:
            raw = await self.storage.get_item(self.key)
            if raw is None:
                return []
            tasks = decode_tasks(raw)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error("Failed to load tasks from key %r: %s", self.key, e)
            raise LoadFailure() from e

        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    async def save(self, tasks: List[Task]) -> None:
        """
        Overwrite the stored collection.

        Raises:
            SaveFailure: If the write fails
        """
        try:
            await self.storage.set_item(self.key, encode_tasks(tasks))
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %d tasks to key %r: %s", len(tasks), self.key, e)
            raise SaveFailure() from e

        logger.debug("Saved %d tasks", len(tasks))

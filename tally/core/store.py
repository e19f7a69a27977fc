"""
FILE: tally/core/store.py
PURPOSE: In-memory task collection with write-through persistence
EXPORTS:
  - TaskStore
DEPENDENCIES:
  - asyncio (stdlib, single-writer lock)
  - logging, time (stdlib)
  - tally.core.storage (TaskPersistence)
  - tally.core.models (Task)
  - tally.core.exceptions (LoadFailure, EmptyInput, SaveFailure)
NOTES:
  - Every mutation builds a new collection, saves it, then commits it
  - State changes only after the save succeeds
  - Mutations are serialized by one asyncio.Lock per store, so
    overlapping add/toggle/delete calls apply in arrival order
"""

import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional

from .constants import FILTER_ALL, FILTER_PENDING, FILTER_COMPLETED
from .exceptions import EmptyInput, LoadFailure
from .models import Task
from .storage import TaskPersistence

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class TaskStore:
    """
    Owner of the task collection.

    Args:
        persistence: Adapter used for load/save
        clock: Returns the current time in milliseconds (used for ids)
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.persistence = persistence
        self.clock = clock or _now_millis
        self._tasks: List[Task] = []
        self._lock = asyncio.Lock()

    @property
    def tasks(self) -> List[Task]:
        """Current collection (a copy; mutate through the store)."""
        return list(self._tasks)

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def counts(self) -> Dict[str, int]:
        """Task totals per filter mode."""
        done = sum(1 for t in self._tasks if t.completed)
        return {
            FILTER_ALL: len(self._tasks),
            FILTER_PENDING: len(self._tasks) - done,
            FILTER_COMPLETED: done,
        }

    def _next_id(self) -> int:
        # Time-derived, bumped past the largest id if the clock stalls
        candidate = self.clock()
        if self._tasks:
            candidate = max(candidate, max(t.id for t in self._tasks) + 1)
        return candidate

    async def load(self) -> List[Task]:
        """
        Replace state with the stored collection.

        Raises:
            LoadFailure: State is reset to empty before re-raising
        """
        async with self._lock:
            try:
                self._tasks = await self.persistence.load()
            except LoadFailure:
                self._tasks = []
                raise
            return self.tasks

    async def _commit(self, updated: List[Task]) -> None:
        # Caller holds the lock; SaveFailure leaves self._tasks untouched
        await self.persistence.save(updated)
        self._tasks = updated

    async def add(self, title: str) -> Task:
        """
        Append a new incomplete task.

        Args:
            title: Task title; surrounding whitespace is trimmed

        Returns:
            The created Task

        Raises:
            EmptyInput: If the trimmed title is empty (nothing is written)
            SaveFailure: If the write fails (state unchanged)
        """
        title = (title or "").strip()
        if not title:
            raise EmptyInput()

        async with self._lock:
            task = Task(id=self._next_id(), title=title)
            await self._commit(self._tasks + [task])

        logger.debug("Added task %s", task.id)
        return task

    async def toggle(self, task_id: int) -> Optional[Task]:
        """
        Flip a task's completed flag.

        Returns:
            The updated Task, or None if no task has that id (no write)

        Raises:
            SaveFailure: If the write fails (state unchanged)
        """
        async with self._lock:
            if self.get(task_id) is None:
                return None
            updated = [t.toggled() if t.id == task_id else t for t in self._tasks]
            await self._commit(updated)
            toggled = self.get(task_id)

        logger.debug("Toggled task %s -> completed=%s", task_id, toggled.completed)
        return toggled

    async def delete(self, task_id: int) -> Optional[Task]:
        """
        Remove a task.

        Returns:
            The removed Task, or None if no task has that id (no write)

        Raises:
            SaveFailure: If the write fails (state unchanged)
        """
        async with self._lock:
            removed = self.get(task_id)
            if removed is None:
                return None
            await self._commit([t for t in self._tasks if t.id != task_id])

        logger.debug("Deleted task %s", task_id)
        return removed

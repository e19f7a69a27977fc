"""
FILE: tally/app.py
PURPOSE: Application controller owning all UI state for the task screen
EXPORTS:
  - AlertFn: Callable[[str, str], None] (title, message)
  - TodoApp: store + filter selector + pending input, with alerting
  - create_app(storage_path, alert) -> TodoApp
DEPENDENCIES:
  - logging (stdlib)
  - tally.core.store (TaskStore)
  - tally.core.filters (FilterSelector)
  - tally.core.storage (FileStorage, TaskPersistence)
  - tally.core.exceptions (TallyError and subclasses)
NOTES:
  - No module-level state: REPL, CLI and tests each build their own TodoApp
  - Every TallyError from the core becomes an alert; nothing is re-raised
  - The presentation layer only renders; intents go through this class
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .core.exceptions import TallyError
from .core.filters import FilterSelector
from .core.models import Task
from .core.storage import FileStorage, TaskPersistence
from .core.store import TaskStore

logger = logging.getLogger(__name__)

AlertFn = Callable[[str, str], None]


class TodoApp:
    """
    Controller for the single task screen.

    Attributes:
        store: TaskStore holding the collection
        selector: FilterSelector holding the active view mode
        pending_input: Text typed into the input row, not yet submitted
    """

    def __init__(
        self,
        store: TaskStore,
        alert: AlertFn,
        selector: Optional[FilterSelector] = None,
    ):
        self.store = store
        self.alert = alert
        self.selector = selector or FilterSelector()
        self.pending_input = ""

    def _report(self, error: TallyError) -> None:
        logger.debug("Alerting user: %s / %s", error.title, error.message)
        self.alert(error.title, error.message)

    @property
    def filter_mode(self) -> str:
        return self.selector.mode

    async def start(self) -> None:
        """Initial load; a failed load leaves an empty list."""
        try:
            await self.store.load()
        except TallyError as e:
            self._report(e)

    def set_input(self, text: str) -> None:
        self.pending_input = text

    async def submit(self) -> Optional[Task]:
        """
        Add pending_input as a task.

        The input is cleared whatever the outcome.

        Returns:
            The created Task, or None if it was rejected or not saved
        """
        title = self.pending_input
        self.pending_input = ""
        try:
            return await self.store.add(title)
        except TallyError as e:
            self._report(e)
            return None

    async def add(self, title: str) -> Optional[Task]:
        self.set_input(title)
        return await self.submit()

    async def toggle(self, task_id: int) -> Optional[Task]:
        try:
            return await self.store.toggle(task_id)
        except TallyError as e:
            self._report(e)
            return None

    async def delete(self, task_id: int) -> Optional[Task]:
        try:
            return await self.store.delete(task_id)
        except TallyError as e:
            self._report(e)
            return None

    def set_filter(self, mode: str) -> bool:
        """Change the view mode. Returns False (after alerting) if invalid."""
        try:
            self.selector.set_filter(mode)
        except TallyError as e:
            self._report(e)
            return False
        return True

    def visible_tasks(self) -> List[Task]:
        return self.selector.apply(self.store.tasks)

    def task_at(self, position: int) -> Optional[Task]:
        """Task shown at a 1-based row number in the current view."""
        visible = self.visible_tasks()
        if 1 <= position <= len(visible):
            return visible[position - 1]
        return None


def create_app(storage_path: Path | str, alert: AlertFn) -> TodoApp:
    """Build a TodoApp persisting to a FileStorage at storage_path."""
    persistence = TaskPersistence(FileStorage(storage_path))
    return TodoApp(TaskStore(persistence), alert)

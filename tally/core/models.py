"""
FILE: tally/core/models.py
PURPOSE: Domain model for tasks
EXPORTS:
  - Task (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - json (stdlib)
NOTES:
  - from_dict() tolerates unknown extra fields in stored data
  - to_dict() emits exactly id/title/completed (the stored shape)
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict
import json


@dataclass(frozen=True)
class Task:
    """A to-do item with a title and completion flag."""

    id: int
    title: str
    completed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Build a Task from a decoded storage object.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected task object, got {type(data).__name__}")

        try:
            task_id = data["id"]
            title = data["title"]
            completed = data.get("completed", False)
        except KeyError as e:
            raise ValueError(f"Task is missing field {e}") from e

        # bool is a subclass of int, so reject it explicitly for id
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValueError(f"Task id must be a number, got {task_id!r}")
        if not isinstance(title, str):
            raise ValueError(f"Task title must be a string, got {title!r}")
        if not isinstance(completed, bool):
            raise ValueError(f"Task completed must be a boolean, got {completed!r}")

        return cls(id=task_id, title=title, completed=completed)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def toggled(self) -> "Task":
        """Return a copy with the completion flag flipped."""
        return replace(self, completed=not self.completed)

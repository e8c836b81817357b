# src/tidy_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - `id` is opaque and never changes after creation.
    - `text` is stored exactly as entered (creation only trims for validation).
    """

    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """Parse one stored entry. Raises ValueError on a malformed entry."""
        if not isinstance(raw, dict):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        text = raw.get("text")
        completed = raw.get("completed", False)

        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task entry has no valid 'id'")
        if not isinstance(text, str):
            raise ValueError(f"task {task_id!r} has no valid 'text'")
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id!r} has non-boolean 'completed'")

        return cls(id=task_id, text=text, completed=completed)


# Immutable, insertion-ordered view of the collection.
TaskSnapshot = tuple[Task, ...]

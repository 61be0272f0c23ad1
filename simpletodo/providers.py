"""
Data types and storage protocols for the to-do app.

Protocols define the interface; implementations can be swapped
for testing or alternative storage backends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of a single to-do record."""

    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=data["id"],
            text=data["text"],
            completed=data.get("completed", False),
        )


@dataclass(frozen=True)
class EditSelection:
    """The task currently in edit mode and its draft text."""

    task_id: str
    draft: str


@dataclass(frozen=True)
class TodoState:
    """Complete app state snapshot."""

    tasks: tuple[Task, ...] = ()
    editing: EditSelection | None = None

    def get_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def is_editing(self, task_id: str) -> bool:
        return self.editing is not None and self.editing.task_id == task_id


class StorageError(Exception):
    """Raised by a key-value backend when it cannot read or write."""


class KeyValueStorage(Protocol):
    """Protocol for an asynchronous string key-value store."""

    async def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


class TaskPersistence(Protocol):
    """Protocol for loading and saving the whole task sequence."""

    async def load_all(self) -> list[Task] | None:
        """Load the saved task sequence, or None if nothing usable is saved."""
        ...

    async def save_all(self, tasks: tuple[Task, ...] | list[Task]) -> bool:
        """Persist the full task sequence. Returns False if the write failed."""
        ...

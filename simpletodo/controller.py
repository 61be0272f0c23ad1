"""
Controller wiring the Task Store to persistence.

Each intent is applied to the store first; if the task sequence changed,
the complete sequence is written through the persistence bridge.
"""

from __future__ import annotations

import logging

from simpletodo.providers import EditSelection, Task, TaskPersistence, TodoState
from simpletodo.store import (
    AddTask,
    BeginEdit,
    CancelEdit,
    CommitEdit,
    DeleteTask,
    Intent,
    TaskStore,
    ToggleComplete,
    UpdateDraft,
)

logger = logging.getLogger(__name__)


class TodoController:
    """Applies intents to a TaskStore and keeps persistence in sync."""

    def __init__(self, persistence: TaskPersistence, store: TaskStore | None = None):
        self._persistence = persistence
        self._store = store or TaskStore()
        self._started = False
        self.last_save_ok = True

    @property
    def state(self) -> TodoState:
        return self._store.state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.tasks

    @property
    def editing(self) -> EditSelection | None:
        return self._store.editing

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> TodoState:
        """Load saved tasks once. Later calls return the current state."""
        if self._started:
            logger.debug("start() called again; tasks already loaded")
            return self.state
        self._started = True

        tasks = await self._persistence.load_all()
        if tasks:
            self._store.replace_all(tasks)
        logger.info("Started with %d task(s)", len(self._store.tasks))
        return self.state

    async def dispatch(self, intent: Intent) -> bool:
        """Apply intent, then save if the sequence changed.

        Returns True if the task sequence changed.
        """
        changed = self._store.dispatch(intent)
        if changed:
            logger.debug("Applied %s", type(intent).__name__)
            self.last_save_ok = await self._persistence.save_all(self._store.tasks)
        return changed

    async def add(self, text: str) -> bool:
        return await self.dispatch(AddTask(text))

    async def toggle_complete(self, task_id: str) -> bool:
        return await self.dispatch(ToggleComplete(task_id))

    async def begin_edit(self, task_id: str, current_text: str) -> bool:
        return await self.dispatch(BeginEdit(task_id, current_text))

    async def update_draft(self, text: str) -> bool:
        return await self.dispatch(UpdateDraft(text))

    async def commit_edit(self) -> bool:
        return await self.dispatch(CommitEdit())

    async def cancel_edit(self) -> bool:
        return await self.dispatch(CancelEdit())

    async def delete(self, task_id: str) -> bool:
        return await self.dispatch(DeleteTask(task_id))

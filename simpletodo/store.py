"""
Task Store: intents and the reducer over TodoState.

Every change to the task list goes through reduce(). The reducer is pure:
it never mutates its input and it returns the very same ``tasks`` tuple
when the sequence did not change, so callers can detect a mutation with
an identity check.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Union

from simpletodo.providers import EditSelection, Task, TodoState


def now_ms() -> int:
    return int(time.time() * 1000)


def next_task_id(existing: Iterable[str], clock: Callable[[], int] = now_ms) -> str:
    """Creation timestamp in milliseconds, bumped until it is unused."""
    taken = set(existing)
    candidate = clock()
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


# =============================================================================
# Intents
# =============================================================================


@dataclass(frozen=True)
class AddTask:
    text: str


@dataclass(frozen=True)
class ToggleComplete:
    task_id: str


@dataclass(frozen=True)
class BeginEdit:
    task_id: str
    current_text: str


@dataclass(frozen=True)
class UpdateDraft:
    text: str


@dataclass(frozen=True)
class CommitEdit:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


Intent = Union[
    AddTask, ToggleComplete, BeginEdit, UpdateDraft, CommitEdit, CancelEdit, DeleteTask
]


# =============================================================================
# Reducer
# =============================================================================


def _replace_task(
    tasks: tuple[Task, ...], task_id: str, update: Callable[[Task], Task]
) -> tuple[Task, ...]:
    """Replace the record matching task_id, keeping its position."""
    if not any(t.id == task_id for t in tasks):
        return tasks
    return tuple(update(t) if t.id == task_id else t for t in tasks)


def reduce(
    state: TodoState, intent: Intent, clock: Callable[[], int] = now_ms
) -> TodoState:
    """Apply one intent and return the resulting state."""
    if isinstance(intent, AddTask):
        text = intent.text.strip()
        if not text:
            return state
        task = Task(id=next_task_id((t.id for t in state.tasks), clock), text=text)
        return replace(state, tasks=state.tasks + (task,))

    if isinstance(intent, ToggleComplete):
        tasks = _replace_task(
            state.tasks,
            intent.task_id,
            lambda t: replace(t, completed=not t.completed),
        )
        if tasks is state.tasks:
            return state
        return replace(state, tasks=tasks)

    if isinstance(intent, BeginEdit):
        return replace(
            state, editing=EditSelection(intent.task_id, intent.current_text)
        )

    if isinstance(intent, UpdateDraft):
        if state.editing is None:
            return state
        return replace(state, editing=replace(state.editing, draft=intent.text))

    if isinstance(intent, CommitEdit):
        if state.editing is None:
            return state
        text = state.editing.draft.strip()
        tasks = state.tasks
        if text:
            tasks = _replace_task(
                state.tasks, state.editing.task_id, lambda t: replace(t, text=text)
            )
        return TodoState(tasks=tasks, editing=None)

    if isinstance(intent, CancelEdit):
        if state.editing is None:
            return state
        return replace(state, editing=None)

    if isinstance(intent, DeleteTask):
        if state.get_task(intent.task_id) is None:
            return state
        tasks = tuple(t for t in state.tasks if t.id != intent.task_id)
        editing = None if state.is_editing(intent.task_id) else state.editing
        return TodoState(tasks=tasks, editing=editing)

    raise TypeError(f"Unknown intent: {intent!r}")


class TaskStore:
    """Holds the current TodoState and applies intents to it."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._state = TodoState(tasks=tuple(tasks))
        self._clock = clock

    @property
    def state(self) -> TodoState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def editing(self) -> EditSelection | None:
        return self._state.editing

    def dispatch(self, intent: Intent) -> bool:
        """Apply intent. Returns True if the task sequence changed."""
        before = self._state
        self._state = reduce(before, intent, self._clock)
        return self._state.tasks is not before.tasks

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Install a loaded sequence, dropping any edit selection."""
        self._state = TodoState(tasks=tuple(tasks))

    def add(self, text: str) -> bool:
        return self.dispatch(AddTask(text))

    def toggle_complete(self, task_id: str) -> bool:
        return self.dispatch(ToggleComplete(task_id))

    def begin_edit(self, task_id: str, current_text: str) -> bool:
        return self.dispatch(BeginEdit(task_id, current_text))

    def update_draft(self, text: str) -> bool:
        return self.dispatch(UpdateDraft(text))

    def commit_edit(self) -> bool:
        return self.dispatch(CommitEdit())

    def cancel_edit(self) -> bool:
        return self.dispatch(CancelEdit())

    def delete(self, task_id: str) -> bool:
        return self.dispatch(DeleteTask(task_id))

"""Reusable widgets for the task list."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Button, Input, Label, Static

from simpletodo.providers import Task


class TaskText(Label):
    """Task text; clicking it toggles completion."""

    def __init__(self, task: Task, **kwargs) -> None:
        classes = "task-text completed" if task.completed else "task-text"
        super().__init__(task.text, markup=False, classes=classes, **kwargs)
        self._task_id = task.id

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(TaskRow.Toggled(self._task_id))


class TaskRow(Static):
    """Single row in the task list."""

    DEFAULT_CSS = """
    TaskRow {
        layout: horizontal;
        height: auto;
        padding: 0 1;
        margin: 0 0 1 0;
        border-bottom: solid $primary-background;
    }

    TaskRow .task-text {
        width: 1fr;
        padding: 1 0;
    }

    TaskRow .task-text.completed {
        text-style: strike;
        color: $text-muted;
    }

    TaskRow .edit-button {
        min-width: 8;
        margin-left: 1;
    }

    TaskRow .delete-button {
        min-width: 5;
        margin-left: 1;
    }
    """

    class Toggled(Message):
        """The user asked to flip a task's completed flag."""

        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id

    class EditRequested(Message):
        """The user asked to edit a task."""

        def __init__(self, task_id: str, text: str) -> None:
            super().__init__()
            self.task_id = task_id
            self.text = text

    class DeleteRequested(Message):
        """Posted once the fade-out finished; the row should now be removed."""

        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id

    def __init__(self, task: Task, fade_duration: float = 0.3, **kwargs) -> None:
        super().__init__(**kwargs)
        self._todo = task
        self._fade_duration = fade_duration
        self._fading = False

    @property
    def task_id(self) -> str:
        return self._todo.id

    def compose(self) -> ComposeResult:
        yield TaskText(self._todo)
        yield Button("Edit", variant="primary", classes="edit-button")
        yield Button("X", variant="error", classes="delete-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if self._fading:
            return
        if event.button.has_class("edit-button"):
            self.post_message(self.EditRequested(self._todo.id, self._todo.text))
        elif event.button.has_class("delete-button"):
            self.fade_out()

    def fade_out(self) -> None:
        """Fade the row out, then ask for the task to be deleted."""
        self._fading = True
        self.styles.animate(
            "opacity",
            0.0,
            duration=self._fade_duration,
            on_complete=self._post_delete,
        )

    def _post_delete(self) -> None:
        self.post_message(self.DeleteRequested(self._todo.id))


class EditingRow(Static):
    """Row for the task being edited: draft input plus Save and Cancel."""

    DEFAULT_CSS = """
    EditingRow {
        layout: horizontal;
        height: auto;
        padding: 0 1;
        margin: 0 0 1 0;
        background: $boost;
        border-bottom: solid $accent;
    }

    EditingRow .edit-input {
        width: 1fr;
    }

    EditingRow Button {
        min-width: 8;
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    class DraftChanged(Message):
        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class Saved(Message):
        pass

    class Cancelled(Message):
        pass

    def __init__(self, task_id: str, draft: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._task_id = task_id
        self._draft = draft

    @property
    def task_id(self) -> str:
        return self._task_id

    def compose(self) -> ComposeResult:
        yield Input(value=self._draft, classes="edit-input")
        yield Button("Save", variant="primary", classes="save-button")
        yield Button("Cancel", variant="error", classes="cancel-button")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Saved())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("save-button"):
            self.post_message(self.Saved())
        elif event.button.has_class("cancel-button"):
            self.post_message(self.Cancelled())

    def action_cancel(self) -> None:
        self.post_message(self.Cancelled())

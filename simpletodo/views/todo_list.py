"""Main to-do list screen."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Button, Footer, Header, Input, Label

from simpletodo.controller import TodoController
from simpletodo.views.widgets import EditingRow, TaskRow

logger = logging.getLogger(__name__)


class TodoScreen(Screen):
    """Single screen: new-task input above the task list."""

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("d", "toggle_dark", "Dark/Light"),
    ]

    DEFAULT_CSS = """
    TodoScreen {
        padding: 1 2;
    }

    TodoScreen .title {
        text-style: bold;
        margin-bottom: 1;
    }

    #input-row {
        height: auto;
        margin-bottom: 1;
    }

    #new-task {
        width: 1fr;
    }

    #add-task {
        min-width: 5;
        margin-left: 1;
    }

    #task-list {
        height: 1fr;
    }

    .no-tasks {
        color: $text-muted;
        margin: 1;
    }
    """

    def __init__(
        self,
        controller: TodoController,
        title: str = "Simple To-Do List",
        fade_duration: float = 0.3,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._heading = title
        self._fade_duration = fade_duration

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label(self._heading, classes="title")
        with Horizontal(id="input-row"):
            yield Input(placeholder="Add a new task", id="new-task")
            yield Button("+", variant="primary", id="add-task")
        yield VerticalScroll(id="task-list")
        yield Footer()

    async def on_mount(self) -> None:
        await self.refresh_tasks()
        self.query_one("#new-task", Input).focus()

    async def refresh_tasks(self) -> None:
        """Rebuild the task list from the controller's current state."""
        container = self.query_one("#task-list", VerticalScroll)
        await container.remove_children()

        state = self._controller.state
        rows: list[Widget] = []
        for task in state.tasks:
            if state.editing is not None and state.editing.task_id == task.id:
                rows.append(EditingRow(task.id, state.editing.draft))
            else:
                rows.append(TaskRow(task, fade_duration=self._fade_duration))

        if not rows:
            rows.append(Label("No tasks yet", classes="no-tasks"))
        await container.mount_all(rows)

    def _report_save_failure(self) -> None:
        if not self._controller.last_save_ok:
            logger.warning(
                "Save failed; keeping %d task(s) in memory", len(self._controller.tasks)
            )
            self.notify("Could not save tasks", severity="error")

    async def _add_from_input(self) -> None:
        new_task = self.query_one("#new-task", Input)
        if await self._controller.add(new_task.value):
            new_task.value = ""
            self._report_save_failure()
            await self.refresh_tasks()

    # ---- new task ----

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-task":
            await self._add_from_input()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "new-task":
            await self._add_from_input()

    # ---- task rows ----

    async def on_task_row_toggled(self, message: TaskRow.Toggled) -> None:
        if await self._controller.toggle_complete(message.task_id):
            self._report_save_failure()
            await self.refresh_tasks()

    async def on_task_row_edit_requested(self, message: TaskRow.EditRequested) -> None:
        await self._controller.begin_edit(message.task_id, message.text)
        await self.refresh_tasks()

    async def on_task_row_delete_requested(
        self, message: TaskRow.DeleteRequested
    ) -> None:
        if await self._controller.delete(message.task_id):
            self._report_save_failure()
        await self.refresh_tasks()

    # ---- edit mode ----

    async def on_editing_row_draft_changed(
        self, message: EditingRow.DraftChanged
    ) -> None:
        await self._controller.update_draft(message.text)

    async def on_editing_row_saved(self, message: EditingRow.Saved) -> None:
        if await self._controller.commit_edit():
            self._report_save_failure()
        await self.refresh_tasks()

    async def on_editing_row_cancelled(self, message: EditingRow.Cancelled) -> None:
        await self._controller.cancel_edit()
        await self.refresh_tasks()

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.app.action_toggle_dark()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

"""
SimpleTodo TUI Application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from simpletodo.config import Settings
from simpletodo.controller import TodoController
from simpletodo.state_provider import FileKeyValueStorage, PersistenceBridge
from simpletodo.views.todo_list import TodoScreen


def build_controller(settings: Settings) -> TodoController:
    """Controller backed by the JSON storage file named in settings."""
    storage = FileKeyValueStorage(settings.storage_path)
    return TodoController(PersistenceBridge(storage, key=settings.storage_key))


class TodoApp(App):
    """Main SimpleTodo TUI application."""

    TITLE = "SimpleTodo"
    SUB_TITLE = "To-Do List"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("d", "toggle_dark", "Dark/Light", show=True),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        controller: TodoController | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._settings = settings or Settings()
        self._controller = controller or build_controller(self._settings)

    @property
    def controller(self) -> TodoController:
        return self._controller

    async def on_mount(self) -> None:
        """Load saved tasks, then show the list."""
        await self._controller.start()
        await self.push_screen(
            TodoScreen(
                self._controller,
                title=self._settings.title,
                fade_duration=self._settings.fade_duration,
            )
        )

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.theme = "textual-light" if self.current_theme.dark else "textual-dark"


def run(settings: Settings | None = None) -> None:
    """Run the TUI application."""
    app = TodoApp(settings=settings)
    app.run()

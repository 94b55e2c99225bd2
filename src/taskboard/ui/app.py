"""Main Textual application for taskboard."""

from textual.app import App

from taskboard.model.task import Actor
from taskboard.store import BoardStore
from taskboard.ui.board import BoardScreen


class TaskboardApp(App):
    """Role-based task board TUI."""

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "taskboard"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, store: BoardStore, actor: Actor):
        super().__init__()
        self.store = store
        self.actor = actor

    def on_mount(self) -> None:
        self.sub_title = f"{self.actor.name} ({self.actor.role.value})"
        self.push_screen(BoardScreen(self.store, self.actor))

    async def on_unmount(self) -> None:
        """Close the API client however the app exits."""
        aclose = getattr(self.store.client, "aclose", None)
        if aclose is not None:
            await aclose()

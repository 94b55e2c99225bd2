"""Task card widget."""

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Static

from taskboard.model.drag import DragSession
from taskboard.model.permissions import can_delete, can_edit
from taskboard.model.task import Task, UserRef, identity_id
from taskboard.ui.drag import DraggableMixin

MAX_TITLE = 25
MAX_DESCRIPTION = 60


def truncate(text: str | None, limit: int) -> str:
    """Shorten text to limit characters, adding an ellipsis when cut."""
    if not text:
        return ""
    return text if len(text) <= limit else f"{text[:limit]}..."


def build_footer(task: Task) -> Text:
    """Creator line, plus the last modifier when someone else changed the task."""
    result = Text()
    result.append("by ", style="dim")
    result.append(task.creator_name)
    modifier = task.modifier
    if isinstance(modifier, UserRef) and modifier.id != identity_id(task.creator):
        result.append(" \u00b7 ", style="dim")
        result.append(modifier.name, style="italic")
    return result


class CardLine(Static):
    """One line of card text. Not selectable, so pressing on it starts a drag."""

    ALLOW_SELECT = False


class TaskCard(DraggableMixin, Static, can_focus=True):
    """A single task in a column."""

    BINDINGS = [
        ("space", "open_task"),
        ("enter", "open_task"),
        ("delete", "delete_task"),
        ("shift+up", "move(0, -1)"),
        ("shift+down", "move(0, 1)"),
        ("shift+left", "move(-1, 0)"),
        ("shift+right", "move(1, 0)"),
    ]

    class Opened(Message):
        """Posted when the card is clicked or activated."""

        def __init__(self, card: "TaskCard"):
            super().__init__()
            self.card = card

    class DeleteRequested(Message):
        """Posted when the owner asks to delete the task."""

        def __init__(self, card: "TaskCard"):
            super().__init__()
            self.card = card

    class MoveRequested(Message):
        """Posted for keyboard moves: dx changes column, dy changes position."""

        def __init__(self, card: "TaskCard", dx: int, dy: int):
            super().__init__()
            self.card = card
            self.dx = dx
            self.dy = dy

    DEFAULT_CSS = """
    TaskCard {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $surface;
        border-left: tall $panel;
    }
    TaskCard:focus {
        background: $primary-darken-2;
    }
    TaskCard.-pending { border-left: tall $warning; }
    TaskCard.-approved { border-left: tall $success; }
    TaskCard.-done { border-left: tall $accent; }
    TaskCard.-rejected { border-left: tall $error; }
    TaskCard.dragging {
        opacity: 0.5;
    }
    TaskCard.drop-before {
        border-top: heavy $primary;
    }
    TaskCard #task-title {
        text-style: bold;
    }
    TaskCard #task-description {
        color: $text-muted;
    }
    TaskCard #task-footer {
        color: $text-muted;
        text-style: italic;
    }
    """

    def __init__(self, task: Task, session: DragSession):
        Static.__init__(self, classes=f"-{task.status.value}")
        self._init_draggable()
        self.task_item = task
        self.session = session

    @property
    def task_id(self) -> str:
        return self.task_item.id

    @property
    def editable(self) -> bool:
        return can_edit(self.session.actor, self.task_item)

    @property
    def deletable(self) -> bool:
        return can_delete(self.session.actor, self.task_item)

    def compose(self) -> ComposeResult:
        yield CardLine(truncate(self.task_item.title, MAX_TITLE), id="task-title")
        if self.task_item.description:
            yield CardLine(truncate(self.task_item.description, MAX_DESCRIPTION), id="task-description")
        yield CardLine(build_footer(self.task_item), id="task-footer")

    # -- DraggableMixin --

    def draggable_started(self) -> None:
        self.session.start(self.task_item)

    def draggable_cancelled(self) -> None:
        self.session.end()

    def draggable_clicked(self) -> None:
        self.post_message(self.Opened(self))

    # -- keyboard --

    def action_open_task(self) -> None:
        self.post_message(self.Opened(self))

    def action_delete_task(self) -> None:
        if self.deletable:
            self.post_message(self.DeleteRequested(self))

    def action_move(self, dx: int, dy: int) -> None:
        self.post_message(self.MoveRequested(self, dx, dy))

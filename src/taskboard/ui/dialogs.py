"""Modal dialogs: task form, task details and confirmation."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static, TextArea

from taskboard.model.permissions import can_delete, can_edit
from taskboard.model.task import Actor, Task, TaskDraft, identity_name

DIALOG_CSS = """
{name} {{
    align: center middle;
}}
{name} #dialog {{
    width: 70;
    height: auto;
    border: thick $primary;
    background: $surface;
    padding: 1 2;
}}
{name} #buttons {{
    width: 100%;
    height: 3;
    align: center middle;
}}
{name} Button {{
    margin: 0 2;
}}
"""


def _format_time(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "unknown"


class TaskFormModal(ModalScreen[TaskDraft | None]):
    """Create or edit a task. Dismisses with a draft, or None when cancelled."""

    CSS = DIALOG_CSS.format(name="TaskFormModal") + """
    TaskFormModal TextArea {
        height: 6;
    }
    TaskFormModal #form-error {
        color: $error;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, task: Task | None = None):
        super().__init__()
        self.initial = task

    def compose(self) -> ComposeResult:
        heading = "Edit Task" if self.initial else "New Task"
        with Vertical(id="dialog"):
            yield Label(heading)
            yield Input(
                value=self.initial.title if self.initial else "",
                placeholder="Title",
                id="title",
            )
            yield TextArea((self.initial.description or "") if self.initial else "", id="description")
            yield Static("", id="form-error")
            with Horizontal(id="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "save":
            self.submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.submit()

    def submit(self) -> None:
        title = self.query_one("#title", Input).value.strip()
        if not title:
            self.query_one("#form-error", Static).update("Title is required")
            return
        description = self.query_one("#description", TextArea).text.strip()
        self.dismiss(TaskDraft(title=title, description=description or None))

    def action_cancel(self) -> None:
        self.dismiss(None)


class TaskDetailModal(ModalScreen[str | None]):
    """Full task details. Dismisses with "edit", "delete" or None."""

    CSS = DIALOG_CSS.format(name="TaskDetailModal") + """
    TaskDetailModal #detail-title {
        text-style: bold;
        margin-bottom: 1;
    }
    TaskDetailModal #detail-description {
        margin-bottom: 1;
    }
    TaskDetailModal .meta {
        color: $text-muted;
    }
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, task: Task, actor: Actor):
        super().__init__()
        self.subject = task
        self.actor = actor

    def compose(self) -> ComposeResult:
        task = self.subject
        with Vertical(id="dialog"):
            yield Static(task.title, id="detail-title")
            yield Static(task.description or "", id="detail-description")
            yield Static(f"Created {_format_time(task.created_at)}", classes="meta")
            yield Static(f"Status: {task.status.value.capitalize()}", classes="meta")
            yield Static(f"Created by: {task.creator_name}", classes="meta")
            if task.modifier is not None:
                yield Static(
                    f"Last updated by {identity_name(task.modifier)} {_format_time(task.updated_at)}",
                    classes="meta",
                )
            with Horizontal(id="buttons"):
                if can_edit(self.actor, task):
                    yield Button("Edit", id="edit", variant="primary")
                if can_delete(self.actor, task):
                    yield Button("Delete", id="delete", variant="error")
                yield Button("Close", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None if event.button.id == "close" else event.button.id)

    def action_close(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question."""

    CSS = DIALOG_CSS.format(name="ConfirmScreen") + """
    ConfirmScreen #message {
        text-align: center;
        margin-bottom: 1;
    }
    """

    def __init__(self, message: str):
        super().__init__()
        self.question = message

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.question, id="message")
            with Horizontal(id="buttons"):
                yield Button("Yes", id="yes", variant="error")
                yield Button("No", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "yes")

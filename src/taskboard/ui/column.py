"""Status column widget: renders one column and accepts dropped cards."""

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Rule, Static

from taskboard.errors import PermissionDenied
from taskboard.model.columns import Columns
from taskboard.model.drag import DragSession, Intent
from taskboard.model.task import TaskStatus
from taskboard.store import BoardStore
from taskboard.ui.card import TaskCard
from taskboard.ui.drag import DropTarget
from taskboard.ui.watcher import StoreWatcherMixin


class TaskColumn(StoreWatcherMixin, DropTarget, Vertical):
    """One of the four status columns."""

    DEFAULT_CSS = """
    TaskColumn {
        width: 1fr;
        height: 100%;
        padding: 0 1;
        border-right: tall $surface-lighten-1;
    }
    TaskColumn.drop-target {
        background: $boost;
    }
    TaskColumn > .column-title {
        width: 100%;
        text-align: center;
        text-style: bold;
    }
    TaskColumn > Rule.-horizontal {
        margin: 0;
    }
    TaskColumn > VerticalScroll {
        height: 1fr;
    }
    TaskColumn .empty {
        color: $text-muted;
        text-align: center;
        margin-top: 1;
    }
    """

    class Dropped(Message):
        """Posted when a drop on this column produced an intent."""

        def __init__(self, column: "TaskColumn", intent: Intent):
            super().__init__()
            self.column = column
            self.intent = intent

    class DropRejected(Message):
        """Posted when the actor may not drop here."""

        def __init__(self, column: "TaskColumn", error: PermissionDenied):
            super().__init__()
            self.column = column
            self.error = error

    def __init__(self, status: TaskStatus, store: BoardStore, session: DragSession):
        self._init_watcher()
        Vertical.__init__(self, id=f"column-{status.value}")
        self.status = status
        self.store = store
        self.session = session

    def compose(self) -> ComposeResult:
        yield Static(self.status.value.capitalize(), classes="column-title")
        yield Rule()
        with VerticalScroll(classes="cards"):
            yield from self._make_cards()

    def on_mount(self) -> None:
        self.store_watch(self.store, "columns", self._on_columns_changed)

    def _make_cards(self) -> list[Static]:
        tasks = self.store.columns[self.status]
        if not tasks:
            return [Static("No tasks in this column", classes="empty")]
        return [TaskCard(task, self.session) for task in tasks]

    def _on_columns_changed(self, store, key, old: Columns, new: Columns) -> None:
        if old is not None and old[self.status] == new[self.status]:
            return
        self.rebuild()

    def rebuild(self) -> None:
        """Re-render the cards from the store's current column."""
        body = self.query_one(".cards", VerticalScroll)
        body.remove_children()
        body.mount_all(self._make_cards())

    @property
    def cards(self) -> list[TaskCard]:
        return list(self.query(TaskCard))

    def card_at(self, x: int, y: int) -> TaskCard | None:
        for card in self.cards:
            if card.region.contains(x, y):
                return card
        return None

    # -- DropTarget: column accepting card drops --

    def drag_over(self, draggable, x: int, y: int) -> bool:
        if not isinstance(draggable, TaskCard):
            return False
        hovered = self.card_at(x, y)
        self.session.over(self.status, hovered.task_id if hovered else None)
        self._show_indicator(hovered)
        return True

    def drag_away(self, draggable, x: int, y: int) -> None:
        if self.session.leave(self.region, x, y) or not self.session.active:
            self._show_indicator(None)
            self.remove_class("drop-target")

    def try_drop(self, draggable, x: int, y: int) -> bool:
        if not isinstance(draggable, TaskCard):
            return False
        self.drag_over(draggable, x, y)
        self._show_indicator(None)
        self.remove_class("drop-target")
        try:
            intent = self.session.drop(self.status, self.store.columns.ids(self.status))
        except PermissionDenied as e:
            self.post_message(self.DropRejected(self, e))
            return True
        if intent is not None:
            self.post_message(self.Dropped(self, intent))
        return True

    def _show_indicator(self, hovered: TaskCard | None) -> None:
        """Mark the insertion point above the hovered card."""
        self.add_class("drop-target")
        for card in self.cards:
            card.set_class(card is hovered and not card.is_dragging, "drop-before")

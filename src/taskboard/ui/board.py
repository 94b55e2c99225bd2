"""Board screen showing the four status columns."""

import logging
from collections.abc import Awaitable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Static

from taskboard.errors import PermissionDenied, TaskError
from taskboard.model.drag import DragSession, Intent, ReorderIntent, StatusChangeIntent
from taskboard.model.permissions import can_create, can_edit
from taskboard.model.task import STATUSES, Actor, Task, TaskDraft, TaskStatus
from taskboard.store import BoardStore
from taskboard.ui.card import TaskCard
from taskboard.ui.column import TaskColumn
from taskboard.ui.dialogs import ConfirmScreen, TaskDetailModal, TaskFormModal
from taskboard.ui.watcher import StoreWatcherMixin

logger = logging.getLogger(__name__)

# Filter cycle for the "f" key: all tasks, then each status.
FILTERS: tuple[TaskStatus | None, ...] = (None, *STATUSES)


class BoardScreen(StoreWatcherMixin, Screen):
    """Main board screen."""

    DEFAULT_CSS = """
    BoardScreen #board-header {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    BoardScreen #columns {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
        ("n", "new_task", "New task"),
        ("r", "refresh", "Refresh"),
        ("f", "cycle_filter", "Filter"),
    ]

    def __init__(self, store: BoardStore, actor: Actor):
        self._init_watcher()
        super().__init__()
        self.store = store
        self.actor = actor
        self.session = DragSession(actor)
        self._active_draggable = None
        self._filter_index = FILTERS.index(store.status_filter)

    def compose(self) -> ComposeResult:
        yield Static(self._header_text(), id="board-header")
        with Horizontal(id="columns"):
            for status in STATUSES:
                yield TaskColumn(status, self.store, self.session)
        yield Footer()

    def on_mount(self) -> None:
        self.store_watch(self.store, "filter", self._on_filter_changed)
        self.action_refresh()

    def _header_text(self) -> str:
        status = self.store.status_filter
        shown = status.value.capitalize() if status else "All Tasks"
        return f"{self.actor.name} ({self.actor.role.value})  |  {shown}"

    def _on_filter_changed(self, store, key, old, new) -> None:
        self.query_one("#board-header", Static).update(self._header_text())

    def column(self, status: TaskStatus) -> TaskColumn:
        return self.query_one(f"#column-{TaskStatus(status).value}", TaskColumn)

    # -- running store calls --

    def show_error(self, error: TaskError) -> None:
        """Notify about a failed action with a heading per error kind."""
        self.notify(error.message, title=error.title, severity="error")

    async def _run(self, call: Awaitable, success: str | None = None):
        """Await a store call, turning TaskErrors into notifications."""
        try:
            result = await call
        except TaskError as e:
            self.show_error(e)
            return None
        if success:
            self.notify(success)
        return result

    def run_store_call(self, call: Awaitable, success: str | None = None) -> None:
        self.run_worker(self._run(call, success))

    # -- thin delegation: screen routes mouse events to active draggable --

    def on_mouse_move(self, event) -> None:
        if self._active_draggable is not None:
            if self._release_detached_draggable():
                return
            self._active_draggable._drag_move(event.screen_x, event.screen_y)

    def on_mouse_up(self, event) -> None:
        if self._active_draggable is not None:
            if self._release_detached_draggable():
                return
            self._active_draggable._drag_finish(event.screen_x, event.screen_y)

    def _release_detached_draggable(self) -> bool:
        """End a drag whose card was re-rendered away mid-gesture."""
        if self._active_draggable.is_attached:
            return False
        self.release_mouse()
        self._active_draggable = None
        self.session.end()
        return True

    def action_cancel_drag(self) -> None:
        if self._active_draggable is not None:
            self._active_draggable._drag_cancel()
        self.session.end()

    # -- drag results --

    def on_task_column_dropped(self, event: TaskColumn.Dropped) -> None:
        event.stop()
        self.apply_intent(event.intent)

    def on_task_column_drop_rejected(self, event: TaskColumn.DropRejected) -> None:
        event.stop()
        self.show_error(event.error)

    def apply_intent(self, intent: Intent) -> None:
        """Hand a drag result to the store."""
        if isinstance(intent, ReorderIntent):
            self.store.reorder(intent.task_id, intent.status, intent.index)
        elif isinstance(intent, StatusChangeIntent):
            logger.info("moving %s to %s", intent.task_id, intent.status)
            self.run_store_call(
                self.store.change_status(intent.task_id, intent.status),
                success="Task updated successfully",
            )

    def on_task_card_move_requested(self, event: TaskCard.MoveRequested) -> None:
        """Keyboard moves go through the same drag session as the mouse."""
        event.stop()
        task = event.card.task_item
        source_ids = self.store.columns.ids(task.status)
        if task.id not in source_ids:
            return
        target_index = STATUSES.index(task.status) + event.dx
        if not 0 <= target_index < len(STATUSES):
            return
        target = STATUSES[target_index]
        target_ids = self.store.columns.ids(target)

        hover = None
        if event.dy:
            position = source_ids.index(task.id) + event.dy
            if not 0 <= position < len(source_ids):
                return
            hover = source_ids[position]

        self.session.start(task)
        self.session.over(target, hover)
        try:
            intent = self.session.drop(target, target_ids)
        except PermissionDenied as e:
            self.show_error(e)
            return
        if intent is not None:
            self.apply_intent(intent)

    # -- task dialogs --

    def on_task_card_opened(self, event: TaskCard.Opened) -> None:
        event.stop()
        task = event.card.task_item
        self.app.push_screen(TaskDetailModal(task, self.actor), lambda choice: self._on_detail_closed(task, choice))

    def _on_detail_closed(self, task: Task, choice: str | None) -> None:
        if choice == "edit":
            self.edit_task(task)
        elif choice == "delete":
            self.confirm_delete(task)

    def on_task_card_delete_requested(self, event: TaskCard.DeleteRequested) -> None:
        event.stop()
        self.confirm_delete(event.card.task_item)

    def edit_task(self, task: Task) -> None:
        if not can_edit(self.actor, task):
            self.show_error(PermissionDenied("Only the creator can edit a pending task"))
            return

        def on_submit(draft: TaskDraft | None) -> None:
            if draft is None:
                return
            fields = {"title": draft.title, "description": draft.description or ""}
            self.run_store_call(self.store.update_task(task.id, fields), success="Task updated successfully")

        self.app.push_screen(TaskFormModal(task), on_submit)

    def confirm_delete(self, task: Task) -> None:
        def on_confirm(confirmed: bool) -> None:
            if confirmed:
                self.run_worker(self._delete(task))

        self.app.push_screen(ConfirmScreen(f"Delete '{task.title}'?"), on_confirm)

    async def _delete(self, task: Task) -> None:
        result = await self._run(self.store.delete_task(task.id))
        if result is not None:
            self.notify(result.get("message") or "Task deleted successfully")

    # -- actions --

    def action_new_task(self) -> None:
        if not can_create(self.actor):
            self.show_error(PermissionDenied("Only submitters can create tasks"))
            return

        def on_submit(draft: TaskDraft | None) -> None:
            if draft is not None:
                self.run_store_call(
                    self.store.create_task(draft),
                    success="Task created successfully",
                )

        self.app.push_screen(TaskFormModal(), on_submit)

    def action_refresh(self) -> None:
        self.run_store_call(self.store.refresh())

    def action_cycle_filter(self) -> None:
        self._filter_index = (self._filter_index + 1) % len(FILTERS)
        self.run_store_call(self.store.set_filter(FILTERS[self._filter_index]))

"""Board store: the single in-memory owner of tasks and their columns.

Mutations go through the repository client and are followed by a refetch
instead of a local patch. Only reordering is local, since the server keeps
no ordering. Refetches are tagged with a generation number so a slow
response to an older request can never overwrite a newer one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable, Protocol

from taskboard.errors import TaskError
from taskboard.model.columns import Columns, partition
from taskboard.model.task import Task, TaskDraft, TaskStatus, parse_status

logger = logging.getLogger(__name__)

Callback = Callable[["BoardStore", str, Any, Any], None]


class TaskRepository(Protocol):
    async def list_tasks(self, status: str | None = None) -> list[Task]: ...

    async def create_task(self, draft: TaskDraft) -> Task: ...

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task: ...

    async def delete_task(self, task_id: str) -> dict[str, str]: ...


class BoardStore:
    """Authoritative task collection with change notification.

    Watchers are called as ``callback(store, key, old, new)`` for the keys
    ``tasks``, ``columns`` and ``filter``.
    """

    def __init__(self, client: TaskRepository):
        self.client = client
        self._tasks: tuple[Task, ...] = ()
        self._columns: Columns = Columns()
        self._filter: TaskStatus | None = None
        self._generation = 0
        self._watchers: dict[str, list[Callback]] = {}

    # -- read access --

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def columns(self) -> Columns:
        return self._columns

    @property
    def status_filter(self) -> TaskStatus | None:
        return self._filter

    def find(self, task_id: str) -> Task | None:
        return self._columns.find(task_id)

    # -- change notification --

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Watch a key for changes. Returns an unwatch callable."""
        callbacks = self._watchers.setdefault(key, [])
        callbacks.append(callback)

        def unwatch() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unwatch

    def _emit(self, key: str, old: Any, new: Any) -> None:
        for cb in list(self._watchers.get(key, ())):
            cb(self, key, old, new)

    # -- local state --

    def set_tasks(self, tasks: Iterable[Task]) -> None:
        """Replace the whole collection and re-partition it."""
        old_tasks, old_columns = self._tasks, self._columns
        self._tasks = tuple(tasks)
        self._columns = partition(self._tasks)
        logger.debug("board holds %d tasks", len(self._tasks))
        self._emit("tasks", old_tasks, self._tasks)
        self._emit("columns", old_columns, self._columns)

    def reorder(self, task_id: str, status: TaskStatus, target_index: int) -> None:
        """Move a task within its column. Local only; nothing is sent to the server."""
        status = TaskStatus(status)
        column = list(self._columns[status])
        index = self._columns.index_of(task_id, status)
        if index is None:
            return
        task = column.pop(index)
        target_index = max(0, min(target_index, len(column)))
        column.insert(target_index, task)
        if target_index == index:
            return

        old_columns = self._columns
        self._columns = self._columns.replace(status, column)
        self._tasks = tuple(t for _, tasks in self._columns for t in tasks)
        self._emit("columns", old_columns, self._columns)

    # -- server round trips --

    async def refresh(self) -> bool:
        """Refetch tasks with the current filter.

        Returns False when a newer fetch was issued meanwhile and this
        result was dropped.
        """
        self._generation += 1
        generation = self._generation
        try:
            tasks = await self.client.list_tasks(self._filter.value if self._filter else None)
        except TaskError:
            if generation != self._generation:
                logger.debug("ignoring failure of superseded fetch %d", generation)
                return False
            raise
        if generation != self._generation:
            logger.debug("dropping stale fetch %d (latest is %d)", generation, self._generation)
            return False
        self.set_tasks(tasks)
        return True

    async def set_filter(self, status: TaskStatus | str | None) -> bool:
        """Switch the status filter and refetch. Older in-flight fetches are ignored."""
        new = parse_status(status) if status else None
        old, self._filter = self._filter, new
        if old != new:
            self._emit("filter", old, new)
        return await self.refresh()

    async def _refresh_after_mutation(self) -> None:
        """Refetch once the server accepted a change.

        The change already happened, so a failed refetch is logged and the
        board keeps its previous contents until the next refresh.
        """
        try:
            await self.refresh()
        except TaskError as e:
            logger.warning("refetch after change failed: %s", e)

    async def change_status(self, task_id: str, new_status: TaskStatus) -> Task:
        """Ask the server to move a task; the board changes only once it agrees."""
        new_status = parse_status(new_status)
        try:
            task = await self.client.update_task(task_id, {"status": new_status.value})
        except TaskError as e:
            logger.warning("status change of %s to %s failed: %s", task_id, new_status, e)
            raise
        await self._refresh_after_mutation()
        return task

    async def create_task(self, draft: TaskDraft) -> Task:
        try:
            task = await self.client.create_task(draft)
        except TaskError as e:
            logger.warning("task creation failed: %s", e)
            raise
        await self._refresh_after_mutation()
        return task

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        try:
            task = await self.client.update_task(task_id, fields)
        except TaskError as e:
            logger.warning("update of %s failed: %s", task_id, e)
            raise
        await self._refresh_after_mutation()
        return task

    async def delete_task(self, task_id: str) -> dict[str, str]:
        try:
            result = await self.client.delete_task(task_id)
        except TaskError as e:
            logger.warning("delete of %s failed: %s", task_id, e)
            raise
        await self._refresh_after_mutation()
        return result

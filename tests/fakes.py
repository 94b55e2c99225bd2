"""In-memory stand-ins for the task REST API."""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import replace
from typing import Any

from taskboard.errors import NotFound, TaskError
from taskboard.model.task import Task, TaskDraft, TaskStatus, UserRef, parse_status


def make_task(
    task_id: str,
    status: TaskStatus | str = TaskStatus.PENDING,
    creator: str = "u1",
    creator_name: str = "Alice",
    title: str | None = None,
    description: str | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        status=TaskStatus(status),
        creator=UserRef(creator, creator_name),
        description=description,
    )


class FakeTaskClient:
    """Deterministic task repository for store and UI tests.

    - Records every call in ``calls``
    - ``fail_next[method]`` makes the next call to that method raise
    - ``gates`` holds events that successive ``list_tasks`` calls wait on,
      so tests can resolve fetches out of order. Results are computed
      before waiting, like a server answering a request it already served.
    """

    def __init__(self, tasks: list[Task] | None = None, creator: UserRef | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.creator = creator or UserRef("u1", "Alice")
        self.calls: list[tuple[str, Any]] = []
        self.fail_next: dict[str, TaskError] = {}
        self.gates: list[asyncio.Event] = []
        self._ids = itertools.count(100)

    def _maybe_fail(self, method: str) -> None:
        error = self.fail_next.pop(method, None)
        if error is not None:
            raise error

    def _index(self, task_id: str) -> int:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        raise NotFound("Task not found", 404)

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        self.calls.append(("list_tasks", status))
        result = [t for t in self.tasks if status is None or t.status == status]
        if self.gates:
            await self.gates.pop(0).wait()
        self._maybe_fail("list_tasks")
        return result

    async def get_task(self, task_id: str) -> Task:
        self.calls.append(("get_task", task_id))
        self._maybe_fail("get_task")
        return self.tasks[self._index(task_id)]

    async def create_task(self, draft: TaskDraft) -> Task:
        self.calls.append(("create_task", draft))
        self._maybe_fail("create_task")
        draft.validate()
        task = Task(
            id=str(next(self._ids)),
            title=draft.title.strip(),
            status=TaskStatus.PENDING,
            creator=self.creator,
            description=draft.description,
        )
        self.tasks.append(task)
        return task

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        self.calls.append(("update_task", (task_id, dict(fields))))
        self._maybe_fail("update_task")
        i = self._index(task_id)
        task = self.tasks[i]
        if "status" in fields:
            task = task.with_status(parse_status(fields["status"]))
        changes = {k: fields[k] or None for k in ("title", "description") if k in fields}
        if changes:
            task = replace(task, **changes)
        self.tasks[i] = task
        return task

    async def delete_task(self, task_id: str) -> dict[str, str]:
        self.calls.append(("delete_task", task_id))
        self._maybe_fail("delete_task")
        del self.tasks[self._index(task_id)]
        return {"message": "Task deleted successfully"}

    async def aclose(self) -> None:
        self.calls.append(("aclose", None))

    async def __aenter__(self) -> FakeTaskClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def called(self, method: str) -> list[Any]:
        return [arg for name, arg in self.calls if name == method]

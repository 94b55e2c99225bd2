"""Split a flat task collection into the four status columns."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from taskboard.model.task import STATUSES, Task, TaskStatus


@dataclass(frozen=True)
class Columns:
    """Ordered, immutable task sequences, one per status."""

    pending: tuple[Task, ...] = ()
    approved: tuple[Task, ...] = ()
    done: tuple[Task, ...] = ()
    rejected: tuple[Task, ...] = ()

    def __getitem__(self, status: TaskStatus) -> tuple[Task, ...]:
        return getattr(self, TaskStatus(status).value)

    def __iter__(self) -> Iterator[tuple[TaskStatus, tuple[Task, ...]]]:
        for status in STATUSES:
            yield status, self[status]

    def __len__(self) -> int:
        return sum(len(tasks) for _, tasks in self)

    def ids(self, status: TaskStatus) -> list[str]:
        return [t.id for t in self[status]]

    def index_of(self, task_id: str, status: TaskStatus) -> int | None:
        """Position of a task within a column, or None if it is not there."""
        for i, task in enumerate(self[status]):
            if task.id == task_id:
                return i
        return None

    def find(self, task_id: str) -> Task | None:
        for _, tasks in self:
            for task in tasks:
                if task.id == task_id:
                    return task
        return None

    def replace(self, status: TaskStatus, tasks: Iterable[Task]) -> Columns:
        """Return a copy with one column's sequence swapped out."""
        return dataclasses.replace(self, **{TaskStatus(status).value: tuple(tasks)})


def partition(tasks: Iterable[Task]) -> Columns:
    """Bucket tasks by status in a single pass, keeping input order."""
    buckets: dict[TaskStatus, list[Task]] = {status: [] for status in STATUSES}
    for task in tasks:
        buckets[task.status].append(task)
    return Columns(**{status.value: tuple(bucket) for status, bucket in buckets.items()})

"""Drag gesture state machine for moving tasks on the board.

A session is either idle (``state is None``) or holds a ``Dragging``
snapshot. The UI feeds it four callbacks (start, over, leave, drop) plus
``end`` for gestures that never land. ``drop`` turns the gesture into an
intent for the board store, or raises PermissionDenied before anything
reaches the store.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from taskboard.errors import PermissionDenied
from taskboard.model.permissions import can_drop_into_column
from taskboard.model.task import Actor, Task, TaskStatus

logger = logging.getLogger(__name__)


class Region(Protocol):
    def contains(self, x: int, y: int) -> bool: ...


@dataclass(frozen=True)
class Dragging:
    task_id: str
    source_status: TaskStatus
    hover_status: TaskStatus | None = None
    hover_task_id: str | None = None


@dataclass(frozen=True)
class ReorderIntent:
    task_id: str
    status: TaskStatus
    index: int


@dataclass(frozen=True)
class StatusChangeIntent:
    task_id: str
    status: TaskStatus


Intent = ReorderIntent | StatusChangeIntent


class DragSession:
    """Tracks one drag gesture at a time for a single actor."""

    def __init__(self, actor: Actor):
        self.actor = actor
        self.state: Dragging | None = None

    @property
    def active(self) -> bool:
        return self.state is not None

    def start(self, task: Task) -> None:
        """Begin dragging a task. Permission is checked on drop, not here."""
        if self.state is not None:
            logger.debug("drag of %s replaced a stale drag of %s", task.id, self.state.task_id)
        self.state = Dragging(task.id, task.status)

    def over(self, status: TaskStatus, hover_task_id: str | None = None) -> None:
        """Record the column and task currently under the pointer."""
        if self.state is None:
            return
        self.state = replace(self.state, hover_status=status, hover_task_id=hover_task_id)

    def leave(self, region: Region, x: int, y: int) -> bool:
        """Clear the hover target if the pointer really left the column.

        Moving from the column onto one of its children also reports a leave,
        so only a pointer outside the column's own region counts.
        """
        if self.state is None or region.contains(x, y):
            return False
        self.state = replace(self.state, hover_status=None, hover_task_id=None)
        return True

    def drop(self, target_status: TaskStatus, column_task_ids: Sequence[str]) -> Intent | None:
        """Finish the gesture on a column and compute what it means.

        The session is idle again afterwards whatever the outcome.
        """
        state, self.state = self.state, None
        if state is None:
            return None

        target_status = TaskStatus(target_status)
        hover = state.hover_task_id if state.hover_task_id in column_task_ids else None
        if hover == state.task_id:
            return None

        if state.source_status == target_status:
            index = column_task_ids.index(hover) if hover is not None else len(column_task_ids)
            return ReorderIntent(state.task_id, target_status, index)

        if not can_drop_into_column(self.actor, state.source_status, target_status):
            raise PermissionDenied("Only approvers can change task status")
        return StatusChangeIntent(state.task_id, target_status)

    def end(self) -> None:
        """Abandon the gesture, e.g. when the pointer left the window."""
        self.state = None

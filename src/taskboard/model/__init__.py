"""Board model: tasks, permissions, columns and drag sessions."""

from taskboard.model.columns import Columns, partition
from taskboard.model.drag import DragSession, Dragging, ReorderIntent, StatusChangeIntent
from taskboard.model.permissions import (
    can_change_status,
    can_create,
    can_delete,
    can_drop_into_column,
    can_edit,
)
from taskboard.model.task import (
    STATUSES,
    Actor,
    Role,
    Task,
    TaskDraft,
    TaskStatus,
    UserId,
    UserRef,
    identity_id,
    identity_name,
    parse_identity,
)

__all__ = [
    "STATUSES",
    "Actor",
    "Columns",
    "DragSession",
    "Dragging",
    "ReorderIntent",
    "Role",
    "StatusChangeIntent",
    "Task",
    "TaskDraft",
    "TaskStatus",
    "UserId",
    "UserRef",
    "can_change_status",
    "can_create",
    "can_delete",
    "can_drop_into_column",
    "can_edit",
    "identity_id",
    "identity_name",
    "parse_identity",
    "partition",
]

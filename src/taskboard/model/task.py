"""Task, actor and identity types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from taskboard.errors import ValidationError


class TaskStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    DONE = "done"
    REJECTED = "rejected"


# Board column order, left to right.
STATUSES = (TaskStatus.PENDING, TaskStatus.APPROVED, TaskStatus.DONE, TaskStatus.REJECTED)


class Role(StrEnum):
    SUBMITTER = "submitter"
    APPROVER = "approver"


@dataclass(frozen=True)
class UserId:
    """Identity reference that only carries the identifier."""

    id: str


@dataclass(frozen=True)
class UserRef:
    """Expanded identity reference with a display name."""

    id: str
    name: str


IdentityRef = UserId | UserRef


def parse_status(value: Any) -> TaskStatus:
    """Coerce a raw status into TaskStatus, raising ValidationError when unknown."""
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown task status: {value!r}") from None


def parse_identity(raw: Any) -> IdentityRef | None:
    """Parse a creator/modifier field in either of its wire shapes.

    Accepts a bare identifier, a mapping with ``_id``/``id`` and optional
    ``name``, or an existing reference. Returns None for anything else.
    """
    if isinstance(raw, (UserId, UserRef)):
        return raw
    if isinstance(raw, Mapping):
        ident = raw.get("_id", raw.get("id"))
        if ident is None:
            return None
        name = raw.get("name")
        if name:
            return UserRef(str(ident), str(name))
        return UserId(str(ident))
    if isinstance(raw, (str, int)) and not isinstance(raw, bool) and str(raw).strip():
        return UserId(str(raw))
    return None


def identity_id(ref: Any) -> str | None:
    """Normalize any identity shape to a comparable string id.

    Works on refs, actors, raw strings and raw mappings. Unrecognized shapes
    give None rather than raising.
    """
    if isinstance(ref, (UserId, UserRef, Actor)):
        return str(ref.id).strip() or None
    parsed = parse_identity(ref)
    if parsed is None:
        return None
    return str(parsed.id).strip() or None


def identity_name(ref: Any) -> str:
    """Display name for an identity, "Unknown" when only the id is known."""
    if isinstance(ref, (UserRef, Actor)):
        return ref.name
    parsed = parse_identity(ref)
    if isinstance(parsed, UserRef):
        return parsed.name
    return "Unknown"


def _parse_timestamp(raw: Any) -> datetime | None:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    text = str(raw)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    creator: IdentityRef
    description: str | None = None
    modifier: IdentityRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        """Build a Task from its REST JSON shape.

        Raises ValidationError when the payload breaks a Task invariant.
        """
        ident = data.get("_id", data.get("id"))
        if ident is None or not str(ident).strip():
            raise ValidationError("Task payload has no identifier")
        title = data.get("title")
        if not title:
            raise ValidationError(f"Task {ident} has no title")
        creator = parse_identity(data.get("createdBy"))
        if creator is None:
            raise ValidationError(f"Task {ident} has no creator")
        try:
            created_at = _parse_timestamp(data.get("createdAt"))
            updated_at = _parse_timestamp(data.get("updatedAt"))
        except ValueError as e:
            raise ValidationError(f"Task {ident} has a malformed timestamp: {e}") from None
        return cls(
            id=str(ident),
            title=str(title),
            status=parse_status(data.get("status")),
            creator=creator,
            description=data.get("description") or None,
            modifier=parse_identity(data.get("updatedBy")),
            created_at=created_at,
            updated_at=updated_at,
        )

    def with_status(self, status: TaskStatus) -> Task:
        return replace(self, status=TaskStatus(status))

    @property
    def creator_name(self) -> str:
        return identity_name(self.creator)


@dataclass(frozen=True)
class Actor:
    """The signed-in user for the whole session."""

    id: str
    name: str
    role: Role


@dataclass(frozen=True)
class TaskDraft:
    """Fields a submitter fills in when creating or editing a task."""

    title: str
    description: str | None = None

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required")

    def to_dict(self) -> dict:
        data = {"title": self.title.strip()}
        if self.description:
            data["description"] = self.description
        return data

"""Tests for task parsing and identity normalization."""

from datetime import datetime, timezone

import pytest

from taskboard.errors import ValidationError
from taskboard.model.task import (
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
    parse_status,
)


def test_from_dict_expanded_creator():
    task = Task.from_dict(
        {
            "_id": "abc",
            "title": "Write docs",
            "description": "All of them",
            "status": "approved",
            "createdBy": {"_id": "u1", "name": "Alice"},
            "updatedBy": {"_id": "a1", "name": "Carol"},
            "createdAt": "2024-03-01T10:00:00Z",
            "updatedAt": "2024-03-02T11:30:00.000Z",
        }
    )
    assert task.id == "abc"
    assert task.status == TaskStatus.APPROVED
    assert task.creator == UserRef("u1", "Alice")
    assert task.modifier == UserRef("a1", "Carol")
    assert task.created_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert task.updated_at.tzinfo is not None


def test_from_dict_bare_creator_id():
    task = Task.from_dict({"id": "t1", "title": "x", "status": "pending", "createdBy": "u1"})
    assert task.creator == UserId("u1")
    assert task.creator_name == "Unknown"
    assert task.description is None
    assert task.modifier is None


def test_from_dict_empty_description_is_none():
    task = Task.from_dict({"_id": "t1", "title": "x", "status": "pending", "createdBy": "u1", "description": ""})
    assert task.description is None


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "x", "status": "pending", "createdBy": "u1"},
        {"_id": "t1", "title": "", "status": "pending", "createdBy": "u1"},
        {"_id": "t1", "title": "x", "status": "pending"},
        {"_id": "t1", "title": "x", "status": "archived", "createdBy": "u1"},
        {"_id": "t1", "title": "x", "status": "pending", "createdBy": "u1", "createdAt": "yesterday"},
    ],
)
def test_from_dict_rejects_broken_payloads(payload):
    with pytest.raises(ValidationError):
        Task.from_dict(payload)


def test_parse_status():
    assert parse_status("done") == TaskStatus.DONE
    assert parse_status(TaskStatus.REJECTED) == TaskStatus.REJECTED
    with pytest.raises(ValidationError, match="Unknown task status"):
        parse_status("archived")


def test_status_formats_as_its_value():
    assert f"{TaskStatus.PENDING}" == "pending"


def test_parse_identity_shapes():
    assert parse_identity("u1") == UserId("u1")
    assert parse_identity(7) == UserId("7")
    assert parse_identity({"id": "u1"}) == UserId("u1")
    assert parse_identity({"_id": "u1", "name": "Alice"}) == UserRef("u1", "Alice")
    assert parse_identity(UserId("u1")) == UserId("u1")
    assert parse_identity(None) is None
    assert parse_identity("  ") is None
    assert parse_identity({"name": "nobody"}) is None


def test_identity_id_equal_across_shapes():
    """A bare id and an expanded reference for the same user compare equal."""
    actor = Actor("u1", "Alice", Role.SUBMITTER)
    shapes = ["u1", " u1 ", UserId("u1"), UserRef("u1", "Alice"), {"_id": "u1", "name": "Alice"}, actor]
    assert {identity_id(s) for s in shapes} == {"u1"}


def test_identity_id_unrecognized_is_none():
    assert identity_id(None) is None
    assert identity_id(3.5) is None
    assert identity_id({"name": "x"}) is None


def test_identity_name():
    assert identity_name(UserRef("u1", "Alice")) == "Alice"
    assert identity_name({"_id": "u1", "name": "Alice"}) == "Alice"
    assert identity_name(UserId("u1")) == "Unknown"
    assert identity_name(None) == "Unknown"


def test_with_status_keeps_other_fields():
    task = Task.from_dict({"_id": "t1", "title": "x", "status": "pending", "createdBy": "u1"})
    moved = task.with_status(TaskStatus.DONE)
    assert moved.status == TaskStatus.DONE
    assert moved.id == task.id
    assert task.status == TaskStatus.PENDING


def test_draft_validate():
    TaskDraft("ok").validate()
    for title in ("", "   "):
        with pytest.raises(ValidationError, match="Title is required"):
            TaskDraft(title).validate()


def test_draft_to_dict():
    assert TaskDraft("  Fix bug ").to_dict() == {"title": "Fix bug"}
    assert TaskDraft("Fix bug", "details").to_dict() == {"title": "Fix bug", "description": "details"}


def test_bool_is_not_an_identity():
    assert parse_identity(True) is None
    assert identity_id(False) is None
    with pytest.raises(ValidationError, match="no creator"):
        Task.from_dict({"_id": "t1", "title": "x", "status": "pending", "createdBy": True})

"""Tests for role and ownership rules."""

from fakes import make_task

from taskboard.model.permissions import (
    can_change_status,
    can_create,
    can_delete,
    can_drop_into_column,
    can_edit,
)
from taskboard.model.task import STATUSES, Actor, Role, Task, TaskStatus, UserId


def test_creator_can_edit_own_pending_task(submitter):
    task = make_task("t1", creator="u1")
    assert can_edit(submitter, task)
    assert can_delete(submitter, task)


def test_creator_matches_bare_id(submitter):
    """The creator may be a bare id or an expanded reference; both count."""
    task = Task(id="t1", title="x", status=TaskStatus.PENDING, creator=UserId("u1"))
    assert can_edit(submitter, task)


def test_other_submitter_cannot_edit(other_submitter):
    task = make_task("t1", creator="u1")
    assert not can_edit(other_submitter, task)
    assert not can_delete(other_submitter, task)


def test_no_edit_once_out_of_pending(submitter):
    for status in STATUSES[1:]:
        task = make_task("t1", status, creator="u1")
        assert not can_edit(submitter, task)
        assert not can_delete(submitter, task)


def test_approver_cannot_edit_even_own_task():
    approver = Actor("u1", "Alice", Role.APPROVER)
    assert not can_edit(approver, make_task("t1", creator="u1"))


def test_blank_actor_id_never_matches():
    actor = Actor(" ", "Ghost", Role.SUBMITTER)
    task = Task(id="t1", title="x", status=TaskStatus.PENDING, creator=UserId(" "))
    assert not can_edit(actor, task)


def test_role_gates(submitter, approver):
    assert can_change_status(approver)
    assert not can_change_status(submitter)
    assert can_create(submitter)
    assert not can_create(approver)


def test_drop_within_column_always_allowed(submitter, approver):
    for actor in (submitter, approver):
        for status in STATUSES:
            assert can_drop_into_column(actor, status, status)


def test_drop_across_columns_needs_approver(submitter, approver):
    assert not can_drop_into_column(submitter, TaskStatus.PENDING, TaskStatus.APPROVED)
    assert can_drop_into_column(approver, TaskStatus.PENDING, TaskStatus.APPROVED)
    assert can_drop_into_column(approver, TaskStatus.DONE, TaskStatus.PENDING)

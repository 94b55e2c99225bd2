"""Shared fixtures for taskboard tests."""

import pytest
from fakes import FakeTaskClient, make_task

from taskboard.model.task import Actor, Role, TaskStatus


@pytest.fixture
def submitter():
    return Actor(id="u1", name="Alice", role=Role.SUBMITTER)


@pytest.fixture
def other_submitter():
    return Actor(id="u2", name="Bob", role=Role.SUBMITTER)


@pytest.fixture
def approver():
    return Actor(id="a1", name="Carol", role=Role.APPROVER)


@pytest.fixture
def sample_tasks():
    """Five tasks spread over the columns, server order preserved.

    - pending: t1 (Alice), t2 (Bob), t3 (Alice)
    - approved: t4 (Bob)
    - done: t5 (Alice)
    - rejected: empty
    """
    return [
        make_task("t1", TaskStatus.PENDING, "u1", "Alice"),
        make_task("t2", TaskStatus.PENDING, "u2", "Bob"),
        make_task("t4", TaskStatus.APPROVED, "u2", "Bob"),
        make_task("t3", TaskStatus.PENDING, "u1", "Alice", description="Third one"),
        make_task("t5", TaskStatus.DONE, "u1", "Alice"),
    ]


@pytest.fixture
def fake_client(sample_tasks):
    return FakeTaskClient(sample_tasks)

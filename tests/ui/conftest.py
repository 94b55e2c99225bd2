"""Fixtures for UI tests."""

import pytest

from taskboard.store import BoardStore
from taskboard.ui import TaskboardApp


@pytest.fixture
def make_app(fake_client):
    """Build a TaskboardApp over the fake client for a given actor."""

    def factory(actor):
        return TaskboardApp(BoardStore(fake_client), actor)

    return factory

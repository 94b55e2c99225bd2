"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's TASKBOARD_* settings out of the tests."""
    for name in ("API_URL", "TOKEN", "USER_ID", "USER_NAME", "ROLE", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"TASKBOARD_{name}", raising=False)


@pytest.fixture
def use_fake(monkeypatch, fake_client):
    """Route every CLI handler to the in-memory client."""
    monkeypatch.setattr("taskboard.cli.task.open_client", lambda settings: fake_client)
    return fake_client


@pytest.fixture
def make_args():
    def factory(role="submitter", user_id="u1", json=False, **kwargs):
        return Namespace(
            api_url=None,
            token=None,
            user_id=user_id,
            user_name=None,
            role=role,
            json=json,
            **kwargs,
        )

    return factory

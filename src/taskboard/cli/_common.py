"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from taskboard.client import TaskClient
from taskboard.config import Settings
from taskboard.model.task import Actor, Task, identity_id, identity_name


def load_settings(args) -> Settings:
    """Environment settings with command line overrides applied."""
    return Settings.from_env().override(args)


def open_client(settings: Settings) -> TaskClient:
    return TaskClient(settings.api_url, token=settings.token, timeout=settings.timeout)


def actor_or_die(settings: Settings, json_mode: bool) -> Actor:
    """Build the session actor. Exit 1 if the identity settings are incomplete."""
    try:
        return settings.actor()
    except ValueError as e:
        error(str(e), json_mode)


def setup_logging(settings: Settings) -> None:
    """Send log records to stderr at the configured level."""
    logging.basicConfig(
        level=settings.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def task_to_dict(task: Task) -> dict:
    """JSON-friendly view of a task."""
    data = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "createdBy": {"id": identity_id(task.creator), "name": identity_name(task.creator)},
        "createdAt": task.created_at.isoformat() if task.created_at else None,
    }
    if task.modifier is not None:
        data["updatedBy"] = {"id": identity_id(task.modifier), "name": identity_name(task.modifier)}
    if task.updated_at is not None:
        data["updatedAt"] = task.updated_at.isoformat()
    return data


def format_task_line(task: Task, indent: str = "") -> str:
    return f"{indent}{task.id}  {task.title:<25} by {task.creator_name}"


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)

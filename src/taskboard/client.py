"""Async client for the task REST API.

Every failure is turned into a TaskError subclass so callers never see
transport exceptions. Nothing is cached; every call goes to the server.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from taskboard.errors import UnknownError, ValidationError, error_for_status
from taskboard.model.task import Task, TaskDraft, parse_status

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many task creation attempts. Please try again later."


def _require_id(task_id: str) -> str:
    if task_id is None or not str(task_id).strip():
        raise ValidationError("Task id is required")
    return str(task_id).strip()


def _task_path(task_id: str) -> str:
    """URL path for one task, with the id escaped as a single path segment."""
    return f"/tasks/{quote(task_id, safe='')}"


def _server_message(response: httpx.Response) -> str | None:
    """The ``message`` field of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def _parse_task(data: Any) -> Task:
    if not isinstance(data, dict):
        raise UnknownError("Unexpected task payload from server")
    try:
        return Task.from_dict(data)
    except ValidationError as e:
        raise UnknownError(f"Malformed task from server: {e.message}") from None


class TaskClient:
    """Thin async wrapper over ``GET/POST/PUT/DELETE /tasks``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> TaskClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """Fetch all tasks, optionally only those with one status."""
        params = {"status": parse_status(status).value} if status else {}
        data = await self._request("GET", "/tasks", "Failed to fetch tasks", params=params)
        if not isinstance(data, list):
            raise UnknownError("Failed to fetch tasks")
        return [_parse_task(item) for item in data]

    async def get_task(self, task_id: str) -> Task:
        task_id = _require_id(task_id)
        return _parse_task(await self._request("GET", _task_path(task_id), "Failed to fetch task"))

    async def create_task(self, draft: TaskDraft) -> Task:
        draft.validate()
        data = await self._request(
            "POST",
            "/tasks/create",
            "Failed to create task",
            rate_limit_message=RATE_LIMIT_MESSAGE,
            json=draft.to_dict(),
        )
        return _parse_task(data)

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        """Send a partial update. A ``status`` field must be a known status."""
        task_id = _require_id(task_id)
        fields = dict(fields)
        if "status" in fields:
            fields["status"] = parse_status(fields["status"]).value
        if "title" in fields and not str(fields["title"] or "").strip():
            raise ValidationError("Title is required")
        data = await self._request("PUT", _task_path(task_id), "Failed to update task", json=fields)
        return _parse_task(data)

    async def delete_task(self, task_id: str) -> dict[str, str]:
        task_id = _require_id(task_id)
        data = await self._request("DELETE", _task_path(task_id), "Failed to delete task")
        message = data.get("message") if isinstance(data, dict) else None
        return {"message": message or "Task deleted successfully"}

    async def _request(
        self,
        method: str,
        url: str,
        fallback: str,
        rate_limit_message: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send one request and decode its JSON body, mapping failures to TaskError."""
        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise UnknownError(fallback) from e

        if response.is_error:
            if response.status_code == 429 and rate_limit_message:
                message = rate_limit_message
            else:
                message = _server_message(response) or fallback
            logger.warning("%s %s -> %d: %s", method, url, response.status_code, message)
            raise error_for_status(response.status_code, message)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UnknownError(fallback, response.status_code) from e

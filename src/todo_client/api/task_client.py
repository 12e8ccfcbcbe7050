# src/todo_client/api/task_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.task_models import SORT_FIELD, NewTask, SortOrder, Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Base class for every failed backend round trip."""


class NetworkError(TaskApiError):
    """The request never got an HTTP response (connect/read failure, timeout)."""


class ServerError(TaskApiError):
    """The backend answered with a non-2xx status. The body is not inspected."""

    def __init__(self, status_code: int, operation: str) -> None:
        self.status_code = status_code
        self.operation = operation
        super().__init__(f"{operation} failed with HTTP {status_code}")


class ResponseFormatError(TaskApiError):
    """A 2xx list response whose body is not a task array."""


def friendly_api_error_message(err: Exception) -> str:
    if isinstance(err, NetworkError):
        return "Cannot reach the task server. Check your connection and try again."
    if isinstance(err, ServerError):
        if err.status_code == 404:
            return f"The task no longer exists on the server ({err.operation})."
        if 400 <= err.status_code < 500:
            return f"The server rejected the request ({err.operation}, HTTP {err.status_code})."
        return f"The server failed to {err.operation} (HTTP {err.status_code}). Please try again."
    if isinstance(err, ResponseFormatError):
        return "The server sent an unexpected response."
    return str(err).strip() or "Request failed."


class TaskApiClient:
    """
    Async client for the task REST resource.

    Every call either completes or raises a TaskApiError subclass.
    No retries; the timeout is httpx's unless one is passed in.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug("%s: %s %s params=%s body=%s", operation, method, path, params, json)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            logger.warning("%s: network error (%s)", operation, e.__class__.__name__)
            raise NetworkError(f"{operation}: {e.__class__.__name__}") from e

        if not response.is_success:
            logger.warning("%s: HTTP %s", operation, response.status_code)
            raise ServerError(response.status_code, operation)
        return response

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> list[Task]:
        """GET /api/tasks. No status filter returns every task."""
        params = {
            "status": "" if status is None else str(int(status)),
            "sort": str(sort_order),
            "sortField": SORT_FIELD,
        }
        response = await self._send("list tasks", "GET", "/api/tasks", params=params)

        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseFormatError("task list is not valid JSON") from e

        # The backend encodes an empty result as null.
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ResponseFormatError(f"task list must be an array, got {type(payload).__name__}")

        try:
            tasks = [Task.from_json(item) for item in payload]
        except ValueError as e:
            raise ResponseFormatError(f"malformed task in list: {e}") from e

        logger.debug("list tasks: %d task(s)", len(tasks))
        return tasks

    async def create_task(self, new_task: NewTask) -> None:
        await self._send("create task", "POST", "/api/tasks/create", json=new_task.to_json())
        logger.info("Task created: %r", new_task.text)

    async def update_task(self, task: Task) -> None:
        await self._send(
            "update task",
            "PUT",
            "/api/tasks/update",
            params={"id": task.id},
            json=task.to_json(),
        )
        logger.info("Task %s updated (status=%s)", task.id, task.status.name)

    async def delete_task(self, task_id: int) -> None:
        await self._send("delete task", "DELETE", "/api/tasks/delete", params={"id": int(task_id)})
        logger.info("Task %s deleted", task_id)

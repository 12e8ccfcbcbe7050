# tests/fakes.py

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import date

import httpx

from todo_client.tasks.task_models import NewTask, SortOrder, Task, TaskStatus
from todo_client.ui.controller import TaskListController, TaskRow


@dataclass(slots=True)
class RecordedRequest:
    method: str
    path: str
    params: dict[str, str]
    body: dict | None


class FakeTaskBackend:
    """
    In-memory task server behind httpx.MockTransport.

    Mirrors the real REST contract: status filter, createdDate sort,
    `null` for an empty list, 404 for unknown ids on update/delete.
    """

    def __init__(self) -> None:
        self.tasks: dict[int, dict] = {}
        self.requests: list[RecordedRequest] = []
        self.fail_with: int | None = None
        self.fail_list_with: int | None = None
        self.offline = False
        self._next_id = 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def seed(self, text: str, created: date, expected: date, status: int = 0) -> int:
        tid = self._next_id
        self._next_id += 1
        self.tasks[tid] = {
            "id": tid,
            "text": text,
            "createdDate": created.isoformat(),
            "expectedDate": expected.isoformat(),
            "status": status,
        }
        return tid

    def calls(self, method: str, path: str | None = None) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method and (path is None or r.path == path)]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        params = dict(request.url.params)
        self.requests.append(RecordedRequest(request.method, request.url.path, params, body))

        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, text="boom")

        path = request.url.path
        if request.method == "GET" and path == "/api/tasks":
            return self._list(params)
        if request.method == "POST" and path == "/api/tasks/create":
            tid = self.seed(
                body["text"],
                date.fromisoformat(body["createdDate"]),
                date.fromisoformat(body["expectedDate"]),
                body["status"],
            )
            return httpx.Response(201, json=self.tasks[tid])
        if request.method == "PUT" and path == "/api/tasks/update":
            tid = int(params["id"])
            if tid not in self.tasks:
                return httpx.Response(500, text="task not found")
            self.tasks[tid] = {**body, "id": tid}
            return httpx.Response(200, json=self.tasks[tid])
        if request.method == "DELETE" and path == "/api/tasks/delete":
            tid = int(params["id"])
            if self.tasks.pop(tid, None) is None:
                return httpx.Response(404, text="task not found")
            return httpx.Response(200)
        return httpx.Response(404)

    def _list(self, params: dict[str, str]) -> httpx.Response:
        if self.fail_list_with is not None:
            return httpx.Response(self.fail_list_with, text="boom")
        items = list(self.tasks.values())
        status = params.get("status", "")
        if status != "":
            items = [t for t in items if t["status"] == int(status)]
        items.sort(key=lambda t: (t["createdDate"], t["id"]), reverse=params.get("sort") == "desc")
        # Go encodes an empty slice as null.
        return httpx.Response(200, content=json.dumps(items or None).encode(), headers={"Content-Type": "application/json"})


@dataclass
class RecordingView:
    """TaskListView that keeps everything it was asked to show."""

    controller: TaskListController | None = None
    renders: list[list[TaskRow]] = field(default_factory=list)
    empty_messages: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    form_clears: int = 0
    unbound: bool = False

    def bind(self, controller: TaskListController) -> None:
        self.controller = controller

    def unbind(self) -> None:
        self.controller = None
        self.unbound = True

    def render(self, rows: list[TaskRow]) -> None:
        self.renders.append(list(rows))

    def render_empty(self, message: str) -> None:
        self.empty_messages.append(message)
        self.renders.append([])

    def show_notice(self, message: str) -> None:
        self.notices.append(message)

    def clear_create_form(self) -> None:
        self.form_clears += 1

    @property
    def last_tasks(self) -> list[Task]:
        return [row.task for row in self.renders[-1]] if self.renders else []


class GatedTaskApi:
    """
    TaskApi whose list_tasks calls block until released by the test,
    so responses can be completed out of order.
    """

    def __init__(self) -> None:
        self.pending: list[tuple[asyncio.Event, list[Task]]] = []
        self.list_calls: list[tuple[TaskStatus | None, SortOrder]] = []

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> list[Task]:
        self.list_calls.append((status, sort_order))
        gate = asyncio.Event()
        slot: tuple[asyncio.Event, list[Task]] = (gate, [])
        self.pending.append(slot)
        await gate.wait()
        return slot[1]

    def release(self, index: int, tasks: list[Task]) -> None:
        gate, result = self.pending[index]
        result.extend(tasks)
        gate.set()

    async def create_task(self, new_task: NewTask) -> None:
        raise AssertionError("not used")

    async def update_task(self, task: Task) -> None:
        raise AssertionError("not used")

    async def delete_task(self, task_id: int) -> None:
        raise AssertionError("not used")

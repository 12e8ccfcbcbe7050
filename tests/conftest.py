# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio

from todo_client.api.task_client import TaskApiClient
from todo_client.ui.controller import TaskListController

from .fakes import FakeTaskBackend, RecordingView

TODAY = date(2026, 3, 10)


@pytest.fixture()
def today() -> date:
    """Fixed 'now' so date rules are deterministic."""
    return TODAY


@pytest.fixture()
def backend() -> FakeTaskBackend:
    return FakeTaskBackend()


@pytest_asyncio.fixture()
async def api(backend: FakeTaskBackend) -> AsyncIterator[TaskApiClient]:
    """
    Real TaskApiClient talking to the in-memory backend.

    NOTE: only the transport is faked; URL building, JSON encoding and
    status handling are the production code paths.
    """
    client = TaskApiClient("http://tasks.test", transport=backend.transport())
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture()
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture()
def controller(api: TaskApiClient, view: RecordingView, today: date) -> TaskListController:
    return TaskListController(api, view, clock=lambda: today)

# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_client.cli.bootstrap import create_initial_state, shutdown_state
from todo_client.config import Settings
from todo_client.tasks.task_models import SortOrder

from .fakes import FakeTaskBackend


def test_settings_defaults(monkeypatch) -> None:
    for name in ("TODO_API_BASE_URL", "TODO_HTTP_TIMEOUT_SECONDS", "TODO_DEFAULT_SORT", "TODO_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.api_base_url == "http://localhost:8080"
    assert s.http_timeout_seconds == 5.0
    assert s.default_sort == "asc"
    assert s.data_dir == Path(".local/todo")


def test_settings_from_env_with_bad_values_falling_back(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TODO_API_BASE_URL", "http://tasks.example:9000/")
    monkeypatch.setenv("TODO_HTTP_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("TODO_DEFAULT_SORT", "DESC")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "data"))

    s = Settings.from_env()

    assert s.api_base_url == "http://tasks.example:9000"
    assert s.http_timeout_seconds == 5.0
    assert s.default_sort == "desc"
    assert s.data_dir == tmp_path / "data"


@pytest.mark.asyncio
async def test_bootstrap_wires_controller_to_backend(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TODO_DEFAULT_SORT", "desc")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "data"))
    backend = FakeTaskBackend()

    state = create_initial_state(settings=Settings.from_env(), transport=backend.transport())
    try:
        assert state.controller.sort_order is SortOrder.DESC
        assert (tmp_path / "data").is_dir()

        await state.controller.start()
        assert backend.calls("GET")[0].params["sort"] == "desc"
    finally:
        await shutdown_state(state)

# tests/test_console_view.py

from __future__ import annotations

import asyncio
import io
from datetime import date

import pytest

from todo_client.connectors import console_connector
from todo_client.connectors.console_connector import ConsoleTaskView
from todo_client.tasks.task_models import Task, TaskStatus
from todo_client.ui.controller import RowMode, TaskListController, TaskRow

from .fakes import GatedTaskApi


def _view() -> tuple[ConsoleTaskView, io.StringIO]:
    out = io.StringIO()
    return ConsoleTaskView(out=out), out


def test_render_prints_one_line_per_task_with_status_label() -> None:
    view, out = _view()
    task = Task(5, "Ship it", date(2026, 3, 1), date(2026, 3, 4), TaskStatus.RETURNED)

    view.render([TaskRow(task=task)])

    text = out.getvalue()
    assert "Ship it" in text
    assert "Возвращено" in text
    assert "2026-03-01" in text and "2026-03-04" in text


def test_editing_row_shows_drafts_and_hints() -> None:
    view, out = _view()
    task = Task(5, "Ship it", date(2026, 3, 1), date(2026, 3, 4), TaskStatus.IN_PROGRESS)

    view.render([TaskRow(task=task, mode=RowMode.EDITING, draft_text="Ship v2", draft_expected_date="2026-03-09")])

    text = out.getvalue()
    assert "'Ship v2'" in text
    assert "/edit 5 saves" in text


def test_caption_reflects_bound_controller() -> None:
    view, out = _view()
    controller = TaskListController(GatedTaskApi(), view)
    controller.status_filter = TaskStatus.DONE
    view.bind(controller)

    view.render_empty("No tasks to display.")

    text = out.getvalue()
    assert "status: Завершено" in text
    assert "No tasks to display." in text


def test_notice_is_marked() -> None:
    view, out = _view()
    view.show_notice("Task text cannot be empty.")
    assert "[!] Task text cannot be empty." in out.getvalue()


@pytest.mark.asyncio
async def test_stdin_reader_feeds_lines_then_eof(monkeypatch) -> None:
    monkeypatch.setattr(console_connector.sys, "stdin", io.StringIO("/list\n/exit\n"))
    lines: asyncio.Queue[str | None] = asyncio.Queue()

    console_connector._start_stdin_reader(asyncio.get_running_loop(), lines)

    got = [await asyncio.wait_for(lines.get(), timeout=2) for _ in range(3)]
    assert got == ["/list\n", "/exit\n", None]

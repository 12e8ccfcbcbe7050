# src/todo_client/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from ..cli.commands import registry as command_registry
from ..ui.controller import RowMode, TaskListController, TaskRow

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)

TEXT_COLUMN_WIDTH = 48


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


class ConsoleTaskView:
    """TaskListView that prints the list as a plain-text table."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._controller: TaskListController | None = None

    def _print(self, text: str = "") -> None:
        print(text, file=self._out, flush=True)

    def bind(self, controller: TaskListController) -> None:
        self._controller = controller

    def unbind(self) -> None:
        self._controller = None

    def _caption(self) -> str:
        c = self._controller
        if c is None:
            return "Tasks:"
        flt = "all" if c.status_filter is None else c.status_filter.label
        return f"Tasks (status: {flt}, created: {c.sort_order}):"

    def render(self, rows: list[TaskRow]) -> None:
        self._print(self._caption())
        self._print(f"  {'id':>4}  {'status':<13} {'created':<10}  {'expected':<10}  text")
        for row in rows:
            t = row.task
            self._print(
                f"  {t.id:>4}  {t.status.label:<13} {t.created_date.isoformat():<10}  "
                f"{t.expected_date.isoformat():<10}  {_clip(t.text, TEXT_COLUMN_WIDTH)}"
            )
            if row.mode is RowMode.EDITING:
                self._print(
                    f"        editing -> text: {row.draft_text!r}, expected: {row.draft_expected_date or '-'}"
                    f"  (/edit {t.id} saves, /cancel {t.id} discards)"
                )
        self._print()

    def render_empty(self, message: str) -> None:
        self._print(self._caption())
        self._print(f"  {message}")
        self._print()

    def show_notice(self, message: str) -> None:
        self._print(f"[{_ts_local()}] [!] {message}")

    def clear_create_form(self) -> None:
        # The console has no persistent form; the command line is already consumed.
        self._print(f"[{_ts_local()}] Task added.")


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> None:
    """
    Read stdin lines on a daemon thread and hand them to the event loop.
    None marks EOF.
    """

    def _read() -> None:
        while True:
            line = sys.stdin.readline()
            if not line:
                loop.call_soon_threadsafe(queue.put_nowait, None)
                return
            loop.call_soon_threadsafe(queue.put_nowait, line)

    threading.Thread(target=_read, name="stdin-reader", daemon=True).start()


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (api=%s).", state.settings.api_base_url)
    print(f"[{_ts_local()}] [CONSOLE] Type /help for commands. Use /exit to quit.\n")

    controller = state.controller
    await controller.start()

    lines: asyncio.Queue[str | None] = asyncio.Queue()
    _start_stdin_reader(asyncio.get_running_loop(), lines)

    while True:
        print(">>> ", end="", flush=True)
        raw = await lines.get()
        if raw is None:
            logger.info("Console EOF received, exiting.")
            print()
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(controller, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(f"[{_ts_local()}] {reply}")

    logger.info("Console connector finished.")

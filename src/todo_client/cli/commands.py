# src/todo_client/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..tasks.task_models import SortOrder, TaskStatus
from ..ui.controller import TaskListController

CommandHandler = Callable[[TaskListController, list[str]], Awaitable[str | None]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/add, /edit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, controller: TaskListController, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None when the controller already drew the result.
        """
        if not line.startswith("/"):
            return "Commands start with '/'. Use /help to list available commands."

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return await handler(controller, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(raw: str) -> int | None:
    raw = raw.rstrip(".")
    return int(raw) if raw.isascii() and raw.isdecimal() else None


def _rest(args: list[str], start: int) -> str:
    return " ".join(args[start:])


async def cmd_help(controller: TaskListController, args: list[str]) -> str | None:
    return registry.build_help()


async def cmd_list(controller: TaskListController, args: list[str]) -> str | None:
    await controller.refresh()
    return None


async def cmd_add(controller: TaskListController, args: list[str]) -> str | None:
    """/add <YYYY-MM-DD> <text...>"""
    if len(args) < 2:
        return "Usage: /add <YYYY-MM-DD> <text>"
    await controller.create(_rest(args, 1), args[0])
    return None


async def cmd_edit(controller: TaskListController, args: list[str]) -> str | None:
    """
    /edit <id>          -> open the row for editing (or save it if already open)
    /edit <id> <text>   -> same, replacing the draft text
    """
    if not args:
        return "Usage: /edit <id> [text]"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    text = _rest(args, 1) if len(args) > 1 else None
    await controller.toggle_edit(task_id, text=text)
    return None


async def cmd_text(controller: TaskListController, args: list[str]) -> str | None:
    if len(args) < 2:
        return "Usage: /text <id> <text>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    controller.set_draft(task_id, text=_rest(args, 1))
    return None


async def cmd_date(controller: TaskListController, args: list[str]) -> str | None:
    if len(args) != 2:
        return "Usage: /date <id> <YYYY-MM-DD>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    controller.set_draft(task_id, expected_date=args[1])
    return None


async def cmd_cancel(controller: TaskListController, args: list[str]) -> str | None:
    if len(args) != 1:
        return "Usage: /cancel <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    if not controller.cancel_edit(task_id) and task_id in controller.rows:
        return f"Task {task_id} is not being edited."
    return None


async def cmd_status(controller: TaskListController, args: list[str]) -> str | None:
    """/status <id> <code|name>, e.g. /status 3 2 or /status 3 testing"""
    if len(args) < 2:
        return "Usage: /status <id> <0-3 | in-progress | done | testing | returned>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    await controller.change_status(task_id, _rest(args, 1))
    return None


async def cmd_rm(controller: TaskListController, args: list[str]) -> str | None:
    if len(args) != 1:
        return "Usage: /rm <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return "Invalid id."
    await controller.delete(task_id)
    return None


async def cmd_filter(controller: TaskListController, args: list[str]) -> str | None:
    """/filter all | <code|name>"""
    if not args:
        return "Usage: /filter <all | 0-3 | in-progress | done | testing | returned>"
    raw = _rest(args, 0)
    if raw.lower() in ("all", "*", "-"):
        await controller.set_filter(None)
        return None
    try:
        status = TaskStatus.parse(raw)
    except ValueError:
        return f"Unknown status: {raw}"
    await controller.set_filter(status)
    return None


async def cmd_sort(controller: TaskListController, args: list[str]) -> str | None:
    if len(args) != 1 or args[0].lower() not in ("asc", "desc"):
        return "Usage: /sort asc | desc"
    await controller.set_sort(SortOrder(args[0].lower()))
    return None


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Reload the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <YYYY-MM-DD> <text>.")
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <id> opens it, /edit <id> again saves."
)
registry.register("text", cmd_text, help_text="Change draft text of an open edit: /text <id> <text>.")
registry.register(
    "date", cmd_date, help_text="Change draft expected date of an open edit: /date <id> <YYYY-MM-DD>."
)
registry.register("cancel", cmd_cancel, help_text="Discard an open edit: /cancel <id>.")
registry.register("status", cmd_status, help_text="Set task status: /status <id> <0-3 | name>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("filter", cmd_filter, help_text="Filter by status: /filter <all | 0-3 | name>.")
registry.register("sort", cmd_sort, help_text="Sort by creation date: /sort asc | desc.")

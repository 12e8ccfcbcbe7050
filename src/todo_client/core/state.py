# src/todo_client/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..api.task_client import TaskApiClient
from ..ui.controller import TaskListController

if TYPE_CHECKING:
    from ..config import Settings
    from ..connectors.console_connector import ConsoleTaskView


@dataclass
class AppState:
    # Store Settings on the state for easy access in connectors/commands.
    settings: Settings
    api: TaskApiClient
    view: ConsoleTaskView
    controller: TaskListController

# src/todo_client/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the controller.

The controller depends on Protocols instead of concrete implementations.
This keeps the HTTP client and the view swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Protocol

from ..tasks.task_models import NewTask, SortOrder, Task, TaskStatus

if TYPE_CHECKING:
    from ..ui.controller import TaskListController, TaskRow


class TaskApi(Protocol):
    """Backend task resource (see api/task_client.py)."""

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> list[Task]: ...

    async def create_task(self, new_task: NewTask) -> None: ...
    async def update_task(self, task: Task) -> None: ...
    async def delete_task(self, task_id: int) -> None: ...


class TaskListView(Protocol):
    """
    View-side port: where the controller draws the list and its notices.

    The view decides how rows look (console table, test recorder, ...).
    The controller decides what is in them.
    """

    def bind(self, controller: TaskListController) -> None: ...
    def unbind(self) -> None: ...

    def render(self, rows: list[TaskRow]) -> None: ...
    def render_empty(self, message: str) -> None: ...

    def show_notice(self, message: str) -> None: ...
    def clear_create_form(self) -> None: ...

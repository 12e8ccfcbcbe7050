# src/todo_client/ui/controller.py

"""
Task list controller.

Routes user intents (create, edit, status change, delete, filter, sort) to
validation and the API, then redraws the whole list from the server.

Key invariants:
- after every completed mutation the list is re-fetched and rebuilt;
  the server is the only source of truth, there is no client-side cache,
- only the most recently issued refresh may update the view
  (each refresh carries a sequence number; older responses are dropped),
- a failed validation or request never loses user input: the edit row
  stays open with its drafts and the create form is not cleared.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from ..api.task_client import TaskApiError, friendly_api_error_message
from ..core.ports import TaskApi, TaskListView
from ..tasks.task_models import SortOrder, Task, TaskStatus
from ..tasks.task_validation import (
    TaskValidationError,
    utc_today,
    validate_for_create,
    validate_for_update,
)

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No tasks to display."


class RowMode(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass(slots=True)
class TaskRow:
    """One rendered task. Drafts are only meaningful while EDITING."""

    task: Task
    mode: RowMode = RowMode.VIEWING
    draft_text: str = ""
    draft_expected_date: str = ""


class TaskListController:
    def __init__(
        self,
        api: TaskApi,
        view: TaskListView,
        *,
        sort_order: SortOrder = SortOrder.ASC,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._api = api
        self._view = view
        self._clock = clock or utc_today
        self._bound = False
        self._refresh_seq = 0

        self.status_filter: TaskStatus | None = None
        self.sort_order = sort_order
        self.rows: dict[int, TaskRow] = {}

    # ---- lifecycle ----

    async def start(self) -> None:
        """Bind to the view and draw the initial list."""
        if not self._bound:
            self._view.bind(self)
            self._bound = True
        await self.refresh()

    def close(self) -> None:
        if self._bound:
            self._view.unbind()
            self._bound = False

    # ---- refresh ----

    async def refresh(self) -> bool:
        """
        Re-fetch the list with the current filter/sort and rebuild every row.

        Failures are logged only; the previous rows stay on screen.
        Returns True if this call updated the view.
        """
        self._refresh_seq += 1
        seq = self._refresh_seq

        try:
            tasks = await self._api.list_tasks(self.status_filter, self.sort_order)
        except TaskApiError as e:
            logger.warning("Refresh #%d failed: %s", seq, e)
            return False

        if seq != self._refresh_seq:
            logger.debug("Dropping stale refresh #%d (latest is #%d)", seq, self._refresh_seq)
            return False

        self.rows = {t.id: TaskRow(task=t) for t in tasks}
        if self.rows:
            self._view.render(list(self.rows.values()))
        else:
            self._view.render_empty(EMPTY_LIST_MESSAGE)
        return True

    async def set_filter(self, status: TaskStatus | None) -> bool:
        self.status_filter = status
        logger.debug("Filter -> %s", "all" if status is None else status.name)
        return await self.refresh()

    async def set_sort(self, order: SortOrder) -> bool:
        self.sort_order = SortOrder(order)
        logger.debug("Sort -> %s", self.sort_order)
        return await self.refresh()

    # ---- mutations ----

    async def create(self, text: str | None, expected_date: date | str | None) -> bool:
        try:
            new_task = validate_for_create(text, expected_date, today=self._clock())
        except TaskValidationError as e:
            self._view.show_notice(e.message)
            return False

        try:
            await self._api.create_task(new_task)
        except TaskApiError as e:
            logger.warning("Create failed: %s", e)
            self._view.show_notice(friendly_api_error_message(e))
            return False

        self._view.clear_create_form()
        await self.refresh()
        return True

    async def toggle_edit(
        self,
        task_id: int,
        *,
        text: str | None = None,
        expected_date: str | None = None,
    ) -> bool:
        """
        VIEWING -> EDITING opens the row with drafts prefilled from the task.
        EDITING -> commit: validate drafts, update, refresh. On any failure
        the row stays EDITING.
        """
        row = self._row(task_id)
        if row is None:
            return False

        if row.mode is RowMode.VIEWING:
            row.mode = RowMode.EDITING
            row.draft_text = row.task.text
            row.draft_expected_date = row.task.expected_date.isoformat()
            self._apply_drafts(row, text, expected_date)
            self._redraw()
            return True

        self._apply_drafts(row, text, expected_date)
        try:
            updated = validate_for_update(
                row.task, row.draft_text, row.draft_expected_date, row.task.status
            )
        except TaskValidationError as e:
            self._view.show_notice(e.message)
            return False

        if not await self._send_update(updated, "Update"):
            return False

        # Saved on the server: close the row even if the refresh below fails.
        row.task = updated
        row.mode = RowMode.VIEWING
        row.draft_text = ""
        row.draft_expected_date = ""
        if not await self.refresh():
            self._redraw()
        return True

    def set_draft(
        self,
        task_id: int,
        *,
        text: str | None = None,
        expected_date: str | None = None,
    ) -> bool:
        row = self._row(task_id)
        if row is None:
            return False
        if row.mode is not RowMode.EDITING:
            self._view.show_notice(f"Task {task_id} is not being edited.")
            return False
        self._apply_drafts(row, text, expected_date)
        self._redraw()
        return True

    def cancel_edit(self, task_id: int) -> bool:
        row = self._row(task_id)
        if row is None or row.mode is RowMode.VIEWING:
            return False
        row.mode = RowMode.VIEWING
        row.draft_text = ""
        row.draft_expected_date = ""
        self._redraw()
        return True

    async def change_status(self, task_id: int, status: Any) -> bool:
        """Apply a status immediately; text and dates go out unchanged."""
        row = self._row(task_id)
        if row is None:
            return False

        task = row.task
        try:
            updated = validate_for_update(task, task.text, task.expected_date, status)
        except TaskValidationError as e:
            self._view.show_notice(e.message)
            return False

        if not await self._send_update(updated, "Status change"):
            return False

        await self.refresh()
        return True

    async def delete(self, task_id: int) -> bool:
        try:
            await self._api.delete_task(task_id)
        except TaskApiError as e:
            logger.warning("Delete of task %s failed: %s", task_id, e)
            self._view.show_notice(friendly_api_error_message(e))
            return False

        await self.refresh()
        return True

    # ---- helpers ----

    def _row(self, task_id: int) -> TaskRow | None:
        row = self.rows.get(task_id)
        if row is None:
            self._view.show_notice(f"Task {task_id} is not in the list.")
        return row

    @staticmethod
    def _apply_drafts(row: TaskRow, text: str | None, expected_date: str | None) -> None:
        if text is not None:
            row.draft_text = text
        if expected_date is not None:
            row.draft_expected_date = expected_date

    async def _send_update(self, task: Task, action: str) -> bool:
        try:
            await self._api.update_task(task)
        except TaskApiError as e:
            logger.warning("%s of task %s failed: %s", action, task.id, e)
            self._view.show_notice(friendly_api_error_message(e))
            return False
        return True

    def _redraw(self) -> None:
        self._view.render(list(self.rows.values()))

# src/todo_client/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the HTTP client, the console view and the controller into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..api.task_client import TaskApiClient
from ..config import Settings, get_settings
from ..connectors.console_connector import ConsoleTaskView
from ..core.state import AppState
from ..tasks.task_models import SortOrder
from ..ui.controller import TaskListController

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the HTTP transport) injectable makes the app easier
    to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    api = TaskApiClient(
        settings.api_base_url,
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )
    view = ConsoleTaskView()
    controller = TaskListController(api, view, sort_order=SortOrder(settings.default_sort))

    logger.debug("State ready (api=%s timeout=%.1fs)", settings.api_base_url, settings.http_timeout_seconds)
    return AppState(settings=settings, api=api, view=view, controller=controller)


async def shutdown_state(state: AppState) -> None:
    """Unbind the view and close the HTTP connection pool."""
    state.controller.close()
    try:
        await state.api.aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)

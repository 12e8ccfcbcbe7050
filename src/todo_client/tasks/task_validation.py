# src/todo_client/tasks/task_validation.py

"""
Pre-flight validation for create and edit.

Both entry points raise TaskValidationError; callers show the message
and keep the user's input. Nothing here touches the network.

Date comparisons are day-granular and inclusive: the expected date may
equal today (create) or the creation date (edit), never precede it.
"""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from .task_models import MAX_TEXT_LENGTH, NewTask, Task, TaskStatus

_ISO_DAY = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class ValidationCode(StrEnum):
    EMPTY_TEXT = "empty_text"
    TEXT_TOO_LONG = "text_too_long"
    MISSING_EXPECTED_DATE = "missing_expected_date"
    INVALID_EXPECTED_DATE = "invalid_expected_date"
    EXPECTED_DATE_TOO_EARLY = "expected_date_too_early"
    EXPECTED_DATE_BEFORE_CREATION = "expected_date_before_creation"
    INVALID_STATUS = "invalid_status"


_MESSAGES: dict[ValidationCode, str] = {
    ValidationCode.EMPTY_TEXT: "Task text cannot be empty.",
    ValidationCode.TEXT_TOO_LONG: f"Task text cannot exceed {MAX_TEXT_LENGTH} characters.",
    ValidationCode.MISSING_EXPECTED_DATE: "Choose the expected completion date.",
    ValidationCode.INVALID_EXPECTED_DATE: "Expected date must be in YYYY-MM-DD format.",
    ValidationCode.EXPECTED_DATE_TOO_EARLY: "Expected date cannot be earlier than today.",
    ValidationCode.EXPECTED_DATE_BEFORE_CREATION: (
        "Expected date cannot be earlier than the task's creation date."
    ),
    ValidationCode.INVALID_STATUS: "Unknown task status.",
}


class TaskValidationError(ValueError):
    def __init__(self, code: ValidationCode, message: str | None = None) -> None:
        self.code = code
        self.message = message or _MESSAGES[code]
        super().__init__(self.message)


def utc_today() -> date:
    return datetime.now(UTC).date()


def _clean_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise TaskValidationError(ValidationCode.EMPTY_TEXT)
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise TaskValidationError(ValidationCode.TEXT_TOO_LONG)
    return cleaned


def _clean_date(value: date | str | None) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = (value or "").strip()
    if not raw:
        raise TaskValidationError(ValidationCode.MISSING_EXPECTED_DATE)
    # fromisoformat alone also takes 20260311 and 2026-W11-2.
    if not _ISO_DAY.fullmatch(raw):
        raise TaskValidationError(ValidationCode.INVALID_EXPECTED_DATE)
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise TaskValidationError(ValidationCode.INVALID_EXPECTED_DATE) from None


def validate_for_create(
    text: str | None,
    expected_date: date | str | None,
    *,
    today: date | None = None,
) -> NewTask:
    """Validate create-form input; returns the payload to POST."""
    cleaned = _clean_text(text)
    expected = _clean_date(expected_date)

    today = today or utc_today()
    if expected < today:
        raise TaskValidationError(ValidationCode.EXPECTED_DATE_TOO_EARLY)

    return NewTask(
        text=cleaned,
        created_date=today,
        expected_date=expected,
        status=TaskStatus.IN_PROGRESS,
    )


def validate_for_update(
    existing: Task,
    text: str | None,
    expected_date: date | str | None,
    status: Any,
) -> Task:
    """Validate edited fields against an existing task; returns the task to PUT."""
    cleaned = _clean_text(text)
    expected = _clean_date(expected_date)

    if expected < existing.created_date:
        raise TaskValidationError(ValidationCode.EXPECTED_DATE_BEFORE_CREATION)

    try:
        new_status = TaskStatus.parse(status)
    except ValueError:
        raise TaskValidationError(ValidationCode.INVALID_STATUS) from None

    return replace(existing, text=cleaned, expected_date=expected, status=new_status)

# src/todo_client/tasks/task_models.py

"""
Task entity and its JSON wire form.

Wire keys follow the backend: id, text, createdDate, expectedDate, status.
Dates go out as YYYY-MM-DD, status as the integer code.

Older backends sent status as a Russian string tag and dates as full
ISO timestamps; both are accepted on decode here and nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum, StrEnum
from typing import Any

MAX_TEXT_LENGTH = 255
SORT_FIELD = "createdDate"


class TaskStatus(IntEnum):
    IN_PROGRESS = 0
    DONE = 1
    TESTING = 2
    RETURNED = 3

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        """
        Accepts a member, an int code, a digit string, a member name
        ("done", "in-progress") or a legacy string tag.
        Raises ValueError for anything else.
        """
        if isinstance(raw, TaskStatus):
            return raw
        if isinstance(raw, bool):
            raise ValueError(f"invalid task status: {raw!r}")
        if isinstance(raw, int):
            return cls(raw)
        if isinstance(raw, str):
            s = raw.strip()
            if s.isdigit():
                return cls(int(s))
            key = s.lower()
            legacy = _LEGACY_TAGS.get(key)
            if legacy is not None:
                return legacy
            name = key.replace("-", "_").replace(" ", "_").upper()
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"invalid task status: {raw!r}")


_STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.IN_PROGRESS: "В процессе",
    TaskStatus.DONE: "Завершено",
    TaskStatus.TESTING: "Тестирование",
    TaskStatus.RETURNED: "Возвращено",
}

# First-generation backends stored the status as these tags.
_LEGACY_TAGS: dict[str, TaskStatus] = {
    "в процессе": TaskStatus.IN_PROGRESS,
    "завершено": TaskStatus.DONE,
}


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


def parse_wire_date(raw: Any) -> date:
    """Parse YYYY-MM-DD or a full ISO timestamp down to a date."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"invalid date: {raw!r}")
    s = raw.strip()
    if len(s) == 10:
        return date.fromisoformat(s)
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s).date()


@dataclass(slots=True, frozen=True)
class NewTask:
    """Create payload; the server assigns the id."""

    text: str
    created_date: date
    expected_date: date
    status: TaskStatus = TaskStatus.IN_PROGRESS

    def to_json(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "createdDate": self.created_date.isoformat(),
            "expectedDate": self.expected_date.isoformat(),
            "status": int(self.status),
        }


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    text: str
    created_date: date
    expected_date: date
    status: TaskStatus

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "createdDate": self.created_date.isoformat(),
            "expectedDate": self.expected_date.isoformat(),
            "status": int(self.status),
        }

    @classmethod
    def from_json(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise ValueError(f"task must be a JSON object, got {type(data).__name__}")
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
            raise ValueError(f"invalid task id: {raw_id!r}")
        text = data.get("text")
        if not isinstance(text, str):
            raise ValueError(f"invalid task text: {text!r}")
        return cls(
            id=int(raw_id),
            text=text,
            created_date=parse_wire_date(data.get("createdDate")),
            expected_date=parse_wire_date(data.get("expectedDate")),
            status=TaskStatus.parse(data.get("status")),
        )

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from ..core.enums import TaskType


def task_slug(task: str) -> str:
    task_type = TaskType.from_task(task)
    if task_type is not None:
        return task_type.slug
    return re.sub(r"[^a-z0-9]+", "-", (task or "").strip().lower()).strip("-") or "task"


@dataclass(frozen=True)
class DraftKey:
    """Identifies one saved-progress form: task, schedule, item and employee."""

    task: str
    schedule_id: str
    item_id: str
    employee_id: str

    @property
    def storage_key(self) -> str:
        return f"{task_slug(self.task)}-progress-{self.schedule_id}-{self.item_id}-{self.employee_id}"


@dataclass(frozen=True)
class Draft:
    key: DraftKey
    data: dict[str, Any] = field(default_factory=dict)
    saved_at: datetime = field(default_factory=datetime.now)

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.saved_at > ttl

    def to_dict(self) -> dict:
        return {
            "key": self.key.storage_key,
            "task": self.key.task,
            "schedule_id": self.key.schedule_id,
            "item_id": self.key.item_id,
            "employee_id": self.key.employee_id,
            "data": self.data,
            "saved_at": self.saved_at.isoformat(timespec="seconds"),
        }

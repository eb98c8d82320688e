from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from .payloads import TaskPayload


@dataclass(frozen=True)
class EntryKey:
    """The (schedule, item, employee) triple that locking applies to."""

    schedule_id: str
    item_id: str
    employee_id: str


@dataclass(frozen=True)
class NewWorkEntry:
    schedule_id: str
    schedule_item_id: str
    employee_id: str
    quantity: float
    remarks: str = ""
    payload: Optional[TaskPayload] = None
    total_sticks: Optional[float] = None
    output_mass: Optional[float] = None


@dataclass(frozen=True)
class WorkEntry:
    """Domain entity: one recorded act of output by one employee on one schedule item."""

    entry_id: str
    schedule_id: str
    schedule_item_id: str
    employee_id: str
    quantity: float
    remarks: str
    recorded_at: datetime
    payload: Optional[TaskPayload] = None
    total_sticks: Optional[float] = None
    output_mass: Optional[float] = None
    locked: bool = False

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.schedule_id, self.schedule_item_id, self.employee_id)

    def matches(self, key: EntryKey) -> bool:
        return self.key == key

    def with_locked(self, locked: bool) -> "WorkEntry":
        return replace(self, locked=locked)

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "schedule_id": self.schedule_id,
            "schedule_item_id": self.schedule_item_id,
            "employee_id": self.employee_id,
            "quantity": self.quantity,
            "remarks": self.remarks,
            "recorded_at": self.recorded_at.isoformat(timespec="seconds"),
            "payload": self.payload.to_dict() if self.payload is not None else None,
            "total_sticks": self.total_sticks,
            "output_mass": self.output_mass,
            "locked": self.locked,
        }


@dataclass(frozen=True)
class LockedEntrySummary:
    """Read-model for the admin unlock list."""

    schedule_id: str
    item_id: str
    employee_id: str
    date: date
    task: str

    def to_dict(self) -> dict:
        return {
            "schedule_id": self.schedule_id,
            "item_id": self.item_id,
            "employee_id": self.employee_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "task": self.task,
        }

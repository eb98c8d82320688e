from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskType

# Parameters that carry meaning for each suggested task; the rest are zeroed.
TASK_PARAMETERS: dict[TaskType, frozenset[str]] = {
    TaskType.STRIPPING: frozenset({"target_mass", "number_of_scales"}),
    TaskType.BAILING_LAMINA: frozenset({"target_mass", "number_of_bales"}),
    TaskType.BAILING_STICKS: frozenset({"target_mass"}),
    TaskType.MACHINE: frozenset({"target_mass"}),
    TaskType.TICKET_BASED_WORK: frozenset({"quantity"}),
    TaskType.GRADING: frozenset({"number_of_bales", "class_grades"}),
}

_PARAMETER_DEFAULTS = {
    "target_mass": 0.0,
    "number_of_scales": 0,
    "number_of_bales": 0,
    "class_grades": (),
    "quantity": 0.0,
}


@dataclass(frozen=True)
class NewScheduleItem:
    """Schedule item as submitted by a form.

    `item_id` is set when an existing item is resubmitted during an edit.
    """

    task: str
    employee_ids: tuple[str, ...] = ()
    workers: int = 0
    target_mass: float = 0.0
    number_of_scales: int = 0
    number_of_bales: int = 0
    class_grades: tuple[str, ...] = ()
    quantity: float = 0.0
    item_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "NewScheduleItem":
        return cls(
            task=str(data.get("task") or "").strip(),
            employee_ids=tuple(str(e) for e in data.get("employee_ids") or ()),
            workers=int(data.get("workers") or 0),
            target_mass=float(data.get("target_mass") or 0),
            number_of_scales=int(data.get("number_of_scales") or 0),
            number_of_bales=int(data.get("number_of_bales") or 0),
            class_grades=tuple(str(g).strip() for g in data.get("class_grades") or () if str(g).strip()),
            quantity=float(data.get("quantity") or 0),
            item_id=data.get("id") or data.get("item_id") or None,
        )


@dataclass(frozen=True)
class ScheduleItem:
    item_id: str
    task: str
    workers: int
    employee_ids: tuple[str, ...]
    target_mass: float = 0.0
    number_of_scales: int = 0
    number_of_bales: int = 0
    class_grades: tuple[str, ...] = ()
    quantity: float = 0.0

    @property
    def task_type(self) -> Optional[TaskType]:
        return TaskType.from_task(self.task)

    def has_employee(self, employee_id: str) -> bool:
        return employee_id in self.employee_ids

    @classmethod
    def build(cls, item_id: str, new: NewScheduleItem) -> "ScheduleItem":
        item = cls(
            item_id=item_id,
            task=new.task,
            workers=new.workers or len(new.employee_ids),
            employee_ids=tuple(new.employee_ids),
            target_mass=new.target_mass,
            number_of_scales=new.number_of_scales,
            number_of_bales=new.number_of_bales,
            class_grades=tuple(new.class_grades),
            quantity=new.quantity,
        )
        return item.normalized()

    def normalized(self) -> "ScheduleItem":
        """Zero the parameters that do not apply to this item's task."""
        task_type = self.task_type
        if task_type is None:
            return self
        relevant = TASK_PARAMETERS[task_type]
        cleared = {name: default for name, default in _PARAMETER_DEFAULTS.items() if name not in relevant}
        return replace(self, **cleared)

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "task": self.task,
            "workers": self.workers,
            "employee_ids": list(self.employee_ids),
            "target_mass": self.target_mass,
            "number_of_scales": self.number_of_scales,
            "number_of_bales": self.number_of_bales,
            "class_grades": list(self.class_grades),
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class Schedule:
    """One calendar date's work plan."""

    schedule_id: str
    date: date
    items: tuple[ScheduleItem, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=datetime.now)

    def find_item(self, item_id: str) -> Optional[ScheduleItem]:
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "items": [item.to_dict() for item in self.items],
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }

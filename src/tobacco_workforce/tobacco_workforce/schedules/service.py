from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import generate_id, generate_schedule_id
from ..core.constants import ITEM_ID_PREFIX
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..policy import rules
from ..work_entries.repository import WorkEntryRepository
from .model import NewScheduleItem, Schedule, ScheduleItem
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use case: daily schedules (validate, create, edit, delete with cascade)."""

    def __init__(self, schedules: ScheduleRepository, work_entries: WorkEntryRepository):
        self._schedules = schedules
        self._entries = work_entries

    def list_schedules(self) -> list[Schedule]:
        return sorted(self._schedules.list_all(), key=lambda s: (s.date, s.created_at), reverse=True)

    def get_schedule_by_id(self, schedule_id: str) -> Optional[Schedule]:
        return self._schedules.get_by_id(schedule_id)

    def require_schedule(self, schedule_id: str) -> Schedule:
        schedule = self._schedules.get_by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def get_all_schedules_by_employee_id(self, employee_id: str) -> list[Schedule]:
        found = [s for s in self._schedules.list_all() if any(i.has_employee(employee_id) for i in s.items)]
        return sorted(found, key=lambda s: s.date)

    def is_employee_assigned_for_date(
        self, employee_id: str, day: date, exclude_item_id: Optional[str] = None
    ) -> bool:
        return rules.is_employee_assigned_for_date(employee_id, day, self._schedules.list_all(), exclude_item_id)

    def validate_submission(
        self,
        *,
        day: date,
        items: Sequence[NewScheduleItem],
        current_role: Role,
        today: Optional[date] = None,
        schedule_id: Optional[str] = None,
    ) -> None:
        """Checks run before create/update. The store itself does not call this."""
        editing = schedule_id is not None
        today = today or now_local().date()

        if not items:
            raise ValidationError("A schedule needs at least one task")
        if not editing and current_role != Role.ADMIN and day != today:
            raise ValidationError("Regular users can only create schedules for today")

        for item in items:
            if not item.task:
                raise ValidationError("Task is required for every schedule item")
            if not item.employee_ids:
                raise ValidationError("Please assign at least one employee to each task")
            if editing and item.workers and item.workers != len(item.employee_ids):
                raise ValidationError(
                    f"{item.task}: workers must match employees assigned ({item.workers} vs {len(item.employee_ids)})"
                )

        dupes = rules.duplicate_employee_ids(items)
        if dupes:
            raise ValidationError(f"Employee {dupes[0]} is assigned to more than one task in this schedule")

        others = [s for s in self._schedules.list_all() if s.schedule_id != schedule_id]
        tasks_on_day = {i.task.lower() for s in others if s.date == day for i in s.items}
        submitted: set[str] = set()
        for item in items:
            task_key = item.task.lower()
            if task_key in tasks_on_day or task_key in submitted:
                raise ValidationError(f"{item.task} task already scheduled for this date")
            submitted.add(task_key)

            for eid in item.employee_ids:
                hit = rules.find_assigned_item(eid, day, others)
                if hit:
                    raise ValidationError(
                        f"Employee {eid} is already assigned to another task on this date ({hit[1].task})"
                    )

    @staticmethod
    def _build_items(items: Iterable[NewScheduleItem], keep_ids: Iterable[str] = ()) -> tuple[ScheduleItem, ...]:
        reusable = set(keep_ids)
        built = []
        for new in items:
            item_id = new.item_id if new.item_id in reusable else generate_id(ITEM_ID_PREFIX)
            built.append(ScheduleItem.build(item_id, new))
        return tuple(built)

    def create_schedule(self, day: date, items: Sequence[NewScheduleItem]) -> Schedule:
        first_task = items[0].task if items else ""
        schedule = Schedule(
            schedule_id=generate_schedule_id(first_task),
            date=day,
            items=self._build_items(items),
            created_at=now_local(),
        )
        self._schedules.create(schedule)
        logger.info("Created schedule %s for %s with %d item(s)", schedule.schedule_id, day, len(schedule.items))
        return schedule

    def update_schedule(self, schedule_id: str, day: date, items: Sequence[NewScheduleItem]) -> Schedule:
        """Replace date and the whole item list. Resubmitted item ids are kept."""
        current = self.require_schedule(schedule_id)
        schedule = Schedule(
            schedule_id=schedule_id,
            date=day,
            items=self._build_items(items, keep_ids=(i.item_id for i in current.items)),
            created_at=current.created_at,
        )
        if not self._schedules.update(schedule):
            raise NotFoundError("Schedule not found")
        logger.info("Updated schedule %s", schedule_id)
        return schedule

    def delete_schedule(self, schedule_id: str) -> None:
        # Not atomic: entries go first; a failure there leaves the schedule untouched.
        self.require_schedule(schedule_id)
        removed = self._entries.delete_for_schedule(schedule_id)
        if not self._schedules.delete(schedule_id):
            raise NotFoundError("Schedule not found")
        logger.info("Deleted schedule %s and %d work entr(ies)", schedule_id, removed)


def parse_items(raw_items) -> list[NewScheduleItem]:
    if not isinstance(raw_items, list):
        raise ValidationError("items must be a list")
    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise ValidationError("Each schedule item must be an object")
        try:
            items.append(NewScheduleItem.from_dict(raw))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Malformed schedule item: {exc}") from exc
    return items


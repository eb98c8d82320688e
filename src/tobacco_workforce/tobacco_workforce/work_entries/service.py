from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.ids import generate_id
from ..common.validators import optional_text, require_non_negative
from ..core.constants import WORK_ENTRY_ID_PREFIX
from ..core.exceptions import NotFoundError, ValidationError
from ..drafts.model import Draft, DraftKey
from ..drafts.store import DraftStore
from ..policy import rules
from ..schedules.model import Schedule, ScheduleItem
from ..schedules.repository import ScheduleRepository
from .model import EntryKey, LockedEntrySummary, NewWorkEntry, WorkEntry
from .payloads import PAYLOAD_FOR_TASK, derive_totals
from .repository import WorkEntryRepository

logger = logging.getLogger(__name__)


class WorkEntryLedger:
    """Use case: record output per (schedule, item, employee) and lock finished triples.

    Entries are only ever appended, have their lock flag flipped, or disappear with
    their schedule. Any number of unlocked entries may pile up per triple.
    """

    def __init__(
        self,
        entries: WorkEntryRepository,
        schedules: ScheduleRepository,
        drafts: Optional[DraftStore] = None,
    ):
        self._entries = entries
        self._schedules = schedules
        self._drafts = drafts

    def _resolve(self, schedule_id: str, item_id: str) -> tuple[Schedule, ScheduleItem]:
        schedule = self._schedules.get_by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found")
        item = schedule.find_item(item_id)
        if not item:
            raise NotFoundError("Schedule item not found")
        return schedule, item

    def is_entry_locked(self, schedule_id: str, item_id: str, employee_id: str) -> bool:
        return rules.is_entry_locked(schedule_id, item_id, employee_id, self._entries.list_all())

    def add_work_entry(self, new: NewWorkEntry, *, now: Optional[datetime] = None) -> WorkEntry:
        _, item = self._resolve(new.schedule_id, new.schedule_item_id)
        if not item.has_employee(new.employee_id):
            raise ValidationError("Employee is not assigned to this task")
        if self.is_entry_locked(new.schedule_id, new.schedule_item_id, new.employee_id):
            raise ValidationError("This worker has been locked for this task")

        quantity = require_non_negative(new.quantity, "Quantity")
        task_type = item.task_type
        if new.payload is not None and task_type is not None and PAYLOAD_FOR_TASK[task_type] != new.payload.kind:
            raise ValidationError(f"{new.payload.kind.value} readings do not belong to a {item.task} task")

        derived = derive_totals(new.payload)
        entry = WorkEntry(
            entry_id=generate_id(WORK_ENTRY_ID_PREFIX),
            schedule_id=new.schedule_id,
            schedule_item_id=new.schedule_item_id,
            employee_id=new.employee_id,
            quantity=quantity,
            remarks=optional_text(new.remarks),
            recorded_at=now or now_local(),
            payload=new.payload,
            total_sticks=new.total_sticks if new.total_sticks is not None else derived.total_sticks,
            output_mass=new.output_mass if new.output_mass is not None else derived.output_mass,
            locked=False,
        )
        self._entries.create(entry)
        logger.info(
            "Recorded %s for employee %s on %s/%s (qty=%s)",
            entry.entry_id, entry.employee_id, entry.schedule_id, entry.schedule_item_id, entry.quantity,
        )
        if self._drafts is not None:
            self._drafts.clear(DraftKey(item.task, new.schedule_id, new.schedule_item_id, new.employee_id))
        return entry

    def record_and_lock(self, new: NewWorkEntry, *, now: Optional[datetime] = None) -> WorkEntry:
        entry = self.add_work_entry(new, now=now)
        self.lock_employee_entry(entry.schedule_id, entry.schedule_item_id, entry.employee_id)
        return entry.with_locked(True)

    def lock_employee_entry(self, schedule_id: str, item_id: str, employee_id: str) -> int:
        key = EntryKey(schedule_id, item_id, employee_id)
        rows = rules.entries_for_triple(key, self._entries.list_all())
        if not rows:
            raise NotFoundError("No work entries recorded for this employee and task")
        if not any(rules.can_mutate_entry(e) for e in rows):
            logger.info("%s/%s/%s already locked", schedule_id, item_id, employee_id)
            return len(rows)
        count = self._entries.set_locked(key, locked=True)
        if count == 0:
            raise NotFoundError("No work entries recorded for this employee and task")
        logger.info("Locked %s/%s/%s (%d row(s))", schedule_id, item_id, employee_id, count)
        return count

    def unlock_employee_entry(self, schedule_id: str, item_id: str, employee_id: str) -> bool:
        """Admin only; the caller checks the role."""
        count = self._entries.set_locked(EntryKey(schedule_id, item_id, employee_id), locked=False)
        if count:
            logger.info("Unlocked %s/%s/%s (%d row(s))", schedule_id, item_id, employee_id, count)
        return count > 0

    def get_work_entries_for_employee(self, schedule_id: str, employee_id: str) -> list[WorkEntry]:
        found = [e for e in self._entries.list_all() if e.schedule_id == schedule_id and e.employee_id == employee_id]
        return sorted(found, key=lambda e: e.recorded_at)

    def get_work_entries_for_schedule(self, schedule_id: str) -> list[WorkEntry]:
        return sorted((e for e in self._entries.list_all() if e.schedule_id == schedule_id), key=lambda e: e.recorded_at)

    def get_locked_employee_entries(self) -> list[LockedEntrySummary]:
        seen: set[EntryKey] = set()
        out: list[LockedEntrySummary] = []
        for entry in self._entries.list_all():
            if not entry.locked or entry.key in seen:
                continue
            seen.add(entry.key)
            schedule = self._schedules.get_by_id(entry.schedule_id)
            item = schedule.find_item(entry.schedule_item_id) if schedule else None
            if not item:
                continue
            out.append(
                LockedEntrySummary(
                    schedule_id=entry.schedule_id,
                    item_id=entry.schedule_item_id,
                    employee_id=entry.employee_id,
                    date=schedule.date,
                    task=item.task,
                )
            )
        return sorted(out, key=lambda s: (s.date, s.task, s.employee_id))

    def _draft_key(self, schedule_id: str, item_id: str, employee_id: str) -> DraftKey:
        _, item = self._resolve(schedule_id, item_id)
        return DraftKey(item.task, schedule_id, item_id, employee_id)

    def _require_drafts(self) -> DraftStore:
        if self._drafts is None:
            raise ValidationError("Saving progress is not available")
        return self._drafts

    def save_draft(self, schedule_id: str, item_id: str, employee_id: str, data: dict) -> Draft:
        return self._require_drafts().save(self._draft_key(schedule_id, item_id, employee_id), data)

    def load_draft(self, schedule_id: str, item_id: str, employee_id: str) -> Optional[Draft]:
        return self._require_drafts().load(self._draft_key(schedule_id, item_id, employee_id))

    def clear_draft(self, schedule_id: str, item_id: str, employee_id: str) -> bool:
        return self._require_drafts().clear(self._draft_key(schedule_id, item_id, employee_id))

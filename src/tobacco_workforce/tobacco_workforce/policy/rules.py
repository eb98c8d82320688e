"""Conflict and lock rules.

Pure predicates over already-loaded collections. Nothing here raises or performs
I/O; callers turn a blocking answer into a ValidationError.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..schedules.model import Schedule, ScheduleItem
from ..work_entries.model import EntryKey, WorkEntry


def find_assigned_item(
    employee_id: str,
    day: date,
    schedules: Iterable[Schedule],
    exclude_item_ids: Iterable[str] = (),
) -> Optional[tuple[Schedule, ScheduleItem]]:
    """First (schedule, item) on `day` that already holds the employee."""
    excluded = set(exclude_item_ids)
    for schedule in schedules:
        if schedule.date != day:
            continue
        for item in schedule.items:
            if item.item_id in excluded:
                continue
            if item.has_employee(employee_id):
                return schedule, item
    return None


def is_employee_assigned_for_date(
    employee_id: str,
    day: date,
    schedules: Iterable[Schedule],
    exclude_item_id: Optional[str] = None,
) -> bool:
    excluded = (exclude_item_id,) if exclude_item_id else ()
    return find_assigned_item(employee_id, day, schedules, excluded) is not None


def duplicate_employee_ids(items: Iterable) -> list[str]:
    """Employee ids that appear in more than one item (or twice in one item)."""
    seen: set[str] = set()
    dupes: list[str] = []
    for item in items:
        for eid in item.employee_ids:
            if eid in seen and eid not in dupes:
                dupes.append(eid)
            seen.add(eid)
    return dupes


def entries_for_triple(key: EntryKey, entries: Iterable[WorkEntry]) -> list[WorkEntry]:
    return [e for e in entries if e.matches(key)]


def is_entry_locked(schedule_id: str, item_id: str, employee_id: str, entries: Iterable[WorkEntry]) -> bool:
    key = EntryKey(schedule_id, item_id, employee_id)
    return any(e.locked for e in entries_for_triple(key, entries))


def can_mutate_entry(entry: WorkEntry) -> bool:
    return not entry.locked

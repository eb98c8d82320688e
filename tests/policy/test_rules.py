from datetime import date

from src.tobacco_workforce.tobacco_workforce.policy import rules
from src.tobacco_workforce.tobacco_workforce.schedules.model import NewScheduleItem


DAY = date(2026, 3, 2)


def test_employee_on_another_item_that_day_is_assigned(make_item, make_schedule):
    schedules = [make_schedule("SCH-1", DAY, [make_item("ITEM-1", employee_ids=("EMP-1", "EMP-2"))])]

    assert rules.is_employee_assigned_for_date("EMP-1", DAY, schedules) is True
    assert rules.is_employee_assigned_for_date("EMP-3", DAY, schedules) is False


def test_excluded_item_under_edit_does_not_count(make_item, make_schedule):
    schedules = [make_schedule("SCH-1", DAY, [make_item("ITEM-1", employee_ids=("EMP-1",))])]

    assert rules.is_employee_assigned_for_date("EMP-1", DAY, schedules, exclude_item_id="ITEM-1") is False


def test_other_dates_are_ignored(make_item, make_schedule):
    schedules = [make_schedule("SCH-1", date(2026, 3, 1), [make_item("ITEM-1", employee_ids=("EMP-1",))])]

    assert rules.is_employee_assigned_for_date("EMP-1", DAY, schedules) is False
    assert rules.find_assigned_item("EMP-1", DAY, schedules) is None


def test_find_assigned_item_returns_schedule_and_item(make_item, make_schedule):
    item = make_item("ITEM-2", task="Machine", employee_ids=("EMP-2",))
    schedule = make_schedule("SCH-1", DAY, [make_item("ITEM-1"), item])

    assert rules.find_assigned_item("EMP-2", DAY, [schedule]) == (schedule, item)


def test_duplicate_employee_ids_across_submitted_items():
    items = [
        NewScheduleItem(task="Stripping", employee_ids=("EMP-1", "EMP-2")),
        NewScheduleItem(task="Machine", employee_ids=("EMP-2", "EMP-3")),
    ]

    assert rules.duplicate_employee_ids(items) == ["EMP-2"]
    assert rules.duplicate_employee_ids(items[:1]) == []


def test_triple_is_locked_when_any_entry_is_locked(make_entry):
    entries = [
        make_entry("SCH-1", "ITEM-1", "EMP-1"),
        make_entry("SCH-1", "ITEM-1", "EMP-1", locked=True),
        make_entry("SCH-1", "ITEM-1", "EMP-2"),
    ]

    assert rules.is_entry_locked("SCH-1", "ITEM-1", "EMP-1", entries) is True
    assert rules.is_entry_locked("SCH-1", "ITEM-1", "EMP-2", entries) is False
    assert rules.is_entry_locked("SCH-9", "ITEM-1", "EMP-1", entries) is False


def test_can_mutate_entry_only_when_unlocked(make_entry):
    assert rules.can_mutate_entry(make_entry("SCH-1", "ITEM-1", "EMP-1")) is True
    assert rules.can_mutate_entry(make_entry("SCH-1", "ITEM-1", "EMP-1", locked=True)) is False

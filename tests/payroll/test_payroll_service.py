from __future__ import annotations

from datetime import date, datetime

import pytest

from src.tobacco_workforce.tobacco_workforce.core.exceptions import ValidationError
from src.tobacco_workforce.tobacco_workforce.payroll.rates import PayRateTable
from src.tobacco_workforce.tobacco_workforce.payroll.service import PayrollReportService


@pytest.fixture
def payroll(schedules_repo, entries_repo, employees_repo, rate_store):
    return PayrollReportService(schedules_repo, entries_repo, employees_repo, rate_store)


@pytest.fixture
def week(schedules_repo, entries_repo, make_item, make_schedule, make_entry):
    schedules_repo.create(
        make_schedule(
            "SCH-1",
            date(2026, 3, 2),
            [
                make_item("ITEM-1", task="Stripping", employee_ids=("EMP-1",)),
                make_item("ITEM-2", task="Machine", employee_ids=("EMP-2",)),
            ],
        )
    )
    schedules_repo.create(make_schedule("SCH-2", date(2026, 3, 6), [make_item("ITEM-3", task="Machine", employee_ids=("EMP-1",))]))
    schedules_repo.create(make_schedule("SCH-3", date(2026, 3, 9), [make_item("ITEM-4", task="Stripping", employee_ids=("EMP-1",))]))

    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-1", quantity=100))
    entries_repo.create(make_entry("SCH-1", "ITEM-2", "EMP-2", quantity=20))
    entries_repo.create(make_entry("SCH-2", "ITEM-3", "EMP-1", quantity=50))
    entries_repo.create(make_entry("SCH-3", "ITEM-4", "EMP-1", quantity=999))
    entries_repo.create(make_entry("SCH-1", "ITEM-GONE", "EMP-1", quantity=10))
    return schedules_repo


RATES = PayRateTable({"Stripping": 2.5, "Machine": 4.0})


def test_payroll_multiplies_quantity_by_task_rate(payroll, week):
    report = payroll.build_payroll(start=date(2026, 3, 2), end=date(2026, 3, 6), rates=RATES)

    thandi = report.for_employee("EMP-1")
    assert thandi.total_amount == pytest.approx(450.0)
    assert [(l.task, l.quantity, l.amount) for l in thandi.lines] == [("Stripping", 100, 250.0), ("Machine", 50, 200.0)]
    assert report.for_employee("EMP-2").total_amount == pytest.approx(80.0)


def test_payroll_range_includes_end_date(payroll, week):
    report = payroll.build_payroll(start=date(2026, 3, 6), end=date(2026, 3, 6), rates=RATES)

    assert [e.employee_id for e in report.employees] == ["EMP-1"]
    assert report.employees[0].total_amount == pytest.approx(200.0)


def test_payroll_sorted_by_full_name(payroll, week):
    report = payroll.build_payroll(start=date(2026, 3, 1), end=date(2026, 3, 31), rates=RATES)

    assert [e.full_name for e in report.employees] == ["Brian Ncube", "Thandi Moyo"]


def test_missing_rate_pays_zero_and_unknown_employee_labelled_by_id(payroll, schedules_repo, entries_repo, make_item, make_schedule, make_entry):
    schedules_repo.create(make_schedule("SCH-9", date(2026, 4, 1), [make_item("ITEM-9", task="Sweeping", employee_ids=("EMP-404",))]))
    entries_repo.create(make_entry("SCH-9", "ITEM-9", "EMP-404", quantity=3))

    report = payroll.build_payroll(start=date(2026, 4, 1), end=date(2026, 4, 1), rates=RATES)

    assert report.employees[0].full_name == "EMP-404"
    assert report.employees[0].total_amount == 0


def test_report_dict_rounds_to_two_decimals(payroll, schedules_repo, entries_repo, make_item, make_schedule, make_entry):
    schedules_repo.create(make_schedule("SCH-1", date(2026, 3, 2), [make_item("ITEM-1")]))
    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-1", quantity=3))

    data = payroll.build_payroll(start=date(2026, 3, 2), end=date(2026, 3, 2), rates=PayRateTable({"Stripping": 0.1})).to_dict()

    assert data["employees"][0]["total_amount"] == 0.3
    assert data["grand_total"] == 0.3


def test_default_rates_come_from_store(payroll, week):
    report = payroll.build_payroll(start=date(2026, 3, 2), end=date(2026, 3, 2))

    assert report.for_employee("EMP-1").total_amount == pytest.approx(100 * 0.1)
    assert report.for_employee("EMP-2").total_amount == pytest.approx(20 * 0.12)


def test_end_before_start_is_rejected(payroll):
    with pytest.raises(ValidationError):
        payroll.build_payroll(start=date(2026, 3, 2), end=date(2026, 3, 1))


def test_work_report_filters_by_recorded_date_and_employee(payroll, schedules_repo, entries_repo, make_item, make_schedule, make_entry):
    schedules_repo.create(make_schedule("SCH-1", date(2026, 3, 2), [make_item("ITEM-1", employee_ids=("EMP-1", "EMP-2"))]))
    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-1", quantity=4, recorded_at=datetime(2026, 3, 2, 8, 0)))
    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-1", quantity=6, recorded_at=datetime(2026, 3, 3, 8, 0)))
    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-2", quantity=1, recorded_at=datetime(2026, 3, 3, 9, 0)))
    entries_repo.create(make_entry("SCH-1", "ITEM-1", "EMP-1", quantity=8, recorded_at=datetime(2026, 3, 5, 8, 0)))

    everyone = payroll.build_work_report(start=date(2026, 3, 2), end=date(2026, 3, 3))
    only_one = payroll.build_work_report(start=date(2026, 3, 2), end=date(2026, 3, 3), employee_id="EMP-1")

    assert len(everyone.rows) == 3
    assert [s["full_name"] for s in everyone.summary] == ["Brian Ncube", "Thandi Moyo"]
    assert [r["quantity"] for r in only_one.rows] == [4, 6]
    assert only_one.summary == [{"employee_id": "EMP-1", "full_name": "Thandi Moyo", "entries": 2, "total_quantity": 10.0}]
    assert only_one.rows[0]["task"] == "Stripping"
    assert only_one.rows[0]["date"] == "2026-03-02"

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.repository import ScheduleRepository
from ..work_entries.repository import WorkEntryRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import EmployeePayroll, PayrollLine, PayrollReport
from .rates import JsonPayRateStore, PayRateTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _check_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date cannot be before start date")


class PayrollReportService:
    """Read-only reports over schedules, work entries and the local rate table."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        entries: WorkEntryRepository,
        employees: EmployeeRepository,
        rate_store: JsonPayRateStore,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._schedules = schedules
        self._entries = entries
        self._employees = employees
        self._rate_store = rate_store
        self._calculator = calculator or StandardPayrollCalculator()

    def get_rates(self) -> PayRateTable:
        return self._rate_store.load()

    def save_rates(self, rates: Mapping) -> PayRateTable:
        table = PayRateTable.from_dict(rates)
        self._rate_store.save(table)
        return table

    def set_rate(self, task: str, rate) -> PayRateTable:
        table = self._rate_store.load().with_rate(task, rate)
        self._rate_store.save(table)
        return table

    def _names(self) -> dict[str, str]:
        return {e.employee_id: e.full_name for e in self._employees.list_all()}

    def build_payroll(self, *, start: date, end: date, rates: Optional[PayRateTable] = None) -> PayrollReport:
        _check_range(start, end)
        rates = rates or self._rate_store.load()
        in_range = {s.schedule_id: s for s in self._schedules.list_all() if start <= s.date <= end}
        names = self._names()

        by_employee: dict[str, EmployeePayroll] = {}
        for entry in self._entries.list_all():
            schedule = in_range.get(entry.schedule_id)
            if not schedule:
                continue
            item = schedule.find_item(entry.schedule_item_id)
            if not item:
                continue
            rate = rates.rate_for(item.task)
            line = PayrollLine(
                schedule_id=schedule.schedule_id,
                item_id=item.item_id,
                task=item.task,
                date=schedule.date,
                quantity=entry.quantity,
                rate=rate,
                amount=self._calculator.amount(entry, rate),
            )
            payroll = by_employee.get(entry.employee_id)
            if not payroll:
                # Employees deleted from the directory are still paid, labelled by id.
                payroll = EmployeePayroll(entry.employee_id, names.get(entry.employee_id, entry.employee_id))
                by_employee[entry.employee_id] = payroll
            payroll.add(line)

        for payroll in by_employee.values():
            payroll.lines.sort(key=lambda l: (l.date, l.task))
        employees = sorted(by_employee.values(), key=lambda p: p.full_name.lower())
        logger.debug("Payroll %s..%s: %d employee(s)", start, end, len(employees))
        return PayrollReport(start=start, end=end, employees=employees)

    def build_work_report(self, *, start: date, end: date, employee_id: Optional[str] = None) -> ReportData:
        """Entries recorded within [start, end], optionally for one employee."""
        _check_range(start, end)
        schedules = {s.schedule_id: s for s in self._schedules.list_all()}
        names = self._names()

        rows: list[dict] = []
        summary_map: dict[str, dict] = {}
        entries = sorted(self._entries.list_all(), key=lambda e: e.recorded_at)
        for e in entries:
            if not (start <= e.recorded_at.date() <= end):
                continue
            if employee_id and e.employee_id != employee_id:
                continue
            schedule = schedules.get(e.schedule_id)
            item = schedule.find_item(e.schedule_item_id) if schedule else None
            full_name = names.get(e.employee_id, e.employee_id)

            rows.append(
                {
                    "entry_id": e.entry_id,
                    "employee_id": e.employee_id,
                    "full_name": full_name,
                    "date": schedule.date.strftime("%Y-%m-%d") if schedule else "-",
                    "task": item.task if item else "-",
                    "quantity": e.quantity,
                    "total_sticks": e.total_sticks,
                    "output_mass": e.output_mass,
                    "remarks": e.remarks,
                    "recorded_at": e.recorded_at.strftime("%Y-%m-%d %H:%M"),
                    "locked": e.locked,
                }
            )

            s = summary_map.get(e.employee_id)
            if not s:
                s = {"employee_id": e.employee_id, "full_name": full_name, "entries": 0, "total_quantity": 0.0}
                summary_map[e.employee_id] = s
            s["entries"] += 1
            s["total_quantity"] += e.quantity

        summary = sorted(summary_map.values(), key=lambda x: x["full_name"].lower())
        return ReportData(rows=rows, summary=summary)

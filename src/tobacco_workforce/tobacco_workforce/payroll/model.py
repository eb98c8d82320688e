from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class PayrollLine:
    schedule_id: str
    item_id: str
    task: str
    date: date
    quantity: float
    rate: float
    amount: float

    def to_dict(self) -> dict:
        return {
            "schedule_id": self.schedule_id,
            "item_id": self.item_id,
            "task": self.task,
            "date": self.date.strftime("%Y-%m-%d"),
            "quantity": self.quantity,
            "rate": self.rate,
            "amount": round(self.amount, 2),
        }


@dataclass
class EmployeePayroll:
    employee_id: str
    full_name: str
    total_amount: float = 0.0
    lines: list[PayrollLine] = field(default_factory=list)

    def add(self, line: PayrollLine) -> None:
        self.lines.append(line)
        self.total_amount += line.amount

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "total_amount": round(self.total_amount, 2),
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass(frozen=True)
class PayrollReport:
    start: date
    end: date
    employees: list[EmployeePayroll]

    @property
    def grand_total(self) -> float:
        return sum(e.total_amount for e in self.employees)

    def for_employee(self, employee_id: str) -> EmployeePayroll | None:
        for e in self.employees:
            if e.employee_id == employee_id:
                return e
        return None

    def to_dict(self) -> dict:
        return {
            "start": self.start.strftime("%Y-%m-%d"),
            "end": self.end.strftime("%Y-%m-%d"),
            "employees": [e.to_dict() for e in self.employees],
            "grand_total": round(self.grand_total, 2),
        }

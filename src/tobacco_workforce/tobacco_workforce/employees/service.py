from __future__ import annotations

import logging
from typing import Optional

from ..common.ids import generate_id
from ..common.validators import optional_text, require_non_empty
from ..core.constants import EMPLOYEE_ID_PREFIX
from ..core.exceptions import NotFoundError
from .model import Employee, EmployeeDetails
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee directory (list/search/create/update/delete)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    @staticmethod
    def _clean(details: EmployeeDetails) -> EmployeeDetails:
        return EmployeeDetails(
            name=require_non_empty(details.name, "Name"),
            surname=require_non_empty(details.surname, "Surname"),
            id_number=optional_text(details.id_number),
            contact=optional_text(details.contact),
            address=optional_text(details.address),
            gender=optional_text(details.gender),
            next_of_kin_name=optional_text(details.next_of_kin_name),
            next_of_kin_contact=optional_text(details.next_of_kin_contact),
        )

    def list_employees(self) -> list[Employee]:
        return sorted(self._employees.list_all(), key=lambda e: e.full_name.lower())

    def search(self, term: Optional[str]) -> list[Employee]:
        """Match name, surname, id or national id, case-insensitive."""
        needle = (term or "").strip().lower()
        employees = self.list_employees()
        if not needle:
            return employees
        return [
            e
            for e in employees
            if needle in e.full_name.lower()
            or needle in e.employee_id.lower()
            or needle in e.id_number.lower()
        ]

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(self, details: EmployeeDetails) -> Employee:
        employee = Employee.from_details(generate_id(EMPLOYEE_ID_PREFIX), self._clean(details))
        self._employees.create(employee)
        logger.info("Created employee %s (%s)", employee.employee_id, employee.full_name)
        return employee

    def update_employee(self, employee_id: str, details: EmployeeDetails) -> Employee:
        self.get_employee(employee_id)
        employee = Employee.from_details(employee_id, self._clean(details))
        if not self._employees.update(employee):
            raise NotFoundError("Employee not found")
        logger.info("Updated employee %s", employee_id)
        return employee

    def delete_employee(self, employee_id: str) -> None:
        # Schedules and work entries that still reference the employee are left as-is.
        self.get_employee(employee_id)
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", employee_id)

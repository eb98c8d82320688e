from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmployeeDetails:
    """Editable employee fields (everything except the id)."""

    name: str
    surname: str
    id_number: str = ""
    contact: str = ""
    address: str = ""
    gender: str = ""
    next_of_kin_name: str = ""
    next_of_kin_contact: str = ""


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    `employee_id` is the stable external identifier; it never changes once created.
    """

    employee_id: str
    name: str
    surname: str
    id_number: str = ""
    contact: str = ""
    address: str = ""
    gender: str = ""
    next_of_kin_name: str = ""
    next_of_kin_contact: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @classmethod
    def from_details(cls, employee_id: str, details: EmployeeDetails) -> "Employee":
        return cls(
            employee_id=employee_id,
            name=details.name,
            surname=details.surname,
            id_number=details.id_number,
            contact=details.contact,
            address=details.address,
            gender=details.gender,
            next_of_kin_name=details.next_of_kin_name,
            next_of_kin_contact=details.next_of_kin_contact,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "surname": self.surname,
            "full_name": self.full_name,
            "id_number": self.id_number,
            "contact": self.contact,
            "address": self.address,
            "gender": self.gender,
            "next_of_kin_name": self.next_of_kin_name,
            "next_of_kin_contact": self.next_of_kin_contact,
        }

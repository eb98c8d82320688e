from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, name, surname, idno, contact, address, gender, nextofkinname, nextofkincontact"


def row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=str(row["id"]),
        name=row.get("name") or "",
        surname=row.get("surname") or "",
        id_number=row.get("idno") or "",
        contact=row.get("contact") or "",
        address=row.get("address") or "",
        gender=row.get("gender") or "",
        next_of_kin_name=row.get("nextofkinname") or "",
        next_of_kin_contact=row.get("nextofkincontact") or "",
    )


def employee_to_params(employee: Employee) -> tuple:
    return (
        employee.name,
        employee.surname,
        employee.id_number,
        employee.contact,
        employee.address,
        employee.gender,
        employee.next_of_kin_name,
        employee.next_of_kin_contact,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name, surname")
            return [row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (employee_id,))
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def create(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                (employee.employee_id, *employee_to_params(employee)),
            )

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, surname=%s, idno=%s, contact=%s, address=%s, gender=%s,
                    nextofkinname=%s, nextofkincontact=%s
                WHERE id=%s
                """,
                (*employee_to_params(employee), employee.employee_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            return cur.rowcount > 0

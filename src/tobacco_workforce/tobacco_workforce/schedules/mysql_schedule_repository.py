from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, to_date, to_datetime
from .model import Schedule, ScheduleItem
from .repository import ScheduleRepository


def item_to_json(item: ScheduleItem) -> dict:
    return {
        "id": item.item_id,
        "task": item.task,
        "workers": item.workers,
        "employeeids": list(item.employee_ids),
        "targetmass": item.target_mass,
        "numberofscales": item.number_of_scales,
        "numberofbales": item.number_of_bales,
        "classgrades": list(item.class_grades),
        "quantity": item.quantity,
    }


def json_to_item(data: dict) -> ScheduleItem:
    return ScheduleItem(
        item_id=str(data["id"]),
        task=data.get("task") or "",
        workers=int(data.get("workers") or 0),
        employee_ids=tuple(str(e) for e in data.get("employeeids") or ()),
        target_mass=float(data.get("targetmass") or 0),
        number_of_scales=int(data.get("numberofscales") or 0),
        number_of_bales=int(data.get("numberofbales") or 0),
        class_grades=tuple(data.get("classgrades") or ()),
        quantity=float(data.get("quantity") or 0),
    )


def row_to_schedule(row: dict) -> Schedule:
    return Schedule(
        schedule_id=str(row["id"]),
        date=to_date(row["date"]),
        items=tuple(json_to_item(i) for i in load_json(row.get("items"), default=[])),
        created_at=to_datetime(row["createdat"]),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, date, items, createdat FROM schedules ORDER BY date DESC, createdat DESC")
            return [row_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, date, items, createdat FROM schedules WHERE id=%s", (schedule_id,))
            row = fetchone(cur)
            return row_to_schedule(row) if row else None

    def create(self, schedule: Schedule) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO schedules(id, date, items, createdat) VALUES(%s,%s,%s,%s)",
                (
                    schedule.schedule_id,
                    schedule.date,
                    dump_json([item_to_json(i) for i in schedule.items]),
                    schedule.created_at,
                ),
            )

    def update(self, schedule: Schedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE schedules SET date=%s, items=%s WHERE id=%s",
                (schedule.date, dump_json([item_to_json(i) for i in schedule.items]), schedule.schedule_id),
            )
            return cur.rowcount > 0

    def delete(self, schedule_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE id=%s", (schedule_id,))
            return cur.rowcount > 0

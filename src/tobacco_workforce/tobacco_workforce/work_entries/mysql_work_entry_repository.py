from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json, to_datetime
from .model import EntryKey, WorkEntry
from .payloads import PAYLOAD_COLUMNS, payload_from_columns, payload_to_columns
from .repository import WorkEntryRepository

_COLUMNS = (
    "id, scheduleid, scheduleitemid, employeeid, quantity, remarks, recordedat, payloadkind, "
    "scaleentries, cartons, massinputs, outputentries, dutyname, totalsticks, outputmass, locked"
)


def _opt_float(value):
    return float(value) if value is not None else None


def row_to_entry(row: dict) -> WorkEntry:
    decoded = dict(row)
    for name in ("scaleentries", "cartons", "massinputs", "outputentries"):
        decoded[name] = load_json(row.get(name))
    return WorkEntry(
        entry_id=str(row["id"]),
        schedule_id=str(row["scheduleid"]),
        schedule_item_id=str(row["scheduleitemid"]),
        employee_id=str(row["employeeid"]),
        quantity=float(row.get("quantity") or 0),
        remarks=row.get("remarks") or "",
        recorded_at=to_datetime(row["recordedat"]),
        payload=payload_from_columns(row.get("payloadkind"), decoded),
        total_sticks=_opt_float(row.get("totalsticks")),
        output_mass=_opt_float(row.get("outputmass")),
        locked=bool(row.get("locked")),
    )


def entry_to_params(entry: WorkEntry) -> tuple:
    columns = payload_to_columns(entry.payload)
    payload_values = tuple(
        columns[name] if name == "dutyname" else dump_json(columns[name]) for name in PAYLOAD_COLUMNS
    )
    return (
        entry.entry_id,
        entry.schedule_id,
        entry.schedule_item_id,
        entry.employee_id,
        entry.quantity,
        entry.remarks,
        entry.recorded_at,
        entry.payload.kind.value if entry.payload is not None else None,
        *payload_values,
        entry.total_sticks,
        entry.output_mass,
        1 if entry.locked else 0,
    )


class MySQLWorkEntryRepository(WorkEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_entries ORDER BY recordedat ASC")
            return [row_to_entry(r) for r in fetchall(cur)]

    def create(self, entry: WorkEntry) -> None:
        placeholders = ",".join(["%s"] * 16)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO work_entries({_COLUMNS}) VALUES({placeholders})", entry_to_params(entry))

    def set_locked(self, key: EntryKey, *, locked: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_entries SET locked=%s
                WHERE scheduleid=%s AND scheduleitemid=%s AND employeeid=%s
                """,
                (1 if locked else 0, key.schedule_id, key.item_id, key.employee_id),
            )
            return cur.rowcount

    def delete_for_schedule(self, schedule_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_entries WHERE scheduleid=%s", (schedule_id,))
            return cur.rowcount

from __future__ import annotations

from flask import Flask, jsonify

from ..common.validators import require_non_empty, require_non_negative
from ..common.web import admin_required, json_body, login_required
from ..container import Container
from .model import NewWorkEntry
from .payloads import payload_from_dict


def _opt_number(value, field_name: str):
    return require_non_negative(value, field_name) if value not in (None, "") else None


def _triple(data: dict) -> tuple[str, str, str]:
    return (
        require_non_empty(data.get("schedule_id"), "schedule_id"),
        require_non_empty(data.get("item_id"), "item_id"),
        require_non_empty(data.get("employee_id"), "employee_id"),
    )


def register(app: Flask, container: Container) -> None:
    ledger = container.work_entry_ledger

    @app.route("/schedules/<schedule_id>/employees/<employee_id>/entries", methods=["GET"], endpoint="employee_entries")
    @login_required
    def employee_entries(schedule_id: str, employee_id: str):
        entries = ledger.get_work_entries_for_employee(schedule_id, employee_id)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/schedules/<schedule_id>/entries", methods=["GET"], endpoint="schedule_entries")
    @login_required
    def schedule_entries(schedule_id: str):
        return jsonify([e.to_dict() for e in ledger.get_work_entries_for_schedule(schedule_id)])

    @app.route("/work-entries", methods=["POST"], endpoint="add_work_entry")
    @login_required
    def add_work_entry():
        data = json_body()
        schedule_id, item_id, employee_id = _triple(data)
        new = NewWorkEntry(
            schedule_id=schedule_id,
            schedule_item_id=item_id,
            employee_id=employee_id,
            quantity=data.get("quantity", 0),
            remarks=data.get("remarks", ""),
            payload=payload_from_dict(data.get("payload")),
            total_sticks=_opt_number(data.get("total_sticks"), "total_sticks"),
            output_mass=_opt_number(data.get("output_mass"), "output_mass"),
        )
        entry = ledger.record_and_lock(new) if data.get("lock") else ledger.add_work_entry(new)
        return jsonify(entry.to_dict()), 201

    @app.route("/work-entries/lock", methods=["POST"], endpoint="lock_work_entries")
    @login_required
    def lock_work_entries():
        count = ledger.lock_employee_entry(*_triple(json_body()))
        return jsonify({"locked": count})

    @app.route("/work-entries/unlock", methods=["POST"], endpoint="unlock_work_entries")
    @admin_required
    def unlock_work_entries():
        return jsonify({"unlocked": ledger.unlock_employee_entry(*_triple(json_body()))})

    @app.route("/work-entries/locked", methods=["GET"], endpoint="locked_work_entries")
    @admin_required
    def locked_work_entries():
        return jsonify([s.to_dict() for s in ledger.get_locked_employee_entries()])

    @app.route("/drafts/<schedule_id>/<item_id>/<employee_id>", methods=["GET"], endpoint="get_draft")
    @login_required
    def get_draft(schedule_id: str, item_id: str, employee_id: str):
        draft = ledger.load_draft(schedule_id, item_id, employee_id)
        return jsonify(draft.to_dict() if draft else None)

    @app.route("/drafts/<schedule_id>/<item_id>/<employee_id>", methods=["PUT"], endpoint="save_draft")
    @login_required
    def save_draft(schedule_id: str, item_id: str, employee_id: str):
        draft = ledger.save_draft(schedule_id, item_id, employee_id, json_body())
        return jsonify(draft.to_dict())

    @app.route("/drafts/<schedule_id>/<item_id>/<employee_id>", methods=["DELETE"], endpoint="clear_draft")
    @login_required
    def clear_draft(schedule_id: str, item_id: str, employee_id: str):
        return jsonify({"cleared": ledger.clear_draft(schedule_id, item_id, employee_id)})

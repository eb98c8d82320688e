from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_role, json_body, login_required
from ..container import Container
from ..core.exceptions import NotFoundError
from .service import parse_items


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/schedules", methods=["GET"], endpoint="list_schedules")
    @login_required
    def list_schedules():
        return jsonify([s.to_dict() for s in service.list_schedules()])

    @app.route("/schedules/assignment-check", methods=["GET"], endpoint="assignment_check")
    @login_required
    def assignment_check():
        employee_id = request.args.get("employee_id", "")
        day = parse_iso_date(request.args.get("date", ""))
        assigned = service.is_employee_assigned_for_date(
            employee_id, day, exclude_item_id=request.args.get("exclude_item_id") or None
        )
        return jsonify({"employee_id": employee_id, "date": day.strftime("%Y-%m-%d"), "assigned": assigned})

    @app.route("/schedules/<schedule_id>", methods=["GET"], endpoint="get_schedule")
    @login_required
    def get_schedule(schedule_id: str):
        schedule = service.get_schedule_by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found")
        return jsonify(schedule.to_dict())

    @app.route("/employees/<employee_id>/schedules", methods=["GET"], endpoint="employee_schedules")
    @login_required
    def employee_schedules(employee_id: str):
        return jsonify([s.to_dict() for s in service.get_all_schedules_by_employee_id(employee_id)])

    @app.route("/schedules", methods=["POST"], endpoint="create_schedule")
    @login_required
    def create_schedule():
        data = json_body()
        day = parse_iso_date(data.get("date", ""))
        items = parse_items(data.get("items"))
        service.validate_submission(day=day, items=items, current_role=current_role())
        schedule = service.create_schedule(day, items)
        return jsonify(schedule.to_dict()), 201

    @app.route("/schedules/<schedule_id>", methods=["PUT"], endpoint="update_schedule")
    @admin_required
    def update_schedule(schedule_id: str):
        data = json_body()
        day = parse_iso_date(data.get("date", ""))
        items = parse_items(data.get("items"))
        service.require_schedule(schedule_id)
        service.validate_submission(day=day, items=items, current_role=current_role(), schedule_id=schedule_id)
        return jsonify(service.update_schedule(schedule_id, day, items).to_dict())

    @app.route("/schedules/<schedule_id>", methods=["DELETE"], endpoint="delete_schedule")
    @admin_required
    def delete_schedule(schedule_id: str):
        service.delete_schedule(schedule_id)
        return jsonify({"ok": True})

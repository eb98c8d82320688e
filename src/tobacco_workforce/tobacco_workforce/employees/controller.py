from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, json_body, login_required
from ..container import Container
from .model import EmployeeDetails


def _details(data: dict) -> EmployeeDetails:
    return EmployeeDetails(
        name=data.get("name", ""),
        surname=data.get("surname", ""),
        id_number=data.get("id_number", ""),
        contact=data.get("contact", ""),
        address=data.get("address", ""),
        gender=data.get("gender", ""),
        next_of_kin_name=data.get("next_of_kin_name", ""),
        next_of_kin_contact=data.get("next_of_kin_contact", ""),
    )


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        employees = service.search(request.args.get("q"))
        return jsonify([e.to_dict() for e in employees])

    @app.route("/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        return jsonify(service.get_employee(employee_id).to_dict())

    @app.route("/employees", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee():
        employee = service.create_employee(_details(json_body()))
        return jsonify(employee.to_dict()), 201

    @app.route("/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: str):
        return jsonify(service.update_employee(employee_id, _details(json_body())).to_dict())

    @app.route("/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: str):
        service.delete_employee(employee_id)
        return jsonify({"ok": True})

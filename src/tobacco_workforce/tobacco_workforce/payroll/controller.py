from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_report_service

    @app.route("/payroll", methods=["GET"], endpoint="payroll_report")
    @admin_required
    def payroll_report():
        start = parse_iso_date(request.args.get("start", ""))
        end = parse_iso_date(request.args.get("end", ""))
        return jsonify(service.build_payroll(start=start, end=end).to_dict())

    @app.route("/reports/work", methods=["GET"], endpoint="work_report")
    @admin_required
    def work_report():
        start = parse_iso_date(request.args.get("start", ""))
        end = parse_iso_date(request.args.get("end", ""))
        data = service.build_work_report(start=start, end=end, employee_id=request.args.get("employee_id") or None)
        return jsonify({"rows": data.rows, "summary": data.summary})

    @app.route("/pay-rates", methods=["GET"], endpoint="get_pay_rates")
    @admin_required
    def get_pay_rates():
        return jsonify(service.get_rates().to_dict())

    @app.route("/pay-rates", methods=["PUT"], endpoint="save_pay_rates")
    @admin_required
    def save_pay_rates():
        table = service.save_rates(json_body())
        app.logger.info("Pay rates updated: %s", ", ".join(sorted(table.rates)))
        return jsonify(table.to_dict())

    @app.route("/pay-rates/<task>", methods=["PUT"], endpoint="set_pay_rate")
    @admin_required
    def set_pay_rate(task: str):
        table = service.set_rate(task, json_body().get("rate"))
        return jsonify(table.to_dict())

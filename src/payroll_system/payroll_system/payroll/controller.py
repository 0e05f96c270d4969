from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import auth_required, current_principal, json_body, pick, slip_to_dict
from ..container import Container

# JSON key -> service field
_UPDATE_KEYS = {
    "month": "month",
    "year": "year",
    "basicSalary": "basic_salary",
    "basic_salary": "basic_salary",
    "allowances": "allowances",
    "deductions": "deductions",
}


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.tokens)
    service = container.payroll_service

    @app.route("/salary-slips", methods=["POST"], endpoint="create_salary_slip")
    @login_required
    def create_salary_slip():
        data = json_body()
        slip = service.create_slip(
            current_principal(),
            employee_id=pick(data, "employeeId", "employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            basic_salary=pick(data, "basicSalary", "basic_salary"),
            allowances=pick(data, "allowances", default=0),
            deductions=pick(data, "deductions", default=0),
        )
        return jsonify(slip_to_dict(slip)), 201

    @app.route("/salary-slips/<int:slip_id>", methods=["PUT"], endpoint="update_salary_slip")
    @login_required
    def update_salary_slip(slip_id: int):
        data = json_body()
        fields = {_UPDATE_KEYS.get(k, k): v for k, v in data.items()}
        slip = service.update_slip(current_principal(), slip_id, fields)
        return jsonify(slip_to_dict(slip))

    @app.route("/salary-slips", methods=["GET"], endpoint="list_salary_slips")
    @login_required
    def list_salary_slips():
        slips = service.list_slips(current_principal(), sort=request.args.get("sort") or None)
        return jsonify([slip_to_dict(s) for s in slips])

    @app.route("/salary-slips/<int:slip_id>", methods=["GET"], endpoint="get_salary_slip")
    @login_required
    def get_salary_slip(slip_id: int):
        return jsonify(slip_to_dict(service.get_slip(current_principal(), slip_id)))

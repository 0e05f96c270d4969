from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import auth_required, current_principal, expense_to_dict, json_body, pick
from ..container import Container
from .service import parse_status_filter


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.tokens)
    service = container.expense_service

    @app.route("/expenses", methods=["POST"], endpoint="submit_expense")
    @login_required
    def submit_expense():
        data = json_body()
        expense = service.submit_expense(
            current_principal(),
            category=data.get("category"),
            amount=data.get("amount"),
            description=data.get("description"),
            date=data.get("date"),
            employee_id=pick(data, "employeeId", "employee_id"),
        )
        return jsonify(expense_to_dict(expense)), 201

    @app.route("/expenses", methods=["GET"], endpoint="list_expenses")
    @login_required
    def list_expenses():
        status = parse_status_filter(request.args.get("status"))
        expenses = service.list_expenses(current_principal(), status=status)
        return jsonify([expense_to_dict(e) for e in expenses])

    @app.route("/expenses/categories", methods=["GET"], endpoint="expense_categories")
    @login_required
    def expense_categories():
        return jsonify(service.categories())

    @app.route("/expenses/<int:expense_id>", methods=["GET"], endpoint="get_expense")
    @login_required
    def get_expense(expense_id: int):
        return jsonify(expense_to_dict(service.get_expense(current_principal(), expense_id)))

    @app.route("/expenses/<int:expense_id>/status", methods=["PATCH"], endpoint="decide_expense")
    @login_required
    def decide_expense(expense_id: int):
        data = json_body()
        expense = service.decide_expense(current_principal(), expense_id, data.get("status"))
        return jsonify(expense_to_dict(expense))

from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import auth_required, current_principal, money
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.tokens)

    @app.route("/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        stats = container.dashboard_service.stats(current_principal())
        return jsonify(
            {
                "totalSalary": money(stats.total_salary),
                "totalExpenses": money(stats.total_expenses),
                "pendingExpenses": stats.pending_expense_count,
                "employeeCount": stats.employee_count,
                "slipCount": stats.slip_count,
                "monthlySeries": [{"month": m, "amount": money(a)} for m, a in stats.monthly_series],
                "expenseByCategory": [{"name": n, "value": money(v)} for n, v in stats.expense_by_category],
                "expenseStatus": [{"name": n, "value": c} for n, c in stats.expense_status_counts],
            }
        )

from __future__ import annotations

from ..auth.principal import Principal
from ..expenses.service import ExpenseService
from ..payroll.service import PayrollService
from ..users.service import UserService
from .aggregation import DashboardStats, build_dashboard_stats


class DashboardService:
    """Dashboard statistics scoped to what the caller may read."""

    def __init__(self, payroll: PayrollService, expenses: ExpenseService, users: UserService):
        self._payroll = payroll
        self._expenses = expenses
        self._users = users

    def stats(self, principal: Principal) -> DashboardStats:
        slips = self._payroll.list_slips(principal)
        expenses = self._expenses.list_expenses(principal)
        employee_count = self._users.employee_count() if principal.is_admin else 1
        return build_dashboard_stats(slips, expenses, employee_count=employee_count)

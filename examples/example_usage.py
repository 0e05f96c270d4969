"""Example: drive the service layer directly (no Flask, in-memory store).

Controllers are a thin layer; the business rules live in the services.
"""

from types import SimpleNamespace

from src.payroll_system.payroll_system.auth.principal import Principal
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.enums import Role


def main():
    settings = SimpleNamespace(STORE_BACKEND="memory", JWT_SECRET="example-secret")
    container = build_container(settings)

    admin = container.store.ensure_seed_user(email="admin@example.com", password="secret1", name="Admin")
    emp = container.store.ensure_seed_user(
        email="jane@example.com", password="secret1", name="Jane Smith", role=Role.EMPLOYEE
    )
    as_admin = Principal.admin(admin.user_id)
    as_emp = Principal.employee(emp.user_id)

    container.payroll_service.create_slip(
        as_admin, employee_id=emp.user_id, month="March", year=2024,
        basic_salary=50000, allowances=5000, deductions=2000,
    )
    expense = container.expense_service.submit_expense(as_emp, category="Travel", amount=500, date="2024-03-01")
    container.expense_service.approve_expense(as_admin, expense.expense_id)

    print(container.dashboard_service.stats(as_emp))


if __name__ == "__main__":
    main()

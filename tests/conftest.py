from __future__ import annotations

import importlib
from datetime import datetime, timedelta

import pytest

from src.payroll_system.payroll_system.auth.principal import Principal
from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.database.store import RecordStore
from src.payroll_system.payroll_system.expenses.service import ExpenseService
from src.payroll_system.payroll_system.main import create_app
from src.payroll_system.payroll_system.payroll.service import PayrollService


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


@pytest.fixture
def store() -> RecordStore:
    return RecordStore.in_memory()


@pytest.fixture
def admin(store):
    return store.ensure_seed_user(email="admin@company.com", password="admin123", name="Demo Admin")


@pytest.fixture
def employee(store):
    return store.ensure_seed_user(
        email="employee@demo.com",
        password="Employee@123",
        name="John Employee",
        role=Role.EMPLOYEE,
        department="Engineering",
    )


@pytest.fixture
def other_employee(store):
    return store.ensure_seed_user(
        email="jane@company.com",
        password="Jane@1234",
        name="Jane Smith",
        role=Role.EMPLOYEE,
        department="Marketing",
    )


@pytest.fixture
def as_admin(admin) -> Principal:
    return Principal.admin(admin.user_id)


@pytest.fixture
def as_employee(employee) -> Principal:
    return Principal.employee(employee.user_id)


@pytest.fixture
def as_other(other_employee) -> Principal:
    return Principal.employee(other_employee.user_id)


@pytest.fixture
def payroll(store, clock) -> PayrollService:
    return PayrollService(store.salary_slips, store.users, clock=clock)


@pytest.fixture
def expense_service(store, clock) -> ExpenseService:
    return ExpenseService(store.expenses, store.users, clock=clock)


@pytest.fixture
def settings():
    return importlib.import_module("config.testing")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return app.test_client()

from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.core.enums import ExpenseStatus
from src.payroll_system.payroll_system.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.payroll_system.payroll_system.expenses.service import parse_status_filter


def _submit(service, principal, **overrides):
    payload = {"category": "Travel", "amount": 500, "description": "Client visit", "date": "2024-03-01"}
    payload.update(overrides)
    return service.submit_expense(principal, **payload)


def test_employee_submits_pending_expense(expense_service, as_employee, employee):
    expense = _submit(expense_service, as_employee)

    assert expense.status == ExpenseStatus.PENDING
    assert expense.employee_id == employee.user_id
    assert expense.employee_name == "John Employee"
    assert expense.amount == Decimal("500")
    assert expense.date == date(2024, 3, 1)
    assert expense.decided_by is None


def test_owner_cannot_be_spoofed(expense_service, as_employee, employee, other_employee):
    expense = _submit(expense_service, as_employee, employee_id=other_employee.user_id)

    assert expense.employee_id == employee.user_id


def test_admin_cannot_submit_expense(expense_service, as_admin):
    with pytest.raises(AuthorizationError):
        _submit(expense_service, as_admin)


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"amount": 0}, "amount"),
        ({"amount": -10}, "amount"),
        ({"amount": None}, "amount"),
        ({"category": ""}, "category"),
        ({"category": "   "}, "category"),
        ({"date": "03/01/2024"}, "date"),
        ({"date": "2024-03-01garbage"}, "date"),
        ({"amount": "0.001"}, "amount"),
        ({"amount": "1000000000000"}, "amount"),
    ],
)
def test_submit_validation(expense_service, as_employee, overrides, field):
    with pytest.raises(ValidationError) as exc:
        _submit(expense_service, as_employee, **overrides)
    assert exc.value.field == field


def test_date_defaults_to_today_and_accepts_iso_timestamps(expense_service, as_employee, fixed_now):
    undated = _submit(expense_service, as_employee, date=None)
    stamped = _submit(expense_service, as_employee, date="2024-02-10T00:00:00.000Z")

    assert undated.date == fixed_now.date()
    assert stamped.date == date(2024, 2, 10)


def test_admin_approves_once_then_invalid_transition(expense_service, as_admin, as_employee, admin):
    expense = _submit(expense_service, as_employee)

    approved = expense_service.decide_expense(as_admin, expense.expense_id, "approve")
    assert approved.status == ExpenseStatus.APPROVED
    assert approved.decided_by == admin.user_id
    assert approved.decided_at is not None
    assert approved.amount == expense.amount
    assert approved.category == expense.category

    with pytest.raises(InvalidTransitionError):
        expense_service.decide_expense(as_admin, expense.expense_id, "approved")
    with pytest.raises(InvalidTransitionError):
        expense_service.reject_expense(as_admin, expense.expense_id)


def test_rejected_is_terminal(expense_service, as_admin, as_employee):
    expense = _submit(expense_service, as_employee)
    rejected = expense_service.reject_expense(as_admin, expense.expense_id)

    assert rejected.status == ExpenseStatus.REJECTED
    with pytest.raises(InvalidTransitionError):
        expense_service.approve_expense(as_admin, expense.expense_id)


def test_employee_cannot_decide(expense_service, as_employee):
    expense = _submit(expense_service, as_employee)

    with pytest.raises(AuthorizationError):
        expense_service.decide_expense(as_employee, expense.expense_id, "approved")


def test_decide_missing_expense_is_not_found(expense_service, as_admin):
    with pytest.raises(NotFoundError):
        expense_service.decide_expense(as_admin, 999, "approved")


@pytest.mark.parametrize("decision", ["pending", "", None, "maybe"])
def test_decide_rejects_unknown_decision(expense_service, as_admin, as_employee, decision):
    expense = _submit(expense_service, as_employee)

    with pytest.raises(ValidationError):
        expense_service.decide_expense(as_admin, expense.expense_id, decision)


def test_list_visibility_and_status_filter(expense_service, as_admin, as_employee, as_other, employee, other_employee):
    mine = _submit(expense_service, as_employee)
    theirs = _submit(expense_service, as_other, category="Meals", amount=80)
    expense_service.approve_expense(as_admin, theirs.expense_id)

    assert [e.expense_id for e in expense_service.list_expenses(as_employee)] == [mine.expense_id]
    assert all(e.employee_id == other_employee.user_id for e in expense_service.list_expenses(as_other))
    assert [e.expense_id for e in expense_service.list_expenses(as_admin)] == [mine.expense_id, theirs.expense_id]
    assert [e.expense_id for e in expense_service.list_expenses(as_admin, status=ExpenseStatus.APPROVED)] == [
        theirs.expense_id
    ]


def test_get_expense_applies_read_rule(expense_service, as_admin, as_employee, as_other):
    expense = _submit(expense_service, as_employee)

    assert expense_service.get_expense(as_employee, expense.expense_id) == expense
    assert expense_service.get_expense(as_admin, expense.expense_id) == expense
    with pytest.raises(AuthorizationError):
        expense_service.get_expense(as_other, expense.expense_id)


def test_parse_status_filter():
    assert parse_status_filter(None) is None
    assert parse_status_filter("Pending") == ExpenseStatus.PENDING
    with pytest.raises(ValidationError):
        parse_status_filter("archived")


def test_concurrent_decisions_only_one_wins(monkeypatch, store, expense_service, as_admin, as_employee):
    expense = _submit(expense_service, as_employee)

    # Hold both deciders after their first read so both see the expense as pending.
    barrier = threading.Barrier(2)
    first_reads = []
    real_get = store.expenses.get

    def get_then_wait(expense_id):
        found = real_get(expense_id)
        if len(first_reads) < 2:
            first_reads.append(expense_id)
            barrier.wait(timeout=5)
        return found

    monkeypatch.setattr(store.expenses, "get", get_then_wait)

    decided, conflicts = [], []

    def decide(decision):
        try:
            decided.append(expense_service.decide_expense(as_admin, expense.expense_id, decision))
        except InvalidTransitionError as exc:
            conflicts.append(exc)

    threads = [threading.Thread(target=decide, args=(d,)) for d in ("approve", "reject")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(decided) == 1
    assert len(conflicts) == 1
    assert real_get(expense.expense_id).status == decided[0].status

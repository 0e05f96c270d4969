from __future__ import annotations

import pytest

from src.payroll_system.payroll_system.auth.policy import authorize, can_read, enforce
from src.payroll_system.payroll_system.auth.principal import Principal
from src.payroll_system.payroll_system.core.enums import Action, Resource
from src.payroll_system.payroll_system.core.exceptions import AuthorizationError

ADMIN = Principal.admin(1)
EMP = Principal.employee(2)
OTHER = Principal.employee(3)


@pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE])
def test_only_admin_writes_salary_slips(action):
    assert authorize(ADMIN, action, Resource.SALARY_SLIP).allowed
    decision = authorize(EMP, action, Resource.SALARY_SLIP)
    assert not decision.allowed
    assert decision.reason == "Access denied"


@pytest.mark.parametrize("resource", [Resource.SALARY_SLIP, Resource.EXPENSE])
def test_read_visibility(resource):
    assert authorize(ADMIN, Action.READ, resource, owner_id=2).allowed
    assert authorize(EMP, Action.READ, resource, owner_id=2).allowed
    assert not authorize(OTHER, Action.READ, resource, owner_id=2).allowed


def test_only_employee_creates_expense():
    assert authorize(EMP, Action.CREATE, Resource.EXPENSE).allowed
    assert not authorize(ADMIN, Action.CREATE, Resource.EXPENSE).allowed


def test_only_admin_decides_expense_status():
    assert authorize(ADMIN, Action.UPDATE, Resource.EXPENSE_STATUS).allowed
    assert not authorize(EMP, Action.UPDATE, Resource.EXPENSE_STATUS).allowed


def test_employee_cannot_update_expense_fields():
    assert not authorize(EMP, Action.UPDATE, Resource.EXPENSE, owner_id=2).allowed


def test_unauthenticated_principal_is_always_denied():
    for resource in Resource:
        for action in Action:
            assert not authorize(None, action, resource, owner_id=1).allowed
    assert not can_read(None, 1)


def test_enforce_raises_with_reason():
    with pytest.raises(AuthorizationError, match="Access denied"):
        enforce(EMP, Action.CREATE, Resource.SALARY_SLIP)

    enforce(ADMIN, Action.CREATE, Resource.SALARY_SLIP)

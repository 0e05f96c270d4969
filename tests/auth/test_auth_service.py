from __future__ import annotations

import pytest

from src.payroll_system.payroll_system.auth.tokens import TokenService
from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.payroll_system.payroll_system.users.service import AuthService, UserService


@pytest.fixture
def tokens():
    return TokenService("s3cret")


@pytest.fixture
def auth(store, tokens):
    return AuthService(store.users, tokens)


def test_signup_normalizes_email_and_defaults_department(auth, tokens):
    user, token = auth.signup(email="  New.Hire@Company.COM ", password="secret1", name="New Hire")

    assert user.email == "new.hire@company.com"
    assert user.role == Role.EMPLOYEE
    assert user.department == "General"
    assert tokens.authenticate(token).user_id == user.user_id


def test_signup_admin_defaults_to_management(auth):
    user, _ = auth.signup(email="boss@company.com", password="secret1", name="Boss", role="admin")
    assert user.department == "Management"


def test_signup_rejects_duplicate_email_case_insensitively(auth, employee):
    with pytest.raises(ValidationError) as exc:
        auth.signup(email="EMPLOYEE@demo.com", password="secret1", name="Dup")
    assert exc.value.field == "email"


def test_signup_racing_on_same_email_is_a_validation_error(monkeypatch, store, auth):
    # Both requests pass the lookup before either has inserted.
    monkeypatch.setattr(store.users, "get_by_email", lambda email: None)

    auth.signup(email="race@company.com", password="secret1", name="First")
    with pytest.raises(ValidationError) as exc:
        auth.signup(email="Race@Company.com", password="secret1", name="Second")

    assert exc.value.field == "email"
    assert str(exc.value) == "This email is already registered"
    assert [u.name for u in store.users.list_users()] == ["First"]


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"email": "x@y.z", "password": "123", "name": "A"}, "password"),
        ({"email": "x@y.z", "password": "secret1", "name": " "}, "name"),
        ({"email": "not-an-email", "password": "secret1", "name": "A"}, "email"),
        ({"email": "x@y.z", "password": "secret1", "name": "A", "role": "owner"}, "role"),
    ],
)
def test_signup_validation(auth, kwargs, field):
    with pytest.raises(ValidationError) as exc:
        auth.signup(**kwargs)
    assert exc.value.field == field


def test_login_is_case_insensitive_on_email(auth, employee, tokens):
    user, token = auth.login(email="Employee@Demo.com", password="Employee@123")

    assert user.user_id == employee.user_id
    assert tokens.authenticate(token).role == Role.EMPLOYEE


def test_login_wrong_password_raises(auth, employee):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.login(email="employee@demo.com", password="wrong")


def test_login_unknown_email_raises(auth):
    with pytest.raises(AuthenticationError):
        auth.login(email="ghost@company.com", password="whatever")


def test_employee_directory_is_admin_only(store, as_admin, as_employee, employee, other_employee):
    users = UserService(store.users)

    listed = users.list_employees(as_admin)
    assert [u.user_id for u in listed] == [employee.user_id, other_employee.user_id]
    assert users.employee_count() == 2

    with pytest.raises(AuthorizationError):
        users.list_employees(as_employee)


def test_seed_user_is_idempotent(store):
    first = store.ensure_seed_user(email="hire-me@anshumat.org", password="HireMe@2025!", name="Demo")
    second = store.ensure_seed_user(email="Hire-Me@anshumat.org", password="other", name="Other")

    assert first == second
    assert first.role == Role.ADMIN
    assert len(store.users.list_users()) == 1

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class SlipStatus(str, Enum):
    """Salary slip lifecycle. DRAFT is modelled but no operation produces it."""

    DRAFT = "draft"
    ISSUED = "issued"


class ExpenseStatus(str, Enum):
    """Expense approval flow: PENDING -> APPROVED | REJECTED (both terminal)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"


class Resource(str, Enum):
    SALARY_SLIP = "salary_slip"
    EXPENSE = "expense"
    EXPENSE_STATUS = "expense_status"
    EMPLOYEE_DIRECTORY = "employee_directory"

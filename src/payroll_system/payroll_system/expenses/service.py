from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..auth.policy import enforce
from ..auth.principal import Principal
from ..common.datetime_utils import coerce_date, now_local
from ..common.validators import require_non_empty, require_positive
from ..core.constants import EXPENSE_CATEGORIES
from ..core.enums import Action, ExpenseStatus, Resource
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Expense
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)

_DECISIONS = {
    "approve": ExpenseStatus.APPROVED,
    "approved": ExpenseStatus.APPROVED,
    "reject": ExpenseStatus.REJECTED,
    "rejected": ExpenseStatus.REJECTED,
}


def parse_decision(value: Any) -> ExpenseStatus:
    status = _DECISIONS.get(str(value or "").strip().lower())
    if status is None:
        raise ValidationError("status must be approved or rejected", field="status")
    return status


def parse_status_filter(value: Optional[str]) -> Optional[ExpenseStatus]:
    if value is None or not value.strip():
        return None
    try:
        return ExpenseStatus(value.strip().lower())
    except ValueError:
        raise ValidationError("status must be pending, approved or rejected", field="status")


class ExpenseService:
    def __init__(
        self,
        expenses: ExpenseRepository,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._expenses = expenses
        self._users = users
        self._clock = clock

    def submit_expense(
        self,
        principal: Principal,
        *,
        category: Any,
        amount: Any,
        description: Optional[str] = None,
        date: Any = None,
        employee_id: Any = None,
    ) -> Expense:
        """Create a PENDING expense owned by the caller.

        ``employee_id`` is accepted so raw payloads can be passed through, but it
        is never used: ownership is always the authenticated employee.
        """
        enforce(principal, Action.CREATE, Resource.EXPENSE)

        category = require_non_empty(category if isinstance(category, str) else None, "category")
        amount = require_positive(amount, "amount")
        now = self._clock()
        expense_date = coerce_date(date, "date", default=now.date())
        description = (description or "").strip() or None

        if employee_id is not None and str(employee_id) != str(principal.user_id):
            logger.warning(
                "Ignoring employee_id=%s supplied by employee id=%s", employee_id, principal.user_id
            )

        owner = self._users.get_by_id(principal.user_id)
        if not owner:
            raise NotFoundError("User not found")

        expense = self._expenses.create(
            employee_id=owner.user_id,
            employee_name=owner.name,
            category=category,
            amount=amount,
            description=description,
            expense_date=expense_date,
            created_at=now,
        )
        logger.info("Expense id=%s submitted by employee id=%s", expense.expense_id, owner.user_id)
        return expense

    def decide_expense(self, principal: Principal, expense_id: int, decision: Any) -> Expense:
        enforce(principal, Action.UPDATE, Resource.EXPENSE_STATUS)
        new_status = parse_decision(decision)

        current = self._expenses.get(int(expense_id))
        if not current:
            raise NotFoundError("Expense not found")
        if current.status != ExpenseStatus.PENDING:
            raise InvalidTransitionError(f"Expense has already been {current.status.value}")

        decided_at = self._clock()
        if not self._expenses.decide(
            current.expense_id, status=new_status, decided_by=principal.user_id, decided_at=decided_at
        ):
            # Another decision landed between the read and the write.
            latest = self._expenses.get(current.expense_id)
            if not latest:
                raise NotFoundError("Expense not found")
            raise InvalidTransitionError(f"Expense has already been {latest.status.value}")

        decided = dataclasses.replace(
            current, status=new_status, decided_by=principal.user_id, decided_at=decided_at
        )

        logger.info(
            "Expense id=%s %s by admin id=%s", decided.expense_id, new_status.value, principal.user_id
        )
        return decided

    def approve_expense(self, principal: Principal, expense_id: int) -> Expense:
        return self.decide_expense(principal, expense_id, ExpenseStatus.APPROVED.value)

    def reject_expense(self, principal: Principal, expense_id: int) -> Expense:
        return self.decide_expense(principal, expense_id, ExpenseStatus.REJECTED.value)

    def get_expense(self, principal: Principal, expense_id: int) -> Expense:
        expense = self._expenses.get(int(expense_id))
        if not expense:
            raise NotFoundError("Expense not found")
        enforce(principal, Action.READ, Resource.EXPENSE, owner_id=expense.employee_id)
        return expense

    def categories(self) -> Sequence[str]:
        """Suggested categories for the submit form. Other values are still accepted."""
        return list(EXPENSE_CATEGORIES)

    def list_expenses(self, principal: Principal, *, status: Optional[ExpenseStatus] = None) -> Sequence[Expense]:
        if principal.is_admin:
            return list(self._expenses.list(status=status))
        return list(self._expenses.list(employee_id=principal.user_id, status=status))

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseStatus
from .model import Expense


class ExpenseRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        employee_name: str,
        category: str,
        amount: Decimal,
        description: Optional[str],
        expense_date: date,
        created_at: datetime,
    ) -> Expense:
        """Persist a new expense in PENDING status."""

        raise NotImplementedError

    def get(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

    def decide(
        self,
        expense_id: int,
        *,
        status: ExpenseStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        """Move a PENDING expense to ``status``. False when it is missing or already decided."""

        raise NotImplementedError

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[ExpenseStatus] = None,
    ) -> Sequence[Expense]:
        """Insertion order."""

        raise NotImplementedError

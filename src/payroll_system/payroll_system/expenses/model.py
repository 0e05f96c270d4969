from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseStatus


@dataclass(frozen=True)
class Expense:
    expense_id: int
    employee_id: int
    employee_name: str
    category: str
    amount: Decimal
    description: Optional[str]
    date: date
    status: ExpenseStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None

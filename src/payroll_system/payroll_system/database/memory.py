"""In-memory repositories.

Used by the test-suite and by ``STORE_BACKEND=memory`` for local demos. One
re-entrant lock is shared by the three collections so writes serialize. Slip
saves are last-write-wins; expense decisions only apply to a PENDING expense.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from itertools import count
from typing import Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DUPLICATE_EMAIL_MESSAGE
from ..core.enums import ExpenseStatus, Role, SlipStatus
from ..core.exceptions import ValidationError
from ..expenses.model import Expense
from ..payroll.model import SalarySlip
from ..users.model import User


class InMemoryUserRepository:
    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._ids = count(1)
        self._by_id: Dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._find_email(email)

    def _find_email(self, email: str) -> Optional[User]:
        needle = (email or "").strip().lower()
        for user in self._by_id.values():
            if user.email == needle:
                return user
        return None

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: Role,
        department: Optional[str],
    ) -> User:
        with self._lock:
            if self._find_email(email):
                raise ValidationError(DUPLICATE_EMAIL_MESSAGE, field="email")
            user = User(
                user_id=next(self._ids),
                email=email.strip().lower(),
                password_hash=password_hash,
                name=name,
                role=role,
                department=department,
                created_at=now_local(),
            )
            self._by_id[user.user_id] = user
            return user

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        with self._lock:
            return [u for u in self._by_id.values() if role is None or u.role == role]

    def count_by_role(self, role: Role) -> int:
        return len(self.list_users(role=role))


class InMemorySalarySlipRepository:
    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._ids = count(1)
        self._by_id: Dict[int, SalarySlip] = {}

    def create(
        self,
        *,
        employee_id: int,
        employee_name: str,
        month: str,
        year: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        status: SlipStatus,
        created_at: datetime,
    ) -> SalarySlip:
        with self._lock:
            slip = SalarySlip(
                slip_id=next(self._ids),
                employee_id=int(employee_id),
                employee_name=employee_name,
                month=month,
                year=int(year),
                basic_salary=basic_salary,
                allowances=allowances,
                deductions=deductions,
                net_salary=net_salary,
                status=status,
                created_at=created_at,
                updated_at=created_at,
            )
            self._by_id[slip.slip_id] = slip
            return slip

    def get(self, slip_id: int) -> Optional[SalarySlip]:
        with self._lock:
            return self._by_id.get(int(slip_id))

    def save(self, slip: SalarySlip) -> bool:
        with self._lock:
            if slip.slip_id not in self._by_id:
                return False
            self._by_id[slip.slip_id] = slip
            return True

    def list(self, *, employee_id: Optional[int] = None) -> Sequence[SalarySlip]:
        with self._lock:
            return [s for s in self._by_id.values() if employee_id is None or s.employee_id == int(employee_id)]


class InMemoryExpenseRepository:
    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._ids = count(1)
        self._by_id: Dict[int, Expense] = {}

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
        with self._lock:
            expense = Expense(
                expense_id=next(self._ids),
                employee_id=int(employee_id),
                employee_name=employee_name,
                category=category,
                amount=amount,
                description=description,
                date=expense_date,
                status=ExpenseStatus.PENDING,
                created_at=created_at,
            )
            self._by_id[expense.expense_id] = expense
            return expense

    def get(self, expense_id: int) -> Optional[Expense]:
        with self._lock:
            return self._by_id.get(int(expense_id))

    def decide(
        self,
        expense_id: int,
        *,
        status: ExpenseStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        with self._lock:
            current = self._by_id.get(int(expense_id))
            if current is None or current.status != ExpenseStatus.PENDING:
                return False
            self._by_id[current.expense_id] = replace(
                current, status=status, decided_by=int(decided_by), decided_at=decided_at
            )
            return True

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[ExpenseStatus] = None,
    ) -> Sequence[Expense]:
        with self._lock:
            return [
                e
                for e in self._by_id.values()
                if (employee_id is None or e.employee_id == int(employee_id))
                and (status is None or e.status == status)
            ]

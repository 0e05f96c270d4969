from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_DEPARTMENT_BY_ROLE
from ..core.enums import Role
from ..expenses.mysql_expense_repository import MySQLExpenseRepository
from ..expenses.repository import ExpenseRepository
from ..payroll.mysql_salary_slip_repository import MySQLSalarySlipRepository
from ..payroll.repository import SalarySlipRepository
from ..users.model import User
from ..users.mysql_user_repository import MySQLUserRepository
from ..users.repository import UserRepository
from .connection import DatabaseConnection
from .memory import InMemoryExpenseRepository, InMemorySalarySlipRepository, InMemoryUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordStore:
    """Users, salary slips and expenses behind one injectable object.

    Services only see the repository interfaces, so the backend (memory or
    MySQL) can be swapped without touching business rules.
    """

    users: UserRepository
    salary_slips: SalarySlipRepository
    expenses: ExpenseRepository

    @classmethod
    def in_memory(cls) -> "RecordStore":
        lock = threading.RLock()
        return cls(
            users=InMemoryUserRepository(lock),
            salary_slips=InMemorySalarySlipRepository(lock),
            expenses=InMemoryExpenseRepository(lock),
        )

    @classmethod
    def mysql(cls, conn_factory: DatabaseConnection) -> "RecordStore":
        return cls(
            users=MySQLUserRepository(conn_factory),
            salary_slips=MySQLSalarySlipRepository(conn_factory),
            expenses=MySQLExpenseRepository(conn_factory),
        )

    def ensure_seed_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: Role = Role.ADMIN,
        department: Optional[str] = None,
    ) -> User:
        """Create the user unless the email is already registered. Safe to call on every start."""

        existing = self.users.get_by_email(email)
        if existing:
            return existing

        user = self.users.create_user(
            email=email.strip().lower(),
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
            department=department or DEFAULT_DEPARTMENT_BY_ROLE[role.value],
        )
        logger.info("Seeded %s user id=%s (%s)", role.value, user.user_id, user.email)
        return user

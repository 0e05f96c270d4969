from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from ..core.enums import ExpenseStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Expense
from .repository import ExpenseRepository

_COLUMNS = (
    "expense_id, employee_id, employee_name, category, amount, description, "
    "expense_date, status, created_at, decided_by, decided_at"
)


def _row_to_expense(row: dict) -> Expense:
    decided_by = row.get("decided_by")
    return Expense(
        expense_id=int(row["expense_id"]),
        employee_id=int(row["employee_id"]),
        employee_name=row["employee_name"],
        category=row["category"],
        amount=to_decimal(row["amount"]),
        description=row.get("description"),
        date=row["expense_date"],
        status=ExpenseStatus(row["status"]),
        created_at=row["created_at"],
        decided_by=int(decided_by) if decided_by is not None else None,
        decided_at=row.get("decided_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses(
                    employee_id, employee_name, category, amount, description,
                    expense_date, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    employee_name,
                    category,
                    amount,
                    description,
                    expense_date,
                    ExpenseStatus.PENDING.value,
                    created_at,
                ),
            )
            expense_id = int(cur.lastrowid)

        return Expense(
            expense_id=expense_id,
            employee_id=int(employee_id),
            employee_name=employee_name,
            category=category,
            amount=amount,
            description=description,
            date=expense_date,
            status=ExpenseStatus.PENDING,
            created_at=created_at,
        )

    def get(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM expenses WHERE expense_id=%s", (int(expense_id),))
            row = fetchone(cur)
            return _row_to_expense(row) if row else None

    def decide(
        self,
        expense_id: int,
        *,
        status: ExpenseStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET status=%s, decided_by=%s, decided_at=%s
                WHERE expense_id=%s AND status=%s
                """,
                (status.value, int(decided_by), decided_at, int(expense_id), ExpenseStatus.PENDING.value),
            )
            return cur.rowcount == 1

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[ExpenseStatus] = None,
    ) -> Sequence[Expense]:
        where: List[str] = []
        params: List[object] = []
        if employee_id is not None:
            where.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        sql = f"SELECT {_COLUMNS} FROM expenses"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY expense_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_expense(r) for r in fetchall(cur)]

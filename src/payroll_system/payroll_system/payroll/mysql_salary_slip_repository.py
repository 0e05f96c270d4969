from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import SlipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import SalarySlip
from .repository import SalarySlipRepository

_COLUMNS = (
    "slip_id, employee_id, employee_name, month, year, basic_salary, allowances, "
    "deductions, net_salary, status, created_at, updated_at"
)


def _row_to_slip(row: dict) -> SalarySlip:
    return SalarySlip(
        slip_id=int(row["slip_id"]),
        employee_id=int(row["employee_id"]),
        employee_name=row["employee_name"],
        month=row["month"],
        year=int(row["year"]),
        basic_salary=to_decimal(row["basic_salary"]),
        allowances=to_decimal(row["allowances"]),
        deductions=to_decimal(row["deductions"]),
        net_salary=to_decimal(row["net_salary"]),
        status=SlipStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLSalarySlipRepository(SalarySlipRepository):
    """Salary slips table. Concurrent saves of the same slip are last-write-wins."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_slips(
                    employee_id, employee_name, month, year, basic_salary, allowances,
                    deductions, net_salary, status, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    employee_name,
                    month,
                    int(year),
                    basic_salary,
                    allowances,
                    deductions,
                    net_salary,
                    status.value,
                    created_at,
                    created_at,
                ),
            )
            slip_id = int(cur.lastrowid)

        return SalarySlip(
            slip_id=slip_id,
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

    def get(self, slip_id: int) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_slips WHERE slip_id=%s", (int(slip_id),))
            row = fetchone(cur)
            return _row_to_slip(row) if row else None

    def save(self, slip: SalarySlip) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_slips
                SET month=%s, year=%s, basic_salary=%s, allowances=%s, deductions=%s,
                    net_salary=%s, status=%s, updated_at=%s
                WHERE slip_id=%s
                """,
                (
                    slip.month,
                    slip.year,
                    slip.basic_salary,
                    slip.allowances,
                    slip.deductions,
                    slip.net_salary,
                    slip.status.value,
                    slip.updated_at,
                    slip.slip_id,
                ),
            )
            # MySQL reports 0 affected rows for an identical UPDATE, so check existence instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS ok FROM salary_slips WHERE slip_id=%s", (slip.slip_id,))
            return fetchone(cur) is not None

    def list(self, *, employee_id: Optional[int] = None) -> Sequence[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM salary_slips ORDER BY slip_id")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM salary_slips WHERE employee_id=%s ORDER BY slip_id",
                    (int(employee_id),),
                )
            return [_row_to_slip(r) for r in fetchall(cur)]

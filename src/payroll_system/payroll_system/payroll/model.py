from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..core.constants import MONTHS
from ..core.enums import SlipStatus


@dataclass(frozen=True)
class SalarySlip:
    slip_id: int
    employee_id: int
    employee_name: str
    month: str
    year: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: SlipStatus
    created_at: datetime
    updated_at: datetime

    @property
    def period_key(self) -> tuple:
        """(year, month number) for chronological sorting."""
        return (self.year, MONTHS.index(self.month) + 1)

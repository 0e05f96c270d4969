from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import SlipStatus
from .model import SalarySlip


class SalarySlipRepository(Protocol):
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
        raise NotImplementedError

    def get(self, slip_id: int) -> Optional[SalarySlip]:
        raise NotImplementedError

    def save(self, slip: SalarySlip) -> bool:
        """Replace the stored slip with the same id (last write wins)."""

        raise NotImplementedError

    def list(self, *, employee_id: Optional[int] = None) -> Sequence[SalarySlip]:
        """Insertion order."""

        raise NotImplementedError

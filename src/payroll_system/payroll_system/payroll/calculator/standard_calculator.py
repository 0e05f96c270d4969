from __future__ import annotations

from decimal import Decimal

from .base import NetSalaryCalculator


class StandardNetSalaryCalculator(NetSalaryCalculator):
    """Standard rule: basic + allowances - deductions. No floor; may go negative."""

    def net_salary(self, *, basic_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return basic_salary + allowances - deductions

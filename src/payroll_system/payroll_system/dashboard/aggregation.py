"""Dashboard aggregates.

Pure functions over the record set already filtered by the visibility rule.
Grouped series keep first-seen bucket order (dict insertion order), not
calendar or alphabetical order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple

from ..core.constants import STATUS_BUCKETS
from ..core.enums import ExpenseStatus
from ..expenses.model import Expense
from ..payroll.model import SalarySlip


@dataclass(frozen=True)
class DashboardStats:
    total_salary: Decimal
    total_expenses: Decimal
    pending_expense_count: int
    employee_count: int
    slip_count: int
    monthly_series: List[Tuple[str, Decimal]]
    expense_by_category: List[Tuple[str, Decimal]]
    expense_status_counts: List[Tuple[str, int]]


def total_salary(slips: Iterable[SalarySlip]) -> Decimal:
    return sum((s.net_salary for s in slips), Decimal("0"))


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), Decimal("0"))


def pending_expense_count(expenses: Iterable[Expense]) -> int:
    return sum(1 for e in expenses if e.status == ExpenseStatus.PENDING)


def monthly_series(slips: Iterable[SalarySlip]) -> List[Tuple[str, Decimal]]:
    buckets: dict[str, Decimal] = {}
    for s in slips:
        key = s.month[:3]
        buckets[key] = buckets.get(key, Decimal("0")) + s.net_salary
    return list(buckets.items())


def expense_by_category(expenses: Iterable[Expense]) -> List[Tuple[str, Decimal]]:
    buckets: dict[str, Decimal] = {}
    for e in expenses:
        buckets[e.category] = buckets.get(e.category, Decimal("0")) + e.amount
    return list(buckets.items())


def expense_status_counts(expenses: Iterable[Expense]) -> List[Tuple[str, int]]:
    counts = {value: 0 for _, value in STATUS_BUCKETS}
    for e in expenses:
        if e.status.value in counts:
            counts[e.status.value] += 1
    return [(label, counts[value]) for label, value in STATUS_BUCKETS]


def build_dashboard_stats(
    slips: Sequence[SalarySlip],
    expenses: Sequence[Expense],
    *,
    employee_count: int,
) -> DashboardStats:
    return DashboardStats(
        total_salary=total_salary(slips),
        total_expenses=total_expenses(expenses),
        pending_expense_count=pending_expense_count(expenses),
        employee_count=int(employee_count),
        slip_count=len(slips),
        monthly_series=monthly_series(slips),
        expense_by_category=expense_by_category(expenses),
        expense_status_counts=expense_status_counts(expenses),
    )

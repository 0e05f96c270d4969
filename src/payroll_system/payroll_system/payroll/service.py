from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence

from ..auth.policy import enforce
from ..auth.principal import Principal
from ..common.datetime_utils import now_local
from ..common.validators import parse_month, parse_year, require_money_range, require_non_negative
from ..core.enums import Action, Resource, SlipStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .calculator.base import NetSalaryCalculator
from .calculator.standard_calculator import StandardNetSalaryCalculator
from .model import SalarySlip
from .repository import SalarySlipRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("month", "year", "basic_salary", "allowances", "deductions")
SORT_PERIOD = "period"


class PayrollService:
    """Salary slip lifecycle.

    Every create/update leaves the slip ISSUED and recomputes net salary in the
    same call, so a stored slip always satisfies
    net_salary == basic_salary + allowances - deductions.
    """

    def __init__(
        self,
        slips: SalarySlipRepository,
        users: UserRepository,
        *,
        calculator: Optional[NetSalaryCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._slips = slips
        self._users = users
        self._calculator = calculator or StandardNetSalaryCalculator()
        self._clock = clock

    def create_slip(
        self,
        principal: Principal,
        *,
        employee_id: Any,
        month: Any,
        year: Any,
        basic_salary: Any,
        allowances: Any = 0,
        deductions: Any = 0,
    ) -> SalarySlip:
        enforce(principal, Action.CREATE, Resource.SALARY_SLIP)

        month = parse_month(month)
        year = parse_year(year)
        basic = require_non_negative(basic_salary, "basic_salary")
        allow = require_non_negative(0 if allowances is None else allowances, "allowances")
        deduct = require_non_negative(0 if deductions is None else deductions, "deductions")
        net = self._net_salary(basic, allow, deduct)

        employee = self._users.get_by_id(self._parse_employee_id(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        slip = self._slips.create(
            employee_id=employee.user_id,
            employee_name=employee.name,
            month=month,
            year=year,
            basic_salary=basic,
            allowances=allow,
            deductions=deduct,
            net_salary=net,
            status=SlipStatus.ISSUED,
            created_at=self._clock(),
        )
        logger.info(
            "Salary slip id=%s issued for employee id=%s (%s %s) by admin id=%s",
            slip.slip_id, slip.employee_id, slip.month, slip.year, principal.user_id,
        )
        return slip

    def update_slip(self, principal: Principal, slip_id: int, fields: Mapping[str, Any]) -> SalarySlip:
        enforce(principal, Action.UPDATE, Resource.SALARY_SLIP)

        current = self._slips.get(int(slip_id))
        if not current:
            raise NotFoundError("Salary slip not found")

        changes: dict = {}
        if "month" in fields:
            changes["month"] = parse_month(fields["month"])
        if "year" in fields:
            changes["year"] = parse_year(fields["year"])
        for name in ("basic_salary", "allowances", "deductions"):
            if name in fields:
                changes[name] = require_non_negative(fields[name], name)

        ignored = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if ignored:
            logger.debug("Ignoring non-updatable slip fields: %s", ", ".join(ignored))

        merged = dataclasses.replace(current, **changes)
        updated = dataclasses.replace(
            merged,
            net_salary=self._net_salary(merged.basic_salary, merged.allowances, merged.deductions),
            status=SlipStatus.ISSUED,
            updated_at=self._clock(),
        )
        if not self._slips.save(updated):
            raise NotFoundError("Salary slip not found")

        logger.info("Salary slip id=%s updated by admin id=%s", updated.slip_id, principal.user_id)
        return updated

    def get_slip(self, principal: Principal, slip_id: int) -> SalarySlip:
        slip = self._slips.get(int(slip_id))
        if not slip:
            raise NotFoundError("Salary slip not found")
        enforce(principal, Action.READ, Resource.SALARY_SLIP, owner_id=slip.employee_id)
        return slip

    def list_slips(self, principal: Principal, *, sort: Optional[str] = None) -> Sequence[SalarySlip]:
        if principal.is_admin:
            slips = list(self._slips.list())
        else:
            slips = list(self._slips.list(employee_id=principal.user_id))

        if sort is None:
            return slips
        if sort == SORT_PERIOD:
            return sorted(slips, key=lambda s: s.period_key)
        raise ValidationError(f"Unsupported sort: {sort}", field="sort")

    @staticmethod
    def _parse_employee_id(value: Any) -> int:
        if value is None or isinstance(value, bool):
            raise ValidationError("employee_id is required", field="employee_id")
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValidationError("employee_id must be an integer", field="employee_id")

    def _net_salary(self, basic: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        net = self._calculator.net_salary(basic_salary=basic, allowances=allowances, deductions=deductions)
        return require_money_range(net, "net_salary")

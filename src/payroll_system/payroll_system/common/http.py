"""Flask glue shared by the controllers: bearer auth, JSON bodies, serializers, error mapping."""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import wraps
from typing import Any, Dict, Mapping, Optional

from flask import Flask, g, jsonify, request

from ..auth.principal import Principal
from ..auth.tokens import TokenService
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..expenses.model import Expense
from ..payroll.model import SalarySlip

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
)


def auth_required(tokens: TokenService):
    """Run the authentication gate and expose the caller as ``g.principal``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.principal = tokens.authenticate_header(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_principal() -> Principal:
    return g.principal


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins; lets clients send camelCase or snake_case."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def slip_to_dict(slip: SalarySlip) -> dict:
    return {
        "id": slip.slip_id,
        "employeeId": slip.employee_id,
        "employeeName": slip.employee_name,
        "month": slip.month,
        "year": slip.year,
        "basicSalary": money(slip.basic_salary),
        "allowances": money(slip.allowances),
        "deductions": money(slip.deductions),
        "netSalary": money(slip.net_salary),
        "status": slip.status.value,
        "createdAt": slip.created_at.isoformat(),
        "updatedAt": slip.updated_at.isoformat(),
    }


def expense_to_dict(expense: Expense) -> dict:
    return {
        "id": expense.expense_id,
        "employeeId": expense.employee_id,
        "employeeName": expense.employee_name,
        "category": expense.category,
        "amount": money(expense.amount),
        "description": expense.description or "",
        "date": expense.date.isoformat(),
        "status": expense.status.value,
        "createdAt": expense.created_at.isoformat(),
        "decidedBy": expense.decided_by,
        "decidedAt": expense.decided_at.isoformat() if expense.decided_at else None,
    }


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        status = 400
        for exc_type, code in _STATUS_BY_ERROR:
            if isinstance(err, exc_type):
                status = code
                break

        body: Dict[str, Any] = {"message": str(err)}
        if isinstance(err, ValidationError) and err.field:
            body["field"] = err.field
        if status >= 401:
            logger.info("%s %s -> %s: %s", request.method, request.path, status, err)
        return jsonify(body), status

    @app.errorhandler(404)
    def handle_not_found(_err):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(_err):
        return jsonify({"message": "Method not allowed"}), 405

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_MINUTES
from .dashboard.service import DashboardService
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .database.store import RecordStore
from .expenses.service import ExpenseService
from .payroll.service import PayrollService
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)

BACKEND_MEMORY = "memory"
BACKEND_MYSQL = "mysql"


@dataclass(frozen=True)
class Container:
    store: RecordStore
    conn: Optional[DatabaseConnection]

    tokens: TokenService
    auth_service: AuthService
    user_service: UserService
    payroll_service: PayrollService
    expense_service: ExpenseService
    dashboard_service: DashboardService


def build_store(settings: Any) -> tuple[RecordStore, Optional[DatabaseConnection]]:
    backend = str(getattr(settings, "STORE_BACKEND", BACKEND_MYSQL)).lower()
    if backend == BACKEND_MEMORY:
        return RecordStore.in_memory(), None
    if backend != BACKEND_MYSQL:
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
    return RecordStore.mysql(conn), conn


def build_container(settings: Any, *, store: Optional[RecordStore] = None) -> Container:
    conn = None
    if store is None:
        store, conn = build_store(settings)

    tokens = TokenService(
        str(getattr(settings, "JWT_SECRET")),
        expires_minutes=int(getattr(settings, "JWT_EXPIRES_MINUTES", DEFAULT_TOKEN_MINUTES)),
    )
    user_service = UserService(store.users)
    payroll_service = PayrollService(store.salary_slips, store.users)
    expense_service = ExpenseService(store.expenses, store.users)

    container = Container(
        store=store,
        conn=conn,
        tokens=tokens,
        auth_service=AuthService(store.users, tokens),
        user_service=user_service,
        payroll_service=payroll_service,
        expense_service=expense_service,
        dashboard_service=DashboardService(payroll_service, expense_service, user_service),
    )
    logger.info("Container ready (users=%s)", type(store.users).__name__)
    return container

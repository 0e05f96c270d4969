from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.database.connection import DBConfig, DatabaseConnection
from src.payroll_system.payroll_system.database.store import RecordStore


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))
    store = RecordStore.mysql(conn)

    admin = store.ensure_seed_user(
        email=settings.SEED_ADMIN_EMAIL,
        password=settings.SEED_ADMIN_PASSWORD,
        name=settings.SEED_ADMIN_NAME,
        role=Role.ADMIN,
    )
    employee = store.ensure_seed_user(
        email="employee@demo.com",
        password="Employee@123",
        name="John Employee",
        role=Role.EMPLOYEE,
        department="Engineering",
    )
    print(f"OK: Seeded {conn.config.describe()} (admin id={admin.user_id}, employee id={employee.user_id})")


if __name__ == "__main__":
    main()

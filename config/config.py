"""Shared settings helpers; each environment module builds on these."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "payroll_db"),
    }


# Demo admin materialized once at startup by RecordStore.ensure_seed_user
SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "hire-me@anshumat.org")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "HireMe@2025!")
SEED_ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "Demo Admin")

JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(24 * 60)))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

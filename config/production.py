import os

from .config import (
    JWT_EXPIRES_MINUTES,
    LOG_LEVEL,
    SEED_ADMIN_EMAIL,
    SEED_ADMIN_NAME,
    SEED_ADMIN_PASSWORD,
    db_config_from_env,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

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

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")

# 'memory' runs without MySQL (data is lost on restart)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
DB_CONFIG = db_config_from_env()

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "1")

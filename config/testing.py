SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_MINUTES = 60

STORE_BACKEND = "memory"
DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "payroll_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = True
SEED_ADMIN_EMAIL = "hire-me@anshumat.org"
SEED_ADMIN_PASSWORD = "HireMe@2025!"
SEED_ADMIN_NAME = "Demo Admin"

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

EXPENSE_CATEGORIES = ("Travel", "Meals", "Equipment", "Training", "Office Supplies", "Other")

DEFAULT_TOKEN_MINUTES = 24 * 60
# Money columns are DECIMAL(14, 2).
MONEY_QUANTUM = Decimal("0.01")
MAX_MONEY = Decimal("999999999999.99")
MIN_PASSWORD_LENGTH = 6
DUPLICATE_EMAIL_MESSAGE = "This email is already registered"
MIN_YEAR = 1900
MAX_YEAR = 9999

DEFAULT_DEPARTMENT_BY_ROLE = {
    "admin": "Management",
    "employee": "General",
}

STATUS_BUCKETS = (
    ("Pending", "pending"),
    ("Approved", "approved"),
    ("Rejected", "rejected"),
)

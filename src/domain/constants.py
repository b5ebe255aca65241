"""Domain constants for the shared-expense ledger."""

from decimal import Decimal

ACCOUNT_TYPE_USER = "user"
ACCOUNT_TYPE_POOL = "pool"

RECURRENCE_DAILY = "daily"
RECURRENCE_WEEKLY = "weekly"
RECURRENCE_MONTHLY = "monthly"
RECURRENCE_YEARLY = "yearly"

# Approximate period lengths used by next-occurrence search.
RECURRENCE_PERIOD_DAYS = {
    RECURRENCE_DAILY: 1,
    RECURRENCE_WEEKLY: 7,
    RECURRENCE_MONTHLY: 30,
    RECURRENCE_YEARLY: 365,
}

DATE_FORMATS = ("mdy", "dmy", "ymd", "iso")
DEFAULT_DATE_FORMAT = "mdy"

DECIMAL_SEPARATORS = (".", ",")
SYMBOL_POSITIONS = ("before", "after")

HORIZON_END_OF_CURRENT_MONTH = "end_of_current_month"
HORIZON_END_OF_NEXT_MONTH = "end_of_next_month"
HORIZON_3_MONTHS = "3_months"
HORIZON_6_MONTHS = "6_months"
WARNING_HORIZONS = (
    HORIZON_END_OF_CURRENT_MONTH,
    HORIZON_END_OF_NEXT_MONTH,
    HORIZON_3_MONTHS,
    HORIZON_6_MONTHS,
)

WARNING_KIND_ACCOUNT = "account"
WARNING_KIND_USER = "user"

SETTLEMENT_MODE_MINIMAL = "minimal"
SETTLEMENT_MODE_DIRECT = "direct"
SETTLEMENT_MODES = (SETTLEMENT_MODE_MINIMAL, SETTLEMENT_MODE_DIRECT)

# Amounts at or below this magnitude are treated as settled.
AMOUNT_EPSILON = Decimal("0.01")


__all__ = [
    "ACCOUNT_TYPE_USER",
    "ACCOUNT_TYPE_POOL",
    "RECURRENCE_DAILY",
    "RECURRENCE_WEEKLY",
    "RECURRENCE_MONTHLY",
    "RECURRENCE_YEARLY",
    "RECURRENCE_PERIOD_DAYS",
    "DATE_FORMATS",
    "DEFAULT_DATE_FORMAT",
    "DECIMAL_SEPARATORS",
    "SYMBOL_POSITIONS",
    "HORIZON_END_OF_CURRENT_MONTH",
    "HORIZON_END_OF_NEXT_MONTH",
    "HORIZON_3_MONTHS",
    "HORIZON_6_MONTHS",
    "WARNING_HORIZONS",
    "WARNING_KIND_ACCOUNT",
    "WARNING_KIND_USER",
    "SETTLEMENT_MODE_MINIMAL",
    "SETTLEMENT_MODE_DIRECT",
    "SETTLEMENT_MODES",
    "AMOUNT_EPSILON",
]

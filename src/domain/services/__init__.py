"""Domain services package."""

from .currency import (
    format_currency,
    format_currency_abs,
    format_number,
    format_signed_currency,
)
from .dates import (
    date_picker_format,
    format_date,
    format_date_exact,
    format_date_with_weekday,
    format_month_year,
    get_days_diff,
    get_local_date_string,
    parse_local_date,
)
from .grouping import group_by_period
from .ledger import LedgerReplay, compute_debt_summary
from .occurrences import expand_occurrences, generate_payment_occurrences
from .projections import build_ledger_series
from .recurrence import get_next_recurring_date
from .settlements import (
    calculate_direct_settlements,
    calculate_settlements,
    select_settlements,
)
from .shares import compute_shares
from .upcoming import upcoming_occurrences
from .warnings import detect_pool_warnings, horizon_end_date

__all__ = [
    "format_number",
    "format_currency",
    "format_signed_currency",
    "format_currency_abs",
    "parse_local_date",
    "get_local_date_string",
    "format_date_exact",
    "format_date",
    "format_date_with_weekday",
    "format_month_year",
    "get_days_diff",
    "date_picker_format",
    "group_by_period",
    "LedgerReplay",
    "compute_debt_summary",
    "generate_payment_occurrences",
    "expand_occurrences",
    "build_ledger_series",
    "get_next_recurring_date",
    "calculate_settlements",
    "calculate_direct_settlements",
    "select_settlements",
    "compute_shares",
    "upcoming_occurrences",
    "detect_pool_warnings",
    "horizon_end_date",
]

"""Domain package for ledger rules and core models."""

from .models import (
    Contribution,
    Debt,
    DebtSummary,
    LedgerSeries,
    LedgerSnapshot,
    PairwiseBalance,
    Participant,
    ParticipantBalance,
    Payment,
    PaymentOccurrence,
    PoolOwnership,
    PoolWarning,
    UserPreferences,
)
from .policies import check_ledger_integrity, is_allowed_transfer
from .services import (
    build_ledger_series,
    compute_debt_summary,
    detect_pool_warnings,
    expand_occurrences,
    get_next_recurring_date,
    select_settlements,
)

__all__ = [
    "Contribution",
    "Debt",
    "DebtSummary",
    "LedgerSeries",
    "LedgerSnapshot",
    "PairwiseBalance",
    "Participant",
    "ParticipantBalance",
    "Payment",
    "PaymentOccurrence",
    "PoolOwnership",
    "PoolWarning",
    "UserPreferences",
    "check_ledger_integrity",
    "is_allowed_transfer",
    "build_ledger_series",
    "compute_debt_summary",
    "detect_pool_warnings",
    "expand_occurrences",
    "get_next_recurring_date",
    "select_settlements",
]

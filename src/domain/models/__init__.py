"""Domain models package."""

from .debts import (
    Debt,
    DebtSummary,
    PairwiseBalance,
    ParticipantBalance,
    PaymentBreakdown,
    PoolOwnership,
    PoolOwnershipEntry,
)
from .participants import Participant
from .payments import Contribution, Payment, PaymentOccurrence, Split
from .preferences import UserPreferences
from .projections import (
    LedgerSeries,
    LedgerSnapshot,
    MonthGroup,
    PoolWarning,
    UpcomingPayment,
    YearGroup,
)

__all__ = [
    "Participant",
    "Contribution",
    "Split",
    "Payment",
    "PaymentOccurrence",
    "UserPreferences",
    "ParticipantBalance",
    "Debt",
    "PaymentBreakdown",
    "PairwiseBalance",
    "PoolOwnershipEntry",
    "PoolOwnership",
    "DebtSummary",
    "LedgerSnapshot",
    "LedgerSeries",
    "PoolWarning",
    "UpcomingPayment",
    "MonthGroup",
    "YearGroup",
]

"""Domain models for payments, contributions and occurrences."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Contribution:
    """Share of a payment's cost attributed to one participant."""

    participant_id: int
    amount: Decimal
    weight: Decimal = Decimal("1")


@dataclass(frozen=True)
class Split:
    """Weighted split input used to derive contribution amounts."""

    participant_id: int
    weight: Decimal
    included: bool = True


@dataclass(frozen=True)
class Payment:
    """Payment definition, one-off or recurring.

    ``payer_id`` None means an externally sourced inflow. A non-null
    ``receiver_account_id`` marks a transfer into a participant or pool
    rather than an external expense. The ``recurrence_weekdays``,
    ``recurrence_monthdays`` and ``recurrence_months`` fields hold raw JSON
    text as stored by the backend.
    """

    id: int
    description: str
    amount: Decimal
    payment_date: date
    payer_id: int | None = None
    receiver_account_id: int | None = None
    contributions: tuple[Contribution, ...] = field(default_factory=tuple)
    is_recurring: bool = False
    recurrence_type: str | None = None
    recurrence_interval: int | None = None
    recurrence_times_per: int | None = None
    recurrence_end_date: date | None = None
    recurrence_weekdays: str | None = None
    recurrence_monthdays: str | None = None
    recurrence_months: str | None = None
    is_final: bool = True
    affects_balance: bool = True
    affects_payer_expectation: bool = False
    affects_receiver_expectation: bool = False
    project_id: int | None = None


@dataclass(frozen=True)
class PaymentOccurrence:
    """One dated materialization of a payment."""

    payment_id: int
    description: str
    amount: Decimal
    occurrence_date: date
    payer_id: int | None
    receiver_account_id: int | None
    is_recurring: bool
    is_final: bool = True
    affects_balance: bool = True
    affects_payer_expectation: bool = False
    affects_receiver_expectation: bool = False


__all__ = ["Contribution", "Split", "Payment", "PaymentOccurrence"]

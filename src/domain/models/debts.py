"""Domain models for balances, settlements and pool ownership."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.models.payments import PaymentOccurrence


@dataclass(frozen=True)
class ParticipantBalance:
    """Net position of a participant as of a cutoff date.

    Attributes:
        participant_id: Participant identifier.
        participant_name: Display name.
        total_paid: Amount paid on behalf of others (credits).
        total_owed: Amount consumed or received (debits).
        net_balance: total_paid minus total_owed; positive means owed money.
    """

    participant_id: int
    participant_name: str
    total_paid: Decimal
    total_owed: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class Debt:
    """Transfer that settles part of the outstanding balances."""

    from_participant_id: int
    from_participant_name: str
    to_participant_id: int
    to_participant_name: str
    amount: Decimal


@dataclass(frozen=True)
class PaymentBreakdown:
    """Dated line item explaining a pairwise or ownership amount."""

    payment_id: int
    description: str
    occurrence_date: date
    amount: Decimal


@dataclass(frozen=True)
class PairwiseBalance:
    """Relationship between two participants.

    ``net`` is amount_paid_for minus amount_owed_by; positive means the
    other participant owes this one.
    """

    participant_id: int
    participant_name: str
    other_participant_id: int
    other_participant_name: str
    amount_paid_for: Decimal
    amount_owed_by: Decimal
    net: Decimal
    paid_for_breakdown: list[PaymentBreakdown] = field(default_factory=list)
    owed_by_breakdown: list[PaymentBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class PoolOwnershipEntry:
    """One participant's stake in a pool."""

    participant_id: int
    participant_name: str
    contributed: Decimal
    consumed: Decimal
    ownership: Decimal
    expected_minimum: Decimal = Decimal("0")
    contributed_breakdown: list[PaymentBreakdown] = field(default_factory=list)
    consumed_breakdown: list[PaymentBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class PoolOwnership:
    """Ownership ledger of a pool with its committed minimum."""

    pool_id: int
    pool_name: str
    entries: list[PoolOwnershipEntry]
    total_balance: Decimal
    expected_minimum: Decimal
    is_below_expected: bool
    shortfall: Decimal | None = None


@dataclass(frozen=True)
class DebtSummary:
    """Aggregate ledger state as of ``target_date``."""

    target_date: date
    balances: list[ParticipantBalance]
    settlements: list[Debt]
    direct_settlements: list[Debt]
    pairwise_balances: list[PairwiseBalance]
    pool_ownerships: list[PoolOwnership]
    occurrences: list[PaymentOccurrence]


__all__ = [
    "ParticipantBalance",
    "Debt",
    "PaymentBreakdown",
    "PairwiseBalance",
    "PoolOwnershipEntry",
    "PoolOwnership",
    "DebtSummary",
]

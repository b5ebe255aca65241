"""Domain models for time series, warnings and grouped breakdowns."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class LedgerSnapshot:
    """Running ledger state captured at one date.

    Attributes:
        date: Snapshot date; includes every occurrence on or before it.
        balances: Net balance per non-pool participant.
        pool_balances: Actual total per pool.
        pool_expected: Expected minimum per pool.
        pool_ownerships: Ownership keyed by (pool_id, participant_id).
        pairwise: Net relative to the focus participant, keyed by the other
            participant. Empty outside focus mode.
    """

    date: date
    balances: dict[int, Decimal]
    pool_balances: dict[int, Decimal]
    pool_expected: dict[int, Decimal]
    pool_ownerships: dict[tuple[int, int], Decimal]
    pairwise: dict[int, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class LedgerSeries:
    """Ordered snapshots over a closed date range."""

    start_date: date
    end_date: date
    snapshots: list[LedgerSnapshot]
    focus_participant_id: int | None = None

    @property
    def dates(self) -> list[date]:
        """Return snapshot dates in ascending order."""
        return [snapshot.date for snapshot in self.snapshots]

    def balance_series(self, participant_id: int) -> list[tuple[date, Decimal]]:
        """Return the balance of a participant at every snapshot date."""
        return [
            (snapshot.date, snapshot.balances.get(participant_id, Decimal("0")))
            for snapshot in self.snapshots
        ]

    def pool_series(self, pool_id: int) -> list[tuple[date, Decimal]]:
        """Return the actual pool total at every snapshot date."""
        return [
            (snapshot.date, snapshot.pool_balances.get(pool_id, Decimal("0")))
            for snapshot in self.snapshots
        ]

    def ownership_series(
        self,
        pool_id: int,
        participant_id: int,
    ) -> list[tuple[date, Decimal]]:
        """Return a participant's ownership in a pool at every date."""
        key = (pool_id, participant_id)
        return [
            (snapshot.date, snapshot.pool_ownerships.get(key, Decimal("0")))
            for snapshot in self.snapshots
        ]

    def pairwise_series(self, other_id: int) -> list[tuple[date, Decimal]]:
        """Return the focus participant's net with another participant."""
        return [
            (snapshot.date, snapshot.pairwise.get(other_id, Decimal("0")))
            for snapshot in self.snapshots
        ]

    def to_mapping(self) -> dict[int, dict[str, Decimal]]:
        """Return balances keyed by participant id then ISO date string."""
        mapping: dict[int, dict[str, Decimal]] = {}
        for snapshot in self.snapshots:
            iso = snapshot.date.isoformat()
            for participant_id, balance in snapshot.balances.items():
                mapping.setdefault(participant_id, {})[iso] = balance
        return mapping


@dataclass(frozen=True)
class PoolWarning:
    """First projected date at which a pool or a pool member dips too low.

    ``kind`` is ``account`` when the pool total falls below its expected
    minimum and ``user`` when a participant's ownership turns negative.
    """

    pool_id: int
    pool_name: str
    kind: str
    date: date
    balance: Decimal
    expected_minimum: Decimal
    participant_id: int | None = None
    participant_name: str | None = None


@dataclass(frozen=True)
class UpcomingPayment:
    """Next occurrence of a recurring payment."""

    payment_id: int
    description: str
    amount: Decimal
    next_date: date


@dataclass(frozen=True)
class MonthGroup:
    """Items of one month with their total."""

    key: str
    total: Decimal
    items: list


@dataclass(frozen=True)
class YearGroup:
    """Months of one year with the yearly total."""

    year: int
    total: Decimal
    months: list[MonthGroup]


__all__ = [
    "LedgerSnapshot",
    "LedgerSeries",
    "PoolWarning",
    "UpcomingPayment",
    "MonthGroup",
    "YearGroup",
]

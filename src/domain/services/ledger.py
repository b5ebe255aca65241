"""Ledger replay over payment occurrences.

``LedgerReplay`` folds occurrences, in date order, into running state:

* user balances and pairwise "paid for" amounts between non-pool participants;
* per-pool ownership (contributed and consumed per participant), gated by
  ``affects_balance``;
* per-pool expected minimums, gated by the payer and receiver expectation
  flags instead of ``affects_balance``.

Shares attributed to pools never enter user balances, so the net balances
of non-pool participants always add up to zero. Pool shares are tracked as
pool ownership instead.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import AMOUNT_EPSILON
from src.domain.models.debts import (
    DebtSummary,
    PairwiseBalance,
    ParticipantBalance,
    PaymentBreakdown,
    PoolOwnership,
    PoolOwnershipEntry,
)
from src.domain.models.participants import Participant
from src.domain.models.payments import Payment, PaymentOccurrence
from src.domain.models.projections import LedgerSnapshot
from src.domain.services.occurrences import expand_occurrences
from src.domain.services.settlements import (
    calculate_direct_settlements,
    calculate_settlements,
)
from src.utils.decimal_utils import coerce_decimal

POOL_INTERNAL = "pool_internal"
USER_TRANSFER = "user_transfer"
EXTERNAL_INFLOW = "external_inflow"
EXTERNAL_EXPENSE = "external_expense"
INVALID = "invalid"

_ZERO = Decimal("0")


class _PoolStake:
    """Mutable ownership accumulator of one participant in one pool."""

    def __init__(self) -> None:
        self.contributed = _ZERO
        self.consumed = _ZERO
        self.expected = _ZERO
        self.contributed_breakdown: list[PaymentBreakdown] = []
        self.consumed_breakdown: list[PaymentBreakdown] = []

    @property
    def ownership(self) -> Decimal:
        return self.contributed - self.consumed


def _breakdown(occurrence: PaymentOccurrence, amount: Decimal) -> PaymentBreakdown:
    return PaymentBreakdown(
        payment_id=occurrence.payment_id,
        description=occurrence.description,
        occurrence_date=occurrence.occurrence_date,
        amount=amount,
    )


class LedgerReplay:
    """Running ledger state for one project.

    Occurrences must be applied in non-decreasing date order. A replay is
    never reused across queries; build a new one for each computation.
    """

    def __init__(
        self,
        participants: list[Participant],
        payments: list[Payment],
        logger: Logger | None = None,
        focus_participant_id: int | None = None,
    ) -> None:
        self._participants = list(participants)
        self._by_id = {p.id: p for p in self._participants}
        self._pool_ids = {p.id for p in self._participants if p.is_pool}
        self._user_ids = [p.id for p in self._participants if not p.is_pool]
        self._contributions: dict[int, list[tuple[int, Decimal]]] = {
            payment.id: [
                (c.participant_id, coerce_decimal(c.amount))
                for c in payment.contributions
            ]
            for payment in payments
        }
        self._logger = logger
        self._focus_id = focus_participant_id
        self._warned: set[str] = set()
        self._last_date: date | None = None

        self.paid: dict[int, Decimal] = defaultdict(lambda: _ZERO)
        self.owed: dict[int, Decimal] = defaultdict(lambda: _ZERO)
        self._pairwise: dict[tuple[int, int], Decimal] = defaultdict(
            lambda: _ZERO
        )
        self._pairwise_breakdown: dict[
            tuple[int, int], list[PaymentBreakdown]
        ] = defaultdict(list)
        self._stakes: dict[int, dict[int, _PoolStake]] = {
            pool_id: defaultdict(_PoolStake) for pool_id in self._pool_ids
        }
        self._pool_expected: dict[int, Decimal] = {
            pool_id: _ZERO for pool_id in self._pool_ids
        }

    @property
    def pool_ids(self) -> set[int]:
        return set(self._pool_ids)

    def _warn_once(self, key: str, message: str) -> None:
        if key in self._warned or self._logger is None:
            return
        self._warned.add(key)
        self._logger.warning(message)

    def _is_pool(self, participant_id: int | None) -> bool:
        return participant_id is not None and participant_id in self._pool_ids

    def _known(self, participant_id: int, occurrence: PaymentOccurrence) -> bool:
        if participant_id in self._by_id:
            return True
        self._warn_once(
            f"participant:{participant_id}",
            f"Payment {occurrence.payment_id} references unknown participant "
            f"{participant_id}; it is ignored",
        )
        return False

    def classify(self, occurrence: PaymentOccurrence) -> str:
        """Return the transaction kind of an occurrence."""
        payer_id = occurrence.payer_id
        receiver_id = occurrence.receiver_account_id
        if payer_id is None and receiver_id is None:
            return INVALID
        if self._is_pool(payer_id) or self._is_pool(receiver_id):
            return POOL_INTERNAL
        if payer_id is not None and receiver_id is not None:
            return USER_TRANSFER
        if payer_id is None:
            return EXTERNAL_INFLOW
        return EXTERNAL_EXPENSE

    def contributions_for(
        self,
        occurrence: PaymentOccurrence,
    ) -> list[tuple[int, Decimal]]:
        """Return the (participant_id, amount) shares of an occurrence."""
        shares = self._contributions.get(occurrence.payment_id)
        if shares is None:
            self._warn_once(
                f"payment:{occurrence.payment_id}",
                f"No payment definition for occurrence of payment "
                f"{occurrence.payment_id}; contributions are treated as empty",
            )
            return []
        return shares

    def apply(self, occurrence: PaymentOccurrence) -> None:
        """Fold one occurrence into the running state."""
        if self._last_date is not None and occurrence.occurrence_date < self._last_date:
            raise ValueError(
                "Occurrences must be applied in non-decreasing date order"
            )
        self._last_date = occurrence.occurrence_date

        kind = self.classify(occurrence)
        if kind == INVALID:
            self._warn_once(
                f"invalid:{occurrence.payment_id}",
                f"Payment {occurrence.payment_id} has neither payer nor "
                f"receiver; it is skipped",
            )
            return
        for pool_id in self._pool_ids:
            self._apply_pool(pool_id, occurrence)
        if kind == POOL_INTERNAL or not occurrence.affects_balance:
            return
        if kind == USER_TRANSFER:
            self._apply_user_transfer(occurrence)
        elif kind == EXTERNAL_INFLOW:
            self._apply_external_inflow(occurrence)
        else:
            self._apply_external_expense(occurrence)

    def _record_pairwise(
        self,
        from_id: int,
        to_id: int,
        occurrence: PaymentOccurrence,
        amount: Decimal,
    ) -> None:
        if from_id == to_id:
            return
        self._pairwise[(from_id, to_id)] += amount
        self._pairwise_breakdown[(from_id, to_id)].append(
            _breakdown(occurrence, amount)
        )

    def _user_shares(
        self,
        occurrence: PaymentOccurrence,
    ) -> list[tuple[int, Decimal]]:
        return [
            (participant_id, amount)
            for participant_id, amount in self.contributions_for(occurrence)
            if not self._is_pool(participant_id)
            and self._known(participant_id, occurrence)
        ]

    def _apply_user_transfer(self, occurrence: PaymentOccurrence) -> None:
        payer_id = occurrence.payer_id
        receiver_id = occurrence.receiver_account_id
        if not (
            self._known(payer_id, occurrence)
            and self._known(receiver_id, occurrence)
        ):
            return
        amount = coerce_decimal(occurrence.amount)
        self.paid[payer_id] += amount
        self.owed[receiver_id] += amount
        self._record_pairwise(payer_id, receiver_id, occurrence, amount)

    def _apply_external_inflow(self, occurrence: PaymentOccurrence) -> None:
        receiver_id = occurrence.receiver_account_id
        if not self._known(receiver_id, occurrence):
            return
        for participant_id, amount in self._user_shares(occurrence):
            self.paid[participant_id] += amount
            self.owed[receiver_id] += amount
            self._record_pairwise(participant_id, receiver_id, occurrence, amount)

    def _apply_external_expense(self, occurrence: PaymentOccurrence) -> None:
        payer_id = occurrence.payer_id
        if not self._known(payer_id, occurrence):
            return
        for participant_id, amount in self._user_shares(occurrence):
            self.paid[payer_id] += amount
            self.owed[participant_id] += amount
            self._record_pairwise(payer_id, participant_id, occurrence, amount)

    def _pool_shares(
        self,
        pool_id: int,
        occurrence: PaymentOccurrence,
    ) -> list[tuple[int, Decimal]]:
        return [
            (pid, share)
            for pid, share in self.contributions_for(occurrence)
            if pid != pool_id and self._known(pid, occurrence)
        ]

    def _apply_pool(self, pool_id: int, occurrence: PaymentOccurrence) -> None:
        payer_id = occurrence.payer_id
        receiver_id = occurrence.receiver_account_id
        amount = coerce_decimal(occurrence.amount)
        stakes = self._stakes[pool_id]

        if receiver_id is not None:
            if receiver_id == pool_id and payer_id is not None and payer_id != pool_id:
                # Deposit into the pool.
                if not self._known(payer_id, occurrence):
                    return
                if occurrence.affects_receiver_expectation:
                    self._pool_expected[pool_id] += amount
                    stakes[payer_id].expected += amount
                if occurrence.affects_balance and not self._is_pool(payer_id):
                    stake = stakes[payer_id]
                    stake.contributed += amount
                    stake.contributed_breakdown.append(_breakdown(occurrence, amount))
            elif payer_id == pool_id and receiver_id != pool_id:
                # Withdrawal from the pool.
                if not self._known(receiver_id, occurrence):
                    return
                if occurrence.affects_payer_expectation:
                    self._pool_expected[pool_id] -= amount
                    stakes[receiver_id].expected -= amount
                if occurrence.affects_balance and not self._is_pool(receiver_id):
                    stake = stakes[receiver_id]
                    stake.consumed += amount
                    stake.consumed_breakdown.append(_breakdown(occurrence, amount))
            elif payer_id is None and receiver_id == pool_id:
                # External funds arriving at the pool.
                shares = self._pool_shares(pool_id, occurrence)
                if occurrence.affects_receiver_expectation:
                    self._pool_expected[pool_id] += amount
                    for pid, share in shares:
                        stakes[pid].expected += share
                if occurrence.affects_balance:
                    for pid, share in shares:
                        stake = stakes[pid]
                        stake.contributed += share
                        stake.contributed_breakdown.append(
                            _breakdown(occurrence, share)
                        )
            return

        if payer_id == pool_id:
            # The pool pays an external expense.
            shares = self._pool_shares(pool_id, occurrence)
            if occurrence.affects_payer_expectation:
                self._pool_expected[pool_id] -= amount
                for pid, share in shares:
                    stakes[pid].expected -= share
            if occurrence.affects_balance:
                for pid, share in shares:
                    stake = stakes[pid]
                    stake.consumed += share
                    stake.consumed_breakdown.append(_breakdown(occurrence, share))
            return

        if payer_id is not None and occurrence.affects_balance:
            # A participant pays an expense partly owed by the pool.
            pool_share = sum(
                (
                    share
                    for pid, share in self.contributions_for(occurrence)
                    if pid == pool_id
                ),
                _ZERO,
            )
            if (
                pool_share
                and not self._is_pool(payer_id)
                and self._known(payer_id, occurrence)
            ):
                stake = stakes[payer_id]
                stake.contributed += pool_share
                stake.contributed_breakdown.append(
                    _breakdown(occurrence, pool_share)
                )

    def net_balance(self, participant_id: int) -> Decimal:
        return self.paid[participant_id] - self.owed[participant_id]

    def balances(self) -> dict[int, Decimal]:
        """Return the net balance of every non-pool participant."""
        return {pid: self.net_balance(pid) for pid in self._user_ids}

    def pool_total(self, pool_id: int) -> Decimal:
        """Return the pool balance as the sum of its members' ownership."""
        return sum(
            (
                stake.ownership
                for pid, stake in self._stakes[pool_id].items()
                if not self._is_pool(pid)
            ),
            _ZERO,
        )

    def pool_expected(self, pool_id: int) -> Decimal:
        return self._pool_expected[pool_id]

    def ownership(self, pool_id: int, participant_id: int) -> Decimal:
        stake = self._stakes[pool_id].get(participant_id)
        return stake.ownership if stake is not None else _ZERO

    def pool_members(self, pool_id: int) -> list[int]:
        """Return non-pool participants holding a stake in the pool."""
        return [
            pid for pid in self._stakes[pool_id] if not self._is_pool(pid)
        ]

    def pairwise_net(self, participant_id: int, other_id: int) -> Decimal:
        """Return paid-for minus owed-by between two participants."""
        return (
            self._pairwise[(participant_id, other_id)]
            - self._pairwise[(other_id, participant_id)]
        )

    def snapshot(self, when: date) -> LedgerSnapshot:
        """Capture the running state as of ``when``."""
        ownerships = {
            (pool_id, pid): stake.ownership
            for pool_id, stakes in self._stakes.items()
            for pid, stake in stakes.items()
            if not self._is_pool(pid)
        }
        pairwise: dict[int, Decimal] = {}
        if self._focus_id is not None:
            pairwise = {
                other_id: self.pairwise_net(self._focus_id, other_id)
                for other_id in self._user_ids
                if other_id != self._focus_id
            }
        return LedgerSnapshot(
            date=when,
            balances=self.balances(),
            pool_balances={
                pool_id: self.pool_total(pool_id) for pool_id in self._pool_ids
            },
            pool_expected=dict(self._pool_expected),
            pool_ownerships=ownerships,
            pairwise=pairwise,
        )

    def _balance_rows(self) -> list[ParticipantBalance]:
        rows = [
            ParticipantBalance(
                participant_id=pid,
                participant_name=self._by_id[pid].name,
                total_paid=self.paid[pid],
                total_owed=self.owed[pid],
                net_balance=self.net_balance(pid),
            )
            for pid in self._user_ids
        ]
        rows.sort(key=lambda row: (row.net_balance, row.participant_id))
        return rows

    def _pairwise_rows(self) -> list[PairwiseBalance]:
        rows: list[PairwiseBalance] = []
        for pid in self._user_ids:
            for other_id in self._user_ids:
                if pid == other_id:
                    continue
                paid_for = self._pairwise[(pid, other_id)]
                owed_by = self._pairwise[(other_id, pid)]
                if paid_for <= AMOUNT_EPSILON and owed_by <= AMOUNT_EPSILON:
                    continue
                rows.append(
                    PairwiseBalance(
                        participant_id=pid,
                        participant_name=self._by_id[pid].name,
                        other_participant_id=other_id,
                        other_participant_name=self._by_id[other_id].name,
                        amount_paid_for=paid_for,
                        amount_owed_by=owed_by,
                        net=paid_for - owed_by,
                        paid_for_breakdown=list(
                            self._pairwise_breakdown[(pid, other_id)]
                        ),
                        owed_by_breakdown=list(
                            self._pairwise_breakdown[(other_id, pid)]
                        ),
                    )
                )
        return rows

    def _pool_rows(self) -> list[PoolOwnership]:
        rows: list[PoolOwnership] = []
        for pool in self._participants:
            if not pool.is_pool:
                continue
            stakes = self._stakes[pool.id]
            entries = [
                PoolOwnershipEntry(
                    participant_id=pid,
                    participant_name=self._by_id[pid].name,
                    contributed=stakes[pid].contributed,
                    consumed=stakes[pid].consumed,
                    ownership=stakes[pid].ownership,
                    expected_minimum=stakes[pid].expected,
                    contributed_breakdown=list(stakes[pid].contributed_breakdown),
                    consumed_breakdown=list(stakes[pid].consumed_breakdown),
                )
                for pid in self._user_ids
                if pid in stakes
                and (
                    stakes[pid].contributed > AMOUNT_EPSILON
                    or stakes[pid].consumed > AMOUNT_EPSILON
                )
            ]
            entries.sort(key=lambda entry: -entry.ownership)
            total = self.pool_total(pool.id)
            expected = self._pool_expected[pool.id]
            below = total < expected
            rows.append(
                PoolOwnership(
                    pool_id=pool.id,
                    pool_name=pool.name,
                    entries=entries,
                    total_balance=total,
                    expected_minimum=expected,
                    is_below_expected=below,
                    shortfall=expected - total if below else None,
                )
            )
        return rows

    def summary(
        self,
        target_date: date,
        occurrences: list[PaymentOccurrence],
    ) -> DebtSummary:
        """Build the aggregate view of the replayed state."""
        balances = self._balance_rows()
        pairwise = self._pairwise_rows()
        return DebtSummary(
            target_date=target_date,
            balances=balances,
            settlements=calculate_settlements(balances),
            direct_settlements=calculate_direct_settlements(pairwise),
            pairwise_balances=pairwise,
            pool_ownerships=self._pool_rows(),
            occurrences=list(occurrences),
        )


def compute_debt_summary(
    participants: list[Participant],
    payments: list[Payment],
    target_date: date,
    logger: Logger | None = None,
) -> DebtSummary:
    """Compute balances, settlements and pool ownership as of a date.

    Args:
        participants: Project participants, pools included.
        payments: Payment definitions with their contributions.
        target_date: Inclusive cutoff date.
        logger: Optional logger for data-integrity warnings.

    Returns:
        DebtSummary: Aggregated ledger state at ``target_date``.
    """
    occurrences = expand_occurrences(payments, target_date, logger)
    replay = LedgerReplay(participants, payments, logger)
    for occurrence in occurrences:
        replay.apply(occurrence)
    return replay.summary(target_date, occurrences)


__all__ = [
    "POOL_INTERNAL",
    "USER_TRANSFER",
    "EXTERNAL_INFLOW",
    "EXTERNAL_EXPENSE",
    "INVALID",
    "LedgerReplay",
    "compute_debt_summary",
]

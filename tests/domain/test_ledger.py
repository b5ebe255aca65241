"""Tests for the ledger replay and debt summary."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models.participants import Participant
from src.domain.models.payments import Contribution, Payment, PaymentOccurrence
from src.domain.services.ledger import (
    EXTERNAL_EXPENSE,
    EXTERNAL_INFLOW,
    INVALID,
    POOL_INTERNAL,
    USER_TRANSFER,
    LedgerReplay,
    compute_debt_summary,
)
from src.domain.services.projections import build_ledger_series

ALICE = Participant(1, "Alice")
BOB = Participant(2, "Bob")
CAROL = Participant(3, "Carol")
POOL = Participant(9, "House pot", account_type="pool")
PEOPLE = [ALICE, BOB, CAROL]


def _payment(pid: int, amount: str, when: date, payer=None, receiver=None, shares=(), **kw):
    return Payment(
        id=pid,
        description=f"payment {pid}",
        amount=Decimal(amount),
        payment_date=when,
        payer_id=payer,
        receiver_account_id=receiver,
        contributions=tuple(
            Contribution(participant_id, Decimal(share))
            for participant_id, share in shares
        ),
        **kw,
    )


def _nets(summary) -> dict[int, Decimal]:
    return {row.participant_id: row.net_balance for row in summary.balances}


def test_external_expense_splits_between_contributors() -> None:
    """The payer is credited and each contributor owes their share."""
    payments = [
        _payment(
            1, "90", date(2025, 1, 10), payer=1,
            shares=[(1, "30"), (2, "30"), (3, "30")],
        )
    ]

    summary = compute_debt_summary(PEOPLE, payments, date(2025, 1, 31))

    assert _nets(summary) == {
        1: Decimal("60"),
        2: Decimal("-30"),
        3: Decimal("-30"),
    }
    assert [row.participant_id for row in summary.balances] == [2, 3, 1]
    assert [
        (debt.from_participant_id, debt.to_participant_id, debt.amount)
        for debt in summary.settlements
    ] == [(2, 1, Decimal("30.00")), (3, 1, Decimal("30.00"))]
    alice_bob = next(
        pair
        for pair in summary.pairwise_balances
        if pair.participant_id == 1 and pair.other_participant_id == 2
    )
    assert alice_bob.amount_paid_for == Decimal("30")
    assert alice_bob.net == Decimal("30")
    assert alice_bob.paid_for_breakdown[0].occurrence_date == date(2025, 1, 10)


def test_user_transfer_and_external_inflow() -> None:
    """Transfers settle debts and inflows make the receiver hold funds."""
    payments = [
        _payment(
            1, "90", date(2025, 1, 10), payer=1,
            shares=[(1, "30"), (2, "30"), (3, "30")],
        ),
        _payment(2, "30", date(2025, 1, 11), payer=2, receiver=1),
        _payment(
            3, "40", date(2025, 1, 12), receiver=3,
            shares=[(1, "20"), (3, "20")],
        ),
    ]

    summary = compute_debt_summary(PEOPLE, payments, date(2025, 1, 31))

    assert _nets(summary) == {
        1: Decimal("50"),
        2: Decimal("0"),
        3: Decimal("-50"),
    }
    assert [
        (debt.from_participant_id, debt.to_participant_id, debt.amount)
        for debt in summary.direct_settlements
    ] == [(3, 1, Decimal("50.00"))]


def test_classification_of_occurrences() -> None:
    """Every occurrence falls in exactly one region."""
    replay = LedgerReplay(PEOPLE + [POOL], [])

    def occ(payer, receiver):
        return PaymentOccurrence(
            payment_id=1,
            description="x",
            amount=Decimal("1"),
            occurrence_date=date(2025, 1, 1),
            payer_id=payer,
            receiver_account_id=receiver,
            is_recurring=False,
        )

    assert replay.classify(occ(1, 9)) == POOL_INTERNAL
    assert replay.classify(occ(9, None)) == POOL_INTERNAL
    assert replay.classify(occ(1, 2)) == USER_TRANSFER
    assert replay.classify(occ(None, 2)) == EXTERNAL_INFLOW
    assert replay.classify(occ(1, None)) == EXTERNAL_EXPENSE
    assert replay.classify(occ(None, None)) == INVALID


def test_pool_ownership_tracks_deposits_withdrawals_and_expenses() -> None:
    """Ownership sums to the pool total and ignores user balances."""
    payments = [
        _payment(1, "100", date(2025, 1, 1), payer=1, receiver=9),
        _payment(2, "50", date(2025, 1, 2), payer=2, receiver=9),
        _payment(3, "30", date(2025, 1, 3), payer=9, receiver=2),
        _payment(
            4, "60", date(2025, 1, 4), payer=9,
            shares=[(1, "30"), (2, "30")],
        ),
    ]

    summary = compute_debt_summary(
        [ALICE, BOB, POOL], payments, date(2025, 1, 31)
    )

    pool = summary.pool_ownerships[0]
    assert [(e.participant_id, e.ownership) for e in pool.entries] == [
        (1, Decimal("70")),
        (2, Decimal("-10")),
    ]
    assert pool.total_balance == Decimal("60")
    assert pool.is_below_expected is False
    assert pool.shortfall is None
    assert set(_nets(summary).values()) == {Decimal("0")}


def test_user_expense_with_pool_share_credits_payer_ownership() -> None:
    """The pool's share of a user-paid expense becomes payer ownership."""
    payments = [
        _payment(
            1, "90", date(2025, 1, 5), payer=1,
            shares=[(1, "30"), (2, "30"), (9, "30")],
        )
    ]

    summary = compute_debt_summary(
        [ALICE, BOB, POOL], payments, date(2025, 1, 31)
    )

    assert _nets(summary) == {1: Decimal("30"), 2: Decimal("-30")}
    entry = summary.pool_ownerships[0].entries[0]
    assert entry.participant_id == 1
    assert entry.contributed == Decimal("30")


def test_expected_minimum_is_tracked_separately() -> None:
    """Commitments move the expected minimum without moving money."""
    payments = [
        _payment(
            1, "100", date(2025, 1, 1), payer=1, receiver=9,
            affects_balance=False,
            affects_receiver_expectation=True,
        ),
        _payment(2, "40", date(2025, 1, 2), payer=1, receiver=9),
    ]

    summary = compute_debt_summary([ALICE, POOL], payments, date(2025, 1, 31))

    pool = summary.pool_ownerships[0]
    assert pool.expected_minimum == Decimal("100")
    assert pool.total_balance == Decimal("40")
    assert pool.is_below_expected is True
    assert pool.shortfall == Decimal("60")
    assert pool.entries[0].expected_minimum == Decimal("100")


def test_balances_are_zero_sum() -> None:
    """Non-pool nets always add up to zero."""
    payments = [
        _payment(
            1, "75.50", date(2025, 1, 1), payer=2,
            shares=[(1, "25.17"), (2, "25.17"), (3, "25.16")],
        ),
        _payment(
            2, "120", date(2025, 1, 2), payer=3,
            shares=[(1, "40"), (9, "80")],
        ),
        _payment(3, "33", date(2025, 1, 3), payer=1, receiver=3),
        _payment(
            4, "18", date(2025, 1, 4), receiver=2,
            shares=[(1, "6"), (3, "6"), (9, "6")],
        ),
        _payment(5, "200", date(2025, 1, 5), payer=1, receiver=9),
    ]

    summary = compute_debt_summary(PEOPLE + [POOL], payments, date(2025, 1, 31))

    assert sum(_nets(summary).values()) == Decimal("0")
    for transfers in (summary.settlements, summary.direct_settlements):
        nets = _nets(summary)
        for debt in transfers:
            nets[debt.from_participant_id] += debt.amount
            nets[debt.to_participant_id] -= debt.amount
        assert all(value == 0 for value in nets.values())


def test_invalid_and_unknown_references_are_logged() -> None:
    """Integrity misses are skipped with a warning."""
    logger = MagicMock()
    payments = [
        _payment(1, "10", date(2025, 1, 1)),
        _payment(2, "10", date(2025, 1, 2), payer=1, shares=[(42, "10")]),
    ]

    summary = compute_debt_summary(PEOPLE, payments, date(2025, 1, 31), logger)

    assert set(_nets(summary).values()) == {Decimal("0")}
    assert logger.warning.call_count == 2


def test_unknown_pool_members_are_skipped_in_every_view() -> None:
    """Stakes are only kept for known participants, so totals agree."""
    logger = MagicMock()
    payments = [
        _payment(1, "50", date(2025, 1, 2), payer=42, receiver=9),
        _payment(2, "30", date(2025, 1, 3), payer=1, receiver=9),
        _payment(3, "20", date(2025, 1, 4), payer=9, shares=[(1, "10"), (77, "10")]),
    ]

    summary = compute_debt_summary(PEOPLE + [POOL], payments, date(2025, 1, 31), logger)
    series = build_ledger_series(
        PEOPLE + [POOL],
        payments,
        date(2025, 1, 1),
        date(2025, 1, 31),
        logger=MagicMock(),
    )

    pool = summary.pool_ownerships[0]
    assert pool.total_balance == Decimal("20")
    assert series.pool_series(9)[-1][1] == pool.total_balance
    assert [entry.participant_id for entry in pool.entries] == [1]
    assert logger.warning.call_count == 2


def test_replay_rejects_out_of_order_occurrences() -> None:
    """Occurrences must arrive in non-decreasing date order."""
    replay = LedgerReplay(PEOPLE, [])
    later = PaymentOccurrence(1, "x", Decimal("1"), date(2025, 2, 1), 1, 2, False)
    earlier = PaymentOccurrence(2, "y", Decimal("1"), date(2025, 1, 1), 1, 2, False)

    replay.apply(later)

    with pytest.raises(ValueError):
        replay.apply(earlier)

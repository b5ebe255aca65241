"""Tests for settlement reduction."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.models.debts import DebtSummary, PairwiseBalance, ParticipantBalance
from src.domain.services.settlements import (
    calculate_direct_settlements,
    calculate_settlements,
    select_settlements,
)


def _balance(pid: int, net: str) -> ParticipantBalance:
    return ParticipantBalance(
        participant_id=pid,
        participant_name=f"P{pid}",
        total_paid=Decimal("0"),
        total_owed=Decimal("0"),
        net_balance=Decimal(net),
    )


def _pair(pid: int, other: int, net: str) -> PairwiseBalance:
    value = Decimal(net)
    return PairwiseBalance(
        participant_id=pid,
        participant_name=f"P{pid}",
        other_participant_id=other,
        other_participant_name=f"P{other}",
        amount_paid_for=max(value, Decimal("0")),
        amount_owed_by=max(-value, Decimal("0")),
        net=value,
    )


def test_greedy_matches_largest_debtor_with_largest_creditor() -> None:
    """Largest amounts are matched first, reducing transfer count."""
    balances = [
        _balance(1, "-70"),
        _balance(2, "-30"),
        _balance(3, "40"),
        _balance(4, "60"),
    ]

    settlements = calculate_settlements(balances)

    assert [
        (d.from_participant_id, d.to_participant_id, d.amount) for d in settlements
    ] == [
        (1, 4, Decimal("60.00")),
        (1, 3, Decimal("10.00")),
        (2, 3, Decimal("30.00")),
    ]


def test_ties_are_broken_by_participant_id() -> None:
    """Equal amounts settle in ascending id order."""
    balances = [
        _balance(5, "-10"),
        _balance(2, "-10"),
        _balance(7, "10"),
        _balance(3, "10"),
    ]

    settlements = calculate_settlements(balances)

    assert [(d.from_participant_id, d.to_participant_id) for d in settlements] == [
        (2, 3),
        (5, 7),
    ]


def test_sub_cent_balances_are_ignored() -> None:
    """Balances within one cent of zero need no transfer."""
    assert calculate_settlements([_balance(1, "-0.005"), _balance(2, "0.005")]) == []


def test_direct_settlements_use_each_pair_once() -> None:
    """Each unordered pair yields at most one transfer, largest first."""
    pairs = [
        _pair(1, 2, "25"),
        _pair(2, 1, "-25"),
        _pair(1, 3, "-40"),
        _pair(3, 1, "40"),
        _pair(2, 3, "0"),
    ]

    settlements = calculate_direct_settlements(pairs)

    assert [
        (d.from_participant_id, d.to_participant_id, d.amount) for d in settlements
    ] == [(1, 3, Decimal("40.00")), (2, 1, Decimal("25.00"))]


def test_select_settlements_by_mode() -> None:
    """The mode flag chooses between both lists."""
    minimal = calculate_settlements([_balance(1, "-5"), _balance(2, "5")])
    direct = calculate_direct_settlements([_pair(1, 2, "-5")])
    summary = DebtSummary(
        target_date=date(2025, 1, 1),
        balances=[],
        settlements=minimal,
        direct_settlements=direct,
        pairwise_balances=[],
        pool_ownerships=[],
        occurrences=[],
    )

    assert select_settlements(summary, "minimal") is minimal
    assert select_settlements(summary, "direct") is direct
    with pytest.raises(ValueError):
        select_settlements(summary, "fastest")

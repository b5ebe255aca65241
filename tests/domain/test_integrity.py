"""Tests for ledger integrity rules."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models.participants import Participant
from src.domain.models.payments import Contribution, Payment
from src.domain.policies.integrity import check_ledger_integrity, is_allowed_transfer

ALICE = Participant(1, "Alice")
BOB = Participant(2, "Bob")
POOL = Participant(9, "Pot", account_type="pool")
SAVINGS = Participant(10, "Savings", account_type="pool")


def test_transfer_rules() -> None:
    """Self and pool-to-pool transfers are refused; others are allowed."""
    assert is_allowed_transfer(ALICE, BOB)
    assert is_allowed_transfer(ALICE, POOL)
    assert is_allowed_transfer(None, POOL)
    assert is_allowed_transfer(ALICE, None)
    assert not is_allowed_transfer(ALICE, ALICE)
    assert not is_allowed_transfer(POOL, SAVINGS)


def test_clean_ledger_has_no_issues() -> None:
    logger = MagicMock()
    payments = [
        Payment(
            1,
            "Dinner",
            Decimal("40"),
            date(2025, 1, 1),
            payer_id=1,
            contributions=(
                Contribution(1, Decimal("20")),
                Contribution(2, Decimal("20")),
            ),
        ),
        Payment(2, "Payback", Decimal("20"), date(2025, 1, 2), 2, 1),
    ]

    assert check_ledger_integrity([ALICE, BOB], payments, logger) == []
    logger.warning.assert_not_called()


def test_each_issue_is_reported_and_logged() -> None:
    """Every broken rule produces one issue and one warning."""
    logger = MagicMock()
    payments = [
        Payment(1, "Orphan", Decimal("5"), date(2025, 1, 1)),
        Payment(2, "Ghost", Decimal("5"), date(2025, 1, 1), 1, 77),
        Payment(3, "Loop", Decimal("5"), date(2025, 1, 1), 1, 1),
        Payment(4, "Pools", Decimal("5"), date(2025, 1, 1), 9, 10),
        Payment(
            5,
            "Short",
            Decimal("30"),
            date(2025, 1, 1),
            payer_id=1,
            contributions=(
                Contribution(1, Decimal("10")),
                Contribution(42, Decimal("10")),
            ),
        ),
    ]

    issues = check_ledger_integrity([ALICE, BOB, POOL, SAVINGS], payments, logger)

    assert issues == [
        "Payment 1 has neither payer nor receiver",
        "Payment 1 contributions sum to 0 instead of 5",
        "Payment 2 references unknown receiver 77",
        "Payment 3 is a transfer to oneself",
        "Payment 4 is a pool-to-pool transfer",
        "Payment 5 has a contribution from unknown participant 42",
        "Payment 5 contributions sum to 20 instead of 30",
    ]
    assert logger.warning.call_count == len(issues)

"""Tests for upcoming recurring payments."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models.payments import Payment
from src.domain.services.upcoming import upcoming_occurrences


def _recurring(pid: int, start: date, kind: str, **kw) -> Payment:
    return Payment(
        id=pid,
        description=f"Rule {pid}",
        amount=Decimal("12"),
        payment_date=start,
        payer_id=1,
        is_recurring=True,
        recurrence_type=kind,
        **kw,
    )


def test_returns_next_dates_sorted_and_skips_one_offs() -> None:
    """Only recurring payments with a next date are listed, soonest first."""
    payments = [
        _recurring(1, date(2025, 1, 6), "weekly"),
        _recurring(2, date(2025, 1, 1), "daily"),
        Payment(3, "One-off", Decimal("5"), date(2025, 1, 20), payer_id=1),
        _recurring(4, date(2025, 1, 1), "daily", recurrence_end_date=date(2025, 1, 5)),
    ]

    upcoming = upcoming_occurrences(payments, date(2025, 1, 8))

    assert [(item.payment_id, item.next_date) for item in upcoming] == [
        (2, date(2025, 1, 9)),
        (1, date(2025, 1, 13)),
    ]
    assert upcoming[0].amount == Decimal("12")


def test_unknown_recurrence_type_is_left_out_with_warning() -> None:
    logger = MagicMock()

    upcoming = upcoming_occurrences(
        [_recurring(1, date(2025, 1, 1), "fortnightly")],
        date(2025, 1, 8),
        logger,
    )

    assert upcoming == []
    logger.warning.assert_called_once()

"""Next occurrences of recurring payments."""

from datetime import date
from logging import Logger

from src.domain.models.payments import Payment
from src.domain.models.projections import UpcomingPayment
from src.domain.services.recurrence import get_next_recurring_date


def upcoming_occurrences(
    payments: list[Payment],
    after_date: date,
    logger: Logger | None = None,
) -> list[UpcomingPayment]:
    """Return the next occurrence of each recurring payment after a date.

    Payments without a next occurrence are left out. Results are ordered by
    date, then payment id.
    """
    upcoming: list[UpcomingPayment] = []
    for payment in payments:
        if not payment.is_recurring:
            continue
        next_date = get_next_recurring_date(payment, after_date, logger)
        if next_date is None:
            continue
        upcoming.append(
            UpcomingPayment(
                payment_id=payment.id,
                description=payment.description,
                amount=payment.amount,
                next_date=next_date,
            )
        )
    upcoming.sort(key=lambda item: (item.next_date, item.payment_id))
    return upcoming


__all__ = ["upcoming_occurrences"]

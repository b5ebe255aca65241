"""Expansion of payment definitions into dated occurrences."""

from datetime import date, timedelta
from logging import Logger

from dateutil.relativedelta import relativedelta

from src.domain.constants import (
    RECURRENCE_DAILY,
    RECURRENCE_MONTHLY,
    RECURRENCE_PERIOD_DAYS,
    RECURRENCE_WEEKLY,
    RECURRENCE_YEARLY,
)
from src.domain.models.payments import Payment, PaymentOccurrence
from src.domain.services.recurrence import (
    days_in_month,
    load_number_list,
    load_weekday_pattern,
    week_start,
)

WEEKDAY_EXPANSION_WEEKS = 520
MONTHDAY_EXPANSION_MONTHS = 240
MONTH_EXPANSION_YEARS = 50

_CALENDAR_STEPS = {
    RECURRENCE_DAILY: "days",
    RECURRENCE_WEEKLY: "weeks",
    RECURRENCE_MONTHLY: "months",
    RECURRENCE_YEARLY: "years",
}


def _occurrence(
    payment: Payment,
    when: date,
    is_recurring: bool = True,
) -> PaymentOccurrence:
    return PaymentOccurrence(
        payment_id=payment.id,
        description=payment.description,
        amount=payment.amount,
        occurrence_date=when,
        payer_id=payment.payer_id,
        receiver_account_id=payment.receiver_account_id,
        is_recurring=is_recurring,
        is_final=payment.is_final,
        affects_balance=payment.affects_balance,
        affects_payer_expectation=payment.affects_payer_expectation,
        affects_receiver_expectation=payment.affects_receiver_expectation,
    )


def _weekday_dates(
    pattern: list[list[int]],
    start: date,
    end: date,
) -> list[date]:
    dates: list[date] = []
    current = week_start(start)
    for index in range(WEEKDAY_EXPANSION_WEEKS):
        if current > end:
            break
        for weekday in pattern[index % len(pattern)]:
            if not 0 <= weekday <= 6:
                continue
            candidate = current + timedelta(days=weekday)
            if start <= candidate <= end:
                dates.append(candidate)
        current += timedelta(weeks=1)
    return dates


def _monthday_dates(monthdays: list[int], start: date, end: date) -> list[date]:
    dates: list[date] = []
    cursor = date(start.year, start.month, 1)
    for _ in range(MONTHDAY_EXPANSION_MONTHS):
        last_day = days_in_month(cursor.year, cursor.month)
        days = sorted({min(day, last_day) for day in monthdays if day >= 1})
        for day in days:
            candidate = cursor.replace(day=day)
            if start <= candidate <= end:
                dates.append(candidate)
        cursor += relativedelta(months=1)
        if cursor > end:
            break
    return dates


def _month_dates(
    months: list[int],
    monthdays: list[int],
    start: date,
    end: date,
) -> list[date]:
    dates: list[date] = []
    for year in range(start.year, start.year + MONTH_EXPANSION_YEARS):
        if date(year, 1, 1) > end:
            break
        for month in months:
            if not 1 <= month <= 12:
                continue
            last_day = days_in_month(year, month)
            for day in sorted({min(d, last_day) for d in monthdays if d >= 1}):
                candidate = date(year, month, day)
                if start <= candidate <= end:
                    dates.append(candidate)
    return dates


def _legacy_dates(
    payment: Payment,
    start: date,
    end: date,
    logger: Logger | None,
) -> list[date]:
    recurrence_type = payment.recurrence_type or RECURRENCE_MONTHLY
    interval = max(1, payment.recurrence_interval or 1)
    unit = _CALENDAR_STEPS.get(recurrence_type)
    if unit is None:
        if logger is not None:
            logger.warning(
                f"Payment {payment.id} has unknown recurrence type "
                f"{recurrence_type!r}; only the first occurrence is used"
            )
        return [start]

    dates: list[date] = []
    if payment.recurrence_times_per:
        if recurrence_type == RECURRENCE_DAILY:
            step = 1
        else:
            step = max(
                1,
                (RECURRENCE_PERIOD_DAYS[recurrence_type] * interval)
                // payment.recurrence_times_per,
            )
        current = start
        while current <= end:
            dates.append(current)
            current += timedelta(days=step)
        return dates

    # Steps are taken from the start date so month-end days do not drift.
    count = 0
    current = start
    while current <= end:
        dates.append(current)
        count += 1
        current = start + relativedelta(**{unit: count * interval})
    return dates


def generate_payment_occurrences(
    payment: Payment,
    target_date: date,
    logger: Logger | None = None,
) -> list[PaymentOccurrence]:
    """Materialize the occurrences of a payment up to ``target_date``.

    Recurring payments stop at the earlier of ``recurrence_end_date`` and
    ``target_date``. Weekday patterns apply to weekly rules; month-day and
    month patterns apply to monthly and yearly rules with an interval of 1.
    Malformed patterns fall back to interval stepping.

    Args:
        payment: Payment definition.
        target_date: Inclusive upper bound.
        logger: Optional logger for rule diagnostics.

    Returns:
        list[PaymentOccurrence]: Occurrences in ascending date order.
    """
    start = payment.payment_date
    if not isinstance(start, date) or start > target_date:
        return []
    if not payment.is_recurring:
        return [_occurrence(payment, start, is_recurring=False)]

    end = target_date
    if payment.recurrence_end_date is not None:
        end = min(payment.recurrence_end_date, target_date)

    recurrence_type = payment.recurrence_type or RECURRENCE_MONTHLY
    interval = payment.recurrence_interval or 1
    dates: list[date] | None = None

    if recurrence_type == RECURRENCE_WEEKLY:
        pattern = load_weekday_pattern(payment.recurrence_weekdays, logger)
        if pattern is not None:
            dates = _weekday_dates(pattern, start, end)
    elif recurrence_type == RECURRENCE_MONTHLY and interval == 1:
        monthdays = load_number_list(
            payment.recurrence_monthdays,
            "recurrence_monthdays",
            logger,
        )
        if monthdays is not None:
            dates = _monthday_dates(monthdays, start, end)
    elif recurrence_type == RECURRENCE_YEARLY and interval == 1:
        months = load_number_list(
            payment.recurrence_months,
            "recurrence_months",
            logger,
        )
        if months is not None:
            monthdays = load_number_list(
                payment.recurrence_monthdays,
                "recurrence_monthdays",
                logger,
            )
            dates = _month_dates(months, monthdays or [start.day], start, end)

    if dates is None:
        dates = _legacy_dates(payment, start, end, logger)
    return [_occurrence(payment, when) for when in sorted(dates)]


def expand_occurrences(
    payments: list[Payment],
    target_date: date,
    logger: Logger | None = None,
) -> list[PaymentOccurrence]:
    """Expand every payment and merge the results in date order.

    Occurrences on the same date keep the order of ``payments``.
    """
    occurrences: list[PaymentOccurrence] = []
    for payment in payments:
        occurrences.extend(
            generate_payment_occurrences(payment, target_date, logger)
        )
    return sorted(occurrences, key=lambda occ: occ.occurrence_date)


__all__ = ["generate_payment_occurrences", "expand_occurrences"]

"""Next-occurrence search for recurring payments.

Four rule shapes are supported, checked in this order: weekday sets per
cycle week, month-day sets, month sets and the legacy fixed interval. The
first shape whose pattern is present and well formed decides the result;
malformed pattern JSON falls through to the next shape. Month sets land on the
start day-of-month unless a month-day set is given as well.
"""

import calendar
from datetime import date, timedelta
import json
from logging import Logger

from src.domain.constants import (
    RECURRENCE_MONTHLY,
    RECURRENCE_PERIOD_DAYS,
    RECURRENCE_WEEKLY,
    RECURRENCE_YEARLY,
)
from src.domain.models.payments import Payment

WEEKDAY_SEARCH_DAYS = 730
MONTHDAY_SEARCH_MONTHS = 120
MONTH_SEARCH_YEARS = 50
LEGACY_SEARCH_STEPS = 1000


def js_weekday(value: date) -> int:
    """Return the weekday number with 0 for Sunday and 6 for Saturday."""
    return (value.weekday() + 1) % 7


def week_start(value: date) -> date:
    """Return the Sunday starting the week that contains ``value``."""
    return value - timedelta(days=js_weekday(value))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _load_json(raw: str | None, field: str, logger: Logger | None):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        if logger is not None:
            logger.debug(f"Ignoring malformed {field} pattern: {raw!r}")
        return None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_weekday_pattern(
    raw: str | None,
    logger: Logger | None = None,
) -> list[list[int]] | None:
    """Parse a JSON array of per-week weekday arrays.

    Returns:
        list[list[int]] | None: Pattern, or None when absent, empty or
        malformed.
    """
    pattern = _load_json(raw, "recurrence_weekdays", logger)
    if not isinstance(pattern, list) or not pattern:
        return None
    for week in pattern:
        if not isinstance(week, list) or not all(_is_int(d) for d in week):
            if logger is not None:
                logger.debug(f"Ignoring malformed recurrence_weekdays: {raw!r}")
            return None
    return pattern


def load_number_list(
    raw: str | None,
    field: str,
    logger: Logger | None = None,
) -> list[int] | None:
    """Parse a JSON array of integers such as month days or months."""
    values = _load_json(raw, field, logger)
    if not isinstance(values, list) or not values:
        return None
    if not all(_is_int(value) for value in values):
        if logger is not None:
            logger.debug(f"Ignoring malformed {field}: {raw!r}")
        return None
    return values


def legacy_step_days(payment: Payment) -> int | None:
    """Return the approximate day step of the legacy interval rule."""
    period = RECURRENCE_PERIOD_DAYS.get(
        payment.recurrence_type or RECURRENCE_MONTHLY
    )
    if period is None:
        return None
    if payment.recurrence_times_per:
        return max(1, period // payment.recurrence_times_per)
    return max(1, (payment.recurrence_interval or 1) * period)


def _past_end(candidate: date, end_date: date | None) -> bool:
    return end_date is not None and candidate > end_date


def _next_weekday_match(
    pattern: list[list[int]],
    start: date,
    after_date: date,
    end_date: date | None,
) -> date | None:
    anchor = week_start(start)
    cycle = len(pattern)
    for offset in range(1, WEEKDAY_SEARCH_DAYS + 1):
        candidate = after_date + timedelta(days=offset)
        if candidate < start:
            continue
        if _past_end(candidate, end_date):
            return None
        weeks_diff = (week_start(candidate) - anchor).days // 7
        position = ((weeks_diff % cycle) + cycle) % cycle
        if js_weekday(candidate) in pattern[position]:
            return candidate
    return None


def _next_monthday_match(
    monthdays: list[int],
    start: date,
    after_date: date,
    end_date: date | None,
) -> date | None:
    ordered = sorted(day for day in monthdays if day >= 1)
    year, month = after_date.year, after_date.month
    for _ in range(MONTHDAY_SEARCH_MONTHS):
        last_day = days_in_month(year, month)
        for day in ordered:
            candidate = date(year, month, min(day, last_day))
            if candidate <= after_date or candidate < start:
                continue
            if _past_end(candidate, end_date):
                return None
            return candidate
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return None


def _next_month_match(
    months: list[int],
    monthdays: list[int] | None,
    start: date,
    after_date: date,
    end_date: date | None,
) -> date | None:
    ordered = sorted(month for month in months if 1 <= month <= 12)
    days = [day for day in monthdays or [start.day] if day >= 1]
    for year in range(after_date.year, after_date.year + MONTH_SEARCH_YEARS):
        for month in ordered:
            last_day = days_in_month(year, month)
            for day in sorted({min(day, last_day) for day in days}):
                candidate = date(year, month, day)
                if candidate <= after_date or candidate < start:
                    continue
                if _past_end(candidate, end_date):
                    return None
                return candidate
    return None


def _next_legacy_match(
    payment: Payment,
    after_date: date,
    logger: Logger | None,
) -> date | None:
    step = legacy_step_days(payment)
    if step is None:
        if logger is not None:
            logger.warning(
                f"Payment {payment.id} has unknown recurrence type "
                f"{payment.recurrence_type!r}"
            )
        return None
    cursor = payment.payment_date
    for _ in range(LEGACY_SEARCH_STEPS):
        if cursor > after_date:
            break
        cursor += timedelta(days=step)
    else:
        return None
    if _past_end(cursor, payment.recurrence_end_date):
        return None
    return cursor


def get_next_recurring_date(
    payment: Payment,
    after_date: date,
    logger: Logger | None = None,
) -> date | None:
    """Return the earliest occurrence strictly after ``after_date``.

    Args:
        payment: Payment carrying the recurrence rule.
        after_date: Exclusive lower bound of the search.
        logger: Optional logger for malformed rule diagnostics.

    Returns:
        date | None: Next occurrence date, or None when the payment is not
        recurring, the rule is exhausted past ``recurrence_end_date`` or no
        match exists within the bounded search window.
    """
    if not payment.is_recurring:
        return None
    start = payment.payment_date
    end_date = payment.recurrence_end_date
    recurrence_type = payment.recurrence_type or RECURRENCE_MONTHLY

    if recurrence_type == RECURRENCE_WEEKLY:
        pattern = load_weekday_pattern(payment.recurrence_weekdays, logger)
        if pattern is not None:
            return _next_weekday_match(pattern, start, after_date, end_date)

    if recurrence_type == RECURRENCE_MONTHLY:
        monthdays = load_number_list(
            payment.recurrence_monthdays,
            "recurrence_monthdays",
            logger,
        )
        if monthdays is not None:
            return _next_monthday_match(monthdays, start, after_date, end_date)

    if recurrence_type == RECURRENCE_YEARLY:
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
            return _next_month_match(
                months,
                monthdays,
                start,
                after_date,
                end_date,
            )

    return _next_legacy_match(payment, after_date, logger)


__all__ = [
    "js_weekday",
    "week_start",
    "days_in_month",
    "load_weekday_pattern",
    "load_number_list",
    "legacy_step_days",
    "get_next_recurring_date",
]

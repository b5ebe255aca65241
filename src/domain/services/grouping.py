"""Year and month grouping of dated breakdown items."""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal
from typing import TypeVar

from src.domain.models.projections import MonthGroup, YearGroup
from src.utils.decimal_utils import coerce_decimal

T = TypeVar("T")


def group_by_period(
    items: Iterable[T],
    date_of: Callable[[T], date],
    amount_of: Callable[[T], Decimal],
    *,
    newest_first: bool = False,
) -> list[YearGroup]:
    """Group items by year, then by ``YYYY-MM`` month, with totals.

    Args:
        items: Items to group; order within a month is preserved.
        date_of: Extracts the date of an item.
        amount_of: Extracts the amount of an item.
        newest_first: Order years and months descending instead.

    Returns:
        list[YearGroup]: Years with their month groups.
    """
    months: dict[str, list[T]] = {}
    for item in items:
        when = date_of(item)
        months.setdefault(f"{when.year:04d}-{when.month:02d}", []).append(item)

    years: dict[int, list[MonthGroup]] = {}
    for key in sorted(months, reverse=newest_first):
        month_items = months[key]
        total = sum(
            (coerce_decimal(amount_of(item)) for item in month_items),
            Decimal("0"),
        )
        years.setdefault(int(key[:4]), []).append(
            MonthGroup(key=key, total=total, items=month_items)
        )

    return [
        YearGroup(
            year=year,
            total=sum((month.total for month in groups), Decimal("0")),
            months=groups,
        )
        for year, groups in years.items()
    ]


__all__ = ["group_by_period"]

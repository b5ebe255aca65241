"""Local date parsing and display helpers.

Dates are handled as plain ``datetime.date`` values so a date-only string
never shifts across midnight. The field order of a rendered date always comes
from the configured format code; the locale is only used for weekday and month
names.
"""

from datetime import date, datetime

from babel.dates import format_date as babel_format_date

from src.domain.constants import DEFAULT_DATE_FORMAT
from src.domain.models.preferences import UserPreferences

_PICKER_FORMATS = {
    "mdy": "%m/%d/%Y",
    "dmy": "%d/%m/%Y",
    "ymd": "%Y/%m/%d",
    "iso": "%Y-%m-%d",
}


def parse_local_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (optionally followed by ``T...``) into a date.

    Args:
        value: Date string, possibly a full ISO timestamp.

    Returns:
        date: Calendar date of the string's date part.

    Raises:
        ValueError: If the date part is not a valid ``YYYY-MM-DD`` value.
    """
    date_part = value.split("T")[0]
    year, month, day = (int(part) for part in date_part.split("-"))
    return date(year, month, day)


def get_local_date_string(value: date | None = None) -> str:
    """Return ``YYYY-MM-DD`` for the date, defaulting to today."""
    value = value or date.today()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_date_exact(value: date, date_format: str | None) -> str:
    """Render a date in one of the literal layouts.

    ``iso`` gives ``YYYY-MM-DD``, ``ymd`` gives ``YYYY/MM/DD``, ``dmy`` gives
    ``DD/MM/YYYY``; anything else falls back to ``MM/DD/YYYY``.
    """
    year = f"{value.year:04d}"
    month = f"{value.month:02d}"
    day = f"{value.day:02d}"
    if date_format == "iso":
        return f"{year}-{month}-{day}"
    if date_format == "ymd":
        return f"{year}/{month}/{day}"
    if date_format == "dmy":
        return f"{day}/{month}/{year}"
    return f"{month}/{day}/{year}"


def _resolve_format(
    date_format: str | None,
    preferences: UserPreferences | None,
) -> str:
    if date_format:
        return date_format
    if preferences is not None and preferences.date_format:
        return preferences.date_format
    return DEFAULT_DATE_FORMAT


def _coerce_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_local_date(value)


def format_date(
    value: str | date | None,
    date_format: str | None = None,
    preferences: UserPreferences | None = None,
) -> str:
    """Format a date or date string for display.

    Args:
        value: Date or ``YYYY-MM-DD`` string.
        date_format: Explicit format code, takes precedence.
        preferences: Fallback source of the format code.

    Returns:
        str: Formatted date, ``""`` for empty input, or the input unchanged
        when it cannot be parsed.
    """
    if not value:
        return ""
    try:
        parsed = _coerce_date(value)
    except ValueError:
        return str(value)
    return format_date_exact(parsed, _resolve_format(date_format, preferences))


def format_date_with_weekday(
    value: str | date,
    date_format: str | None = None,
    locale: str = "en",
) -> str:
    """Return the short localized weekday followed by the exact date."""
    parsed = _coerce_date(value)
    weekday = babel_format_date(parsed, "EEE", locale=locale)
    return f"{weekday} {format_date_exact(parsed, _resolve_format(date_format, None))}"


def format_month_year(value: str | date, locale: str = "en") -> str:
    """Return the localized long month name and the year."""
    parsed = _coerce_date(value)
    return babel_format_date(parsed, "LLLL y", locale=locale)


def get_days_diff(value: str | date, today: date | None = None) -> int:
    """Return the day difference to today; positive means in the future."""
    parsed = _coerce_date(value)
    return (parsed - (today or date.today())).days


def date_picker_format(date_format: str | None = DEFAULT_DATE_FORMAT) -> str:
    """Return the strftime pattern matching a date format code."""
    return _PICKER_FORMATS.get(date_format or "", _PICKER_FORMATS["mdy"])


__all__ = [
    "parse_local_date",
    "get_local_date_string",
    "format_date_exact",
    "format_date",
    "format_date_with_weekday",
    "format_month_year",
    "get_days_diff",
    "date_picker_format",
]

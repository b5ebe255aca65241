"""Tests for local date helpers."""

from datetime import date

import pytest

from src.domain.models.preferences import UserPreferences
from src.domain.services import dates


def test_parse_local_date_ignores_time_part() -> None:
    """Timestamps should keep the calendar date of their date part."""
    assert dates.parse_local_date("2025-03-09T23:59:59Z") == date(2025, 3, 9)
    assert dates.parse_local_date("2024-02-29") == date(2024, 2, 29)


def test_parse_local_date_rejects_invalid_values() -> None:
    """Impossible dates should raise ValueError."""
    with pytest.raises(ValueError):
        dates.parse_local_date("2025-02-30")


@pytest.mark.parametrize(
    "value",
    [date(2000, 1, 1), date(2024, 2, 29), date(2025, 12, 31), date(1999, 7, 4)],
)
def test_local_date_string_round_trip(value: date) -> None:
    """Formatting then parsing should return the same date."""
    assert dates.parse_local_date(dates.get_local_date_string(value)) == value


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("iso", "2025-01-05"),
        ("ymd", "2025/01/05"),
        ("dmy", "05/01/2025"),
        ("mdy", "01/05/2025"),
        ("unknown", "01/05/2025"),
    ],
)
def test_format_date_exact_layouts(code: str, expected: str) -> None:
    """Each format code should produce its literal layout."""
    assert dates.format_date_exact(date(2025, 1, 5), code) == expected


def test_format_date_resolves_format_sources() -> None:
    """Explicit format beats preferences, which beat the mdy default."""
    prefs = UserPreferences(date_format="dmy")

    assert dates.format_date("2025-01-05", "iso", prefs) == "2025-01-05"
    assert dates.format_date("2025-01-05", preferences=prefs) == "05/01/2025"
    assert dates.format_date(date(2025, 1, 5)) == "01/05/2025"


def test_format_date_handles_empty_and_invalid_values() -> None:
    """Empty input gives an empty string; garbage is returned unchanged."""
    assert dates.format_date("") == ""
    assert dates.format_date(None) == ""
    assert dates.format_date("not-a-date") == "not-a-date"


def test_format_date_with_weekday_uses_locale_names_only() -> None:
    """Weekday names follow the locale while field order follows the code."""
    assert (
        dates.format_date_with_weekday("2025-01-06", "dmy", locale="en")
        == "Mon 06/01/2025"
    )


def test_format_month_year() -> None:
    """Month names should be the long localized form."""
    assert dates.format_month_year(date(2025, 1, 15), locale="en") == "January 2025"


def test_get_days_diff_is_positive_for_future_dates() -> None:
    """Future dates give positive differences, past dates negative."""
    today = date(2025, 1, 10)

    assert dates.get_days_diff("2025-01-15", today=today) == 5
    assert dates.get_days_diff(date(2025, 1, 1), today=today) == -9
    assert dates.get_days_diff(today, today=today) == 0


def test_date_picker_format_defaults_to_mdy() -> None:
    """Unknown codes should fall back to the mdy pattern."""
    assert dates.date_picker_format("dmy") == "%d/%m/%Y"
    assert dates.date_picker_format("iso") == "%Y-%m-%d"
    assert dates.date_picker_format("bogus") == "%m/%d/%Y"
    assert dates.date_picker_format(None) == "%m/%d/%Y"

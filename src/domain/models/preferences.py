"""User display preferences passed explicitly to formatters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserPreferences:
    """Date and currency display preferences.

    Attributes:
        date_format: One of ``mdy``, ``dmy``, ``ymd`` or ``iso``.
        decimal_separator: ``.`` or ``,``.
        currency_symbol: Symbol rendered next to amounts.
        currency_symbol_position: ``before`` or ``after`` the number.
        locale: Locale used for weekday and month names only.
    """

    date_format: str = "mdy"
    decimal_separator: str = "."
    currency_symbol: str = "$"
    currency_symbol_position: str = "before"
    locale: str = "en"


__all__ = ["UserPreferences"]

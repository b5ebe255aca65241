"""Currency and number formatting driven by user preferences."""

from decimal import ROUND_HALF_UP, Decimal

from src.domain.models.preferences import UserPreferences
from src.utils.decimal_utils import coerce_decimal


def format_number(
    value,
    preferences: UserPreferences,
    decimals: int = 2,
) -> str:
    """Format the absolute value with grouping and the preferred separator.

    With a ``,`` decimal separator the thousands marker is a space; otherwise
    the thousands marker is ``,`` and the decimal marker ``.``.

    Args:
        value: Numeric value; the sign is dropped.
        preferences: Display preferences.
        decimals: Number of fraction digits.

    Returns:
        str: Formatted magnitude.
    """
    exponent = Decimal(1).scaleb(-decimals)
    magnitude = abs(coerce_decimal(value)).quantize(
        exponent,
        rounding=ROUND_HALF_UP,
    )
    grouped = f"{magnitude:,.{decimals}f}"
    if preferences.decimal_separator == ",":
        return grouped.replace(",", " ").replace(".", ",")
    return grouped


def format_currency(amount, preferences: UserPreferences) -> str:
    """Attach the currency symbol; negatives get a leading ``-``."""
    amount = coerce_decimal(amount)
    number = format_number(amount, preferences, 2)
    symbol = preferences.currency_symbol or "$"
    if preferences.currency_symbol_position == "after":
        result = f"{number} {symbol}"
    else:
        result = f"{symbol}{number}"
    return f"-{result}" if amount < 0 else result


def format_signed_currency(amount, preferences: UserPreferences) -> str:
    """Prefix ``+`` for positive and ``-`` for negative amounts."""
    amount = coerce_decimal(amount)
    formatted = format_currency(abs(amount), preferences)
    if amount > 0:
        return f"+{formatted}"
    if amount < 0:
        return f"-{formatted}"
    return formatted


def format_currency_abs(amount, preferences: UserPreferences) -> str:
    """Format the magnitude only, never emitting a sign."""
    return format_currency(abs(coerce_decimal(amount)), preferences)


__all__ = [
    "format_number",
    "format_currency",
    "format_signed_currency",
    "format_currency_abs",
]

"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or callers.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_cents(value: Decimal) -> Decimal:
    """Round an amount to cents, half away from zero."""
    return coerce_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


__all__ = ["CENTS", "coerce_decimal", "quantize_cents"]

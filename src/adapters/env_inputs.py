"""Parsing helpers for command-line inputs read from the environment."""

from datetime import date

from src.domain.services.dates import parse_local_date

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_date(value: str | None, logger) -> date | None:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Args:
        value: Date string.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when missing or invalid.
    """
    if not value:
        return None
    try:
        return parse_local_date(value.strip())
    except ValueError:
        logger.warning(f"Invalid date '{value}'. Expected format YYYY-MM-DD.")
        return None


def parse_int(value: str | None, name: str, logger) -> int | None:
    """Parse an integer identifier, warning when it is not a number."""
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Invalid {name} '{value}'. Expected an integer.")
        return None


def parse_bool(value: str | None) -> bool:
    return bool(value) and value.strip().lower() in _TRUE_VALUES


__all__ = ["parse_date", "parse_int", "parse_bool"]

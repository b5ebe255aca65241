"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
import os

import dotenv

from src.domain.constants import (
    DATE_FORMATS,
    DECIMAL_SEPARATORS,
    SYMBOL_POSITIONS,
)
from src.domain.models.preferences import UserPreferences
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerSettings:
    """Display settings for the ledger adapters.

    Attributes:
        preferences: Date and currency preferences built from the environment.
    """

    preferences: UserPreferences = field(default_factory=UserPreferences)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Unknown values fall back to the defaults with a logged warning.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = UserPreferences()
        date_format = cls._choice(
            "LEDGER_DATE_FORMAT",
            DATE_FORMATS,
            defaults.date_format,
            logger,
        )
        separator = cls._choice(
            "LEDGER_DECIMAL_SEPARATOR",
            DECIMAL_SEPARATORS,
            defaults.decimal_separator,
            logger,
        )
        position = cls._choice(
            "LEDGER_CURRENCY_SYMBOL_POSITION",
            SYMBOL_POSITIONS,
            defaults.currency_symbol_position,
            logger,
        )
        symbol = os.getenv("LEDGER_CURRENCY_SYMBOL") or defaults.currency_symbol
        locale = (os.getenv("LEDGER_LOCALE") or defaults.locale).strip()
        return cls(
            preferences=UserPreferences(
                date_format=date_format,
                decimal_separator=separator,
                currency_symbol=symbol,
                currency_symbol_position=position,
                locale=locale,
            )
        )

    @staticmethod
    def _choice(name: str, allowed: tuple[str, ...], default: str, logger) -> str:
        """Read an enumerated environment variable.

        Args:
            name: Environment variable name.
            allowed: Accepted values.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            str: Accepted value or the default.
        """
        raw = os.getenv(name)
        if not raw:
            return default
        value = raw.strip().lower()
        if value not in allowed:
            logger.warning(
                f"Invalid {name}={raw!r}; using default {default!r}"
            )
            return default
        return value


__all__ = ["LedgerSettings"]

"""Shared fixtures for the CLI adapter tests."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models.participants import Participant
from src.domain.models.payments import Contribution, Payment
from src.domain.models.preferences import UserPreferences
from src.infrastructure.settings import LedgerSettings

_ENV = (
    "LEDGER_PROJECT_ID",
    "LEDGER_TARGET_DATE",
    "LEDGER_INCLUDE_DRAFTS",
    "LEDGER_SETTLEMENT_MODE",
    "LEDGER_RANGE_START",
    "LEDGER_RANGE_END",
    "LEDGER_FOCUS_PARTICIPANT_ID",
)


class _IsoSettings:
    @staticmethod
    def from_env() -> LedgerSettings:
        return LedgerSettings(UserPreferences(date_format="iso"))


@pytest.fixture()
def ledger_repository() -> MagicMock:
    repository = MagicMock()
    repository.fetch_participants.return_value = [
        Participant(1, "Alice"),
        Participant(2, "Bob"),
        Participant(9, "Pot", account_type="pool"),
    ]
    repository.fetch_payments.return_value = [
        Payment(1, "Deposit", Decimal("50"), date(2025, 1, 2), 1, 9),
        Payment(
            2,
            "Dinner",
            Decimal("40"),
            date(2025, 1, 10),
            payer_id=1,
            contributions=(
                Contribution(1, Decimal("20")),
                Contribution(2, Decimal("20")),
            ),
        ),
    ]
    return repository


@pytest.fixture()
def patch_cli(monkeypatch, ledger_repository):
    """Return a function wiring a CLI module to fakes; yields the app logger."""

    def _patch(module) -> MagicMock:
        for name in _ENV:
            monkeypatch.delenv(name, raising=False)
        fake_logger = MagicMock()
        monkeypatch.setattr(module, "get_app_logger", lambda: fake_logger)
        monkeypatch.setattr(module, "get_usage_logger", MagicMock)
        monkeypatch.setattr(module, "LedgerSettings", _IsoSettings)
        monkeypatch.setattr(
            module,
            "build_ledger_repository",
            lambda: ledger_repository,
        )
        return fake_logger

    return _patch

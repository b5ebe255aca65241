"""Tests for environment input parsing."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.adapters.env_inputs import parse_bool, parse_date, parse_int


def test_parse_date_accepts_iso_and_warns_on_garbage() -> None:
    logger = MagicMock()

    assert parse_date(" 2025-03-04 ", logger) == date(2025, 3, 4)
    assert parse_date("", logger) is None
    assert parse_date("04/03/2025", logger) is None
    logger.warning.assert_called_once()


def test_parse_int() -> None:
    logger = MagicMock()

    assert parse_int("12", "LEDGER_PROJECT_ID", logger) == 12
    assert parse_int(None, "LEDGER_PROJECT_ID", logger) is None
    assert parse_int("twelve", "LEDGER_PROJECT_ID", logger) is None
    logger.warning.assert_called_once()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" on ", True), ("0", False), ("", False), (None, False)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw) is expected

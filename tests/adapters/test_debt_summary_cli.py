"""Tests for the debt_summary_cli adapter."""

import pytest

from src.adapters import debt_summary_cli
from src.application.use_cases.overview_session import OverviewLoadError


def test_main_prints_balances_settlements_and_pools(
    monkeypatch, capsys, patch_cli, ledger_repository
):
    """The CLI should print every section of the summary."""
    patch_cli(debt_summary_cli)
    monkeypatch.setenv("LEDGER_PROJECT_ID", "4")
    monkeypatch.setenv("LEDGER_TARGET_DATE", "2025-01-31")

    debt_summary_cli.main()

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Balances as of 2025-01-31",
        "  Bob: -$20.00",
        "  Alice: +$20.00",
        "Settlements (minimal)",
        "  Bob -> Alice: $20.00",
        "Pool Pot: $50.00 / expected $0.00",
        "  Alice: +$50.00",
    ]
    ledger_repository.fetch_participants.assert_called_once_with(4)
    ledger_repository.fetch_payments.assert_called_once_with(4, False)


def test_main_uses_direct_mode_and_drafts(
    monkeypatch, capsys, patch_cli, ledger_repository
):
    patch_cli(debt_summary_cli)
    monkeypatch.setenv("LEDGER_PROJECT_ID", "4")
    monkeypatch.setenv("LEDGER_TARGET_DATE", "2025-01-05")
    monkeypatch.setenv("LEDGER_SETTLEMENT_MODE", "Direct")
    monkeypatch.setenv("LEDGER_INCLUDE_DRAFTS", "yes")

    debt_summary_cli.main()

    out = capsys.readouterr().out
    assert "Settlements (direct)" in out
    assert "  Nothing to settle." in out
    ledger_repository.fetch_payments.assert_called_once_with(4, True)


def test_main_warns_on_invalid_mode(monkeypatch, capsys, patch_cli):
    fake_logger = patch_cli(debt_summary_cli)
    monkeypatch.setenv("LEDGER_PROJECT_ID", "4")
    monkeypatch.setenv("LEDGER_TARGET_DATE", "2025-01-31")
    monkeypatch.setenv("LEDGER_SETTLEMENT_MODE", "cheapest")

    debt_summary_cli.main()

    assert "Settlements (minimal)" in capsys.readouterr().out
    fake_logger.warning.assert_called_once()


def test_main_requires_project_id(capsys, patch_cli, ledger_repository):
    fake_logger = patch_cli(debt_summary_cli)

    debt_summary_cli.main()

    assert capsys.readouterr().out == ""
    fake_logger.warning.assert_called_once()
    ledger_repository.fetch_payments.assert_not_called()


def test_main_prints_nothing_when_load_fails(
    monkeypatch, capsys, patch_cli, ledger_repository
):
    """A failed fetch stops the CLI before any section is printed."""
    fake_logger = patch_cli(debt_summary_cli)
    monkeypatch.setenv("LEDGER_PROJECT_ID", "4")
    ledger_repository.fetch_payments.side_effect = RuntimeError("db down")

    with pytest.raises(OverviewLoadError):
        debt_summary_cli.main()

    assert capsys.readouterr().out == ""
    fake_logger.error.assert_called_once()

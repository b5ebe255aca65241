"""Tests for the composition root."""

from datetime import date
from unittest.mock import MagicMock

from src.application.use_cases.overview_session import OverviewSession
from src.infrastructure import container as container_module
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository


def test_build_ledger_repository_wires_db_port(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    db_port = MagicMock()

    repository = container_module.build_ledger_repository(db_port)

    assert isinstance(repository, SqlAlchemyLedgerRepository)
    assert repository._db_port is db_port


def test_build_ledger_repository_defaults_to_sqlalchemy_adapter(
    monkeypatch,
) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)

    repository = container_module.build_ledger_repository()

    assert isinstance(repository._db_port, SqlAlchemyDatabaseEngineAdapter)


def test_build_overview_session_passes_inputs(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    repository = MagicMock()

    session = container_module.build_overview_session(
        5,
        repository,
        today=date(2025, 1, 1),
        settlement_mode="direct",
    )

    assert isinstance(session, OverviewSession)
    assert session.project_id == 5
    assert session.target_date == date(2025, 1, 1)
    assert session.settlement_mode == "direct"

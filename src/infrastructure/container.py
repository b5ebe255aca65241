"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.overview_session import (
    LoadOverviewUseCase,
    OverviewSession,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the SQLAlchemy ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db, logger=get_app_logger())


def build_settings() -> LedgerSettings:
    """Return display settings sourced from the environment."""
    return LedgerSettings.from_env()


def build_overview_session(
    project_id: int,
    repository: LedgerRepositoryPort | None = None,
    **inputs,
) -> OverviewSession:
    """Return an overview session wired to the ledger repository.

    Args:
        project_id: Project identifier.
        repository: Optional repository, defaults to the SQLAlchemy one.
        **inputs: Initial session inputs such as ``target_date``.
    """
    logger = get_app_logger()
    resolved_repo = repository or build_ledger_repository()
    loader = LoadOverviewUseCase(resolved_repo, logger=logger)
    return OverviewSession(project_id, loader, logger=logger, **inputs)


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_settings",
    "build_overview_session",
]

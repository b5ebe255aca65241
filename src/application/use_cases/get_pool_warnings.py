"""Use case to project pool balances and report early warnings."""

from datetime import date

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models.projections import PoolWarning
from src.domain.services.warnings import detect_pool_warnings
from src.infrastructure.logging.logger import get_app_logger


class GetPoolWarningsUseCase:
    """Report pools and members projected to drop below their minimums."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        project_id: int,
        today: date | None = None,
        include_drafts: bool = False,
    ) -> list[PoolWarning]:
        """Return warnings within each pool's configured horizons."""
        participants = self._repository.fetch_participants(project_id)
        payments = self._repository.fetch_payments(project_id, include_drafts)
        return detect_pool_warnings(
            participants,
            payments,
            today or date.today(),
            logger=self._logger,
        )


__all__ = ["GetPoolWarningsUseCase"]

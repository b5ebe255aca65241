"""Use case to list the next occurrence of recurring payments."""

from datetime import date

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models.projections import UpcomingPayment
from src.domain.services.upcoming import upcoming_occurrences
from src.infrastructure.logging.logger import get_app_logger


class GetUpcomingPaymentsUseCase:
    """Find the next date of each recurring payment in a project."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        project_id: int,
        after_date: date | None = None,
        include_drafts: bool = False,
    ) -> list[UpcomingPayment]:
        """Return upcoming occurrences strictly after ``after_date``."""
        payments = self._repository.fetch_payments(project_id, include_drafts)
        return upcoming_occurrences(
            payments,
            after_date or date.today(),
            logger=self._logger,
        )


__all__ = ["GetUpcomingPaymentsUseCase"]

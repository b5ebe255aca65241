"""Use case to compute a project's debt summary at a date."""

from datetime import date

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models.debts import DebtSummary
from src.domain.policies.integrity import check_ledger_integrity
from src.domain.services.ledger import compute_debt_summary
from src.infrastructure.logging.logger import get_app_logger


class GetDebtSummaryUseCase:
    """Compute balances, settlements and pool ownership for a project."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing participants and payments.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        project_id: int,
        target_date: date | None = None,
        include_drafts: bool = False,
    ) -> DebtSummary:
        """Return the debt summary as of ``target_date``.

        Args:
            project_id: Project identifier.
            target_date: Inclusive cutoff, defaults to today.
            include_drafts: Whether draft payments are replayed.

        Returns:
            DebtSummary: Aggregated ledger state.
        """
        target_date = target_date or date.today()
        participants = self._repository.fetch_participants(project_id)
        payments = self._repository.fetch_payments(project_id, include_drafts)
        check_ledger_integrity(participants, payments, self._logger)

        summary = compute_debt_summary(
            participants,
            payments,
            target_date,
            logger=self._logger,
        )
        self._logger.info(
            f"Debt summary computed for project={project_id} at {target_date}: "
            f"occurrences={len(summary.occurrences)}, "
            f"settlements={len(summary.settlements)}"
        )
        return summary


__all__ = ["GetDebtSummaryUseCase"]

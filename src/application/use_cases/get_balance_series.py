"""Use case to build balance time series over a date range."""

from datetime import date

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models.projections import LedgerSeries
from src.domain.services.projections import build_ledger_series
from src.infrastructure.logging.logger import get_app_logger


class GetBalanceSeriesUseCase:
    """Snapshot a project's ledger at every relevant date of a range."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        project_id: int,
        start_date: date,
        end_date: date,
        focus_participant_id: int | None = None,
        include_drafts: bool = False,
        today: date | None = None,
    ) -> LedgerSeries:
        """Return the ledger series for ``[start_date, end_date]``.

        Args:
            project_id: Project identifier.
            start_date: First date of the range.
            end_date: Last date of the range.
            focus_participant_id: Optional participant for pairwise series.
            include_drafts: Whether draft payments are replayed.
            today: Extra checkpoint inside the range, defaults to today.

        Returns:
            LedgerSeries: Snapshots in ascending date order.
        """
        participants = self._repository.fetch_participants(project_id)
        payments = self._repository.fetch_payments(project_id, include_drafts)
        series = build_ledger_series(
            participants,
            payments,
            start_date,
            end_date,
            today=today or date.today(),
            focus_participant_id=focus_participant_id,
            logger=self._logger,
        )
        self._logger.info(
            f"Balance series built for project={project_id} "
            f"from {start_date} to {end_date}: {len(series.snapshots)} dates"
        )
        return series


__all__ = ["GetBalanceSeriesUseCase"]

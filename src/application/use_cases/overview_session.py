"""Project overview state with explicit inputs and derived values.

``OverviewSession`` keeps the inputs selected by a caller (target date, date
range, focus participant, drafts toggle, settlement mode) and recomputes only
the derived values whose inputs changed. Loads are tagged with a generation
number so a slow, older load never overwrites a newer one.
"""

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import date

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import SETTLEMENT_MODE_MINIMAL, SETTLEMENT_MODES
from src.domain.models.debts import Debt, DebtSummary
from src.domain.models.participants import Participant
from src.domain.models.payments import Payment
from src.domain.models.projections import LedgerSeries, PoolWarning
from src.domain.services.ledger import compute_debt_summary
from src.domain.services.projections import build_ledger_series
from src.domain.services.settlements import select_settlements
from src.domain.services.warnings import detect_pool_warnings
from src.infrastructure.logging.logger import get_app_logger


class OverviewLoadError(RuntimeError):
    """Raised when the overview data cannot be loaded completely."""


@dataclass(frozen=True)
class OverviewData:
    """Participants and payments fetched together for one project."""

    participants: list[Participant]
    payments: list[Payment]


class LoadOverviewUseCase:
    """Fetch participants and payments as one unit."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, project_id: int, include_drafts: bool = False) -> OverviewData:
        """Return both datasets or raise.

        Raises:
            OverviewLoadError: If either fetch fails; no partial data is
                returned.
        """
        try:
            participants = self._repository.fetch_participants(project_id)
            payments = self._repository.fetch_payments(project_id, include_drafts)
        except Exception as exc:
            self._logger.error(
                f"Failed to load overview for project={project_id}: {exc}"
            )
            raise OverviewLoadError(
                f"Could not load overview for project {project_id}"
            ) from exc
        return OverviewData(participants=participants, payments=payments)


class ExpandedRows:
    """Expanded/collapsed state of table rows keyed by tuples.

    Keys are composite tuples such as ``("pairwise", 1, 2)`` or
    ``("year", 2025)``.
    """

    def __init__(self) -> None:
        self._keys: set[tuple[Hashable, ...]] = set()

    def toggle(self, key: tuple[Hashable, ...]) -> bool:
        """Flip a row and return whether it is now expanded."""
        if key in self._keys:
            self._keys.discard(key)
            return False
        self._keys.add(key)
        return True

    def is_expanded(self, key: tuple[Hashable, ...]) -> bool:
        return key in self._keys

    def clear(self) -> None:
        self._keys.clear()


# Derived value -> inputs it depends on.
_DEPENDENCIES = {
    "summary": {"target_date"},
    "series": {"range_start", "range_end", "focus_participant_id", "today"},
    "warnings": {"today"},
}
_INPUTS = {
    "target_date",
    "range_start",
    "range_end",
    "focus_participant_id",
    "include_drafts",
    "settlement_mode",
    "today",
}


class OverviewSession:
    """Explicit state for a project overview."""

    def __init__(
        self,
        project_id: int,
        loader: LoadOverviewUseCase,
        *,
        today: date | None = None,
        target_date: date | None = None,
        range_start: date | None = None,
        range_end: date | None = None,
        focus_participant_id: int | None = None,
        include_drafts: bool = False,
        settlement_mode: str = SETTLEMENT_MODE_MINIMAL,
        logger=None,
    ) -> None:
        self.project_id = project_id
        self._loader = loader
        self._logger = logger or get_app_logger()
        self._generation = 0

        self.today = today or date.today()
        self.target_date = target_date or self.today
        self.range_start = range_start
        self.range_end = range_end
        self.focus_participant_id = focus_participant_id
        self.include_drafts = include_drafts
        self.settlement_mode = settlement_mode
        self._validate_mode(settlement_mode)

        self.participants: list[Participant] = []
        self.payments: list[Payment] = []
        self.summary: DebtSummary | None = None
        self.series: LedgerSeries | None = None
        self.warnings: list[PoolWarning] = []
        self.expanded = ExpandedRows()

    @staticmethod
    def _validate_mode(mode: str) -> None:
        if mode not in SETTLEMENT_MODES:
            raise ValueError(f"Unknown settlement mode: {mode}")

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loaded(self) -> bool:
        return self.summary is not None

    @property
    def settlements(self) -> list[Debt]:
        """Return the settlement list for the selected mode."""
        if self.summary is None:
            return []
        return select_settlements(self.summary, self.settlement_mode)

    def begin_load(self) -> int:
        """Start a load and return its generation number."""
        self._generation += 1
        return self._generation

    def apply_load(
        self,
        generation: int,
        participants: list[Participant],
        payments: list[Payment],
    ) -> bool:
        """Apply loaded data unless a newer load has started since.

        Returns:
            bool: True when the data was applied, False when it was stale.
        """
        if generation != self._generation:
            self._logger.debug(
                f"Discarding stale overview load generation={generation} "
                f"(current={self._generation})"
            )
            return False
        self.participants = list(participants)
        self.payments = list(payments)
        self._recompute(set(_DEPENDENCIES))
        return True

    def load(self) -> bool:
        """Fetch and apply the project data.

        Raises:
            OverviewLoadError: If the fetch fails; state is left unchanged.
        """
        generation = self.begin_load()
        data = self._loader.execute(self.project_id, self.include_drafts)
        return self.apply_load(generation, data.participants, data.payments)

    def update(self, **changes) -> set[str]:
        """Change inputs and recompute what depends on them.

        Returns:
            set[str]: Names of the derived values that were recomputed.

        Inputs are left untouched when validation or the reload fails.

        Raises:
            ValueError: On unknown inputs, an unknown settlement mode or a
                range start after the range end.
            OverviewLoadError: If toggling drafts triggers a failed reload.
        """
        unknown = set(changes) - _INPUTS
        if unknown:
            raise ValueError(f"Unknown overview inputs: {sorted(unknown)}")
        if "settlement_mode" in changes:
            self._validate_mode(changes["settlement_mode"])
        range_start = changes.get("range_start", self.range_start)
        range_end = changes.get("range_end", self.range_end)
        if (
            range_start is not None
            and range_end is not None
            and range_start > range_end
        ):
            raise ValueError(
                f"Range start {range_start} is after range end {range_end}"
            )

        changed = {
            name
            for name, value in changes.items()
            if getattr(self, name) != value
        }
        if not changed:
            return set()
        previous = {name: getattr(self, name) for name in changed}
        for name in changed:
            setattr(self, name, changes[name])

        if "include_drafts" in changed:
            try:
                self.load()
            except OverviewLoadError:
                for name, value in previous.items():
                    setattr(self, name, value)
                raise
            return set(_DEPENDENCIES)

        stale = {
            derived
            for derived, inputs in _DEPENDENCIES.items()
            if inputs & changed
        }
        if self.participants or self.payments:
            self._recompute(stale)
        return stale

    def _recompute(self, derived: set[str]) -> None:
        if "summary" in derived:
            self.summary = compute_debt_summary(
                self.participants,
                self.payments,
                self.target_date,
                logger=self._logger,
            )
        if "series" in derived:
            self.series = None
            if self.range_start is not None and self.range_end is not None:
                self.series = build_ledger_series(
                    self.participants,
                    self.payments,
                    self.range_start,
                    self.range_end,
                    today=self.today,
                    focus_participant_id=self.focus_participant_id,
                    logger=self._logger,
                )
        if "warnings" in derived:
            self.warnings = detect_pool_warnings(
                self.participants,
                self.payments,
                self.today,
                logger=self._logger,
            )


__all__ = [
    "OverviewLoadError",
    "OverviewData",
    "LoadOverviewUseCase",
    "ExpandedRows",
    "OverviewSession",
]

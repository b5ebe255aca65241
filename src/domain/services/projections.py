"""Time series of ledger state over a date range."""

from collections.abc import Iterator
from datetime import date
from logging import Logger

from src.domain.models.participants import Participant
from src.domain.models.payments import Payment, PaymentOccurrence
from src.domain.models.projections import LedgerSeries
from src.domain.services.ledger import LedgerReplay
from src.domain.services.occurrences import expand_occurrences


def sweep(
    replay: LedgerReplay,
    occurrences: list[PaymentOccurrence],
    checkpoints: list[date],
) -> Iterator[date]:
    """Advance one cursor through the occurrences, yielding at checkpoints.

    When a checkpoint is yielded every occurrence dated on or before it has
    been applied to ``replay``. Checkpoints must be ascending.
    """
    index = 0
    total = len(occurrences)
    for checkpoint in checkpoints:
        while index < total and occurrences[index].occurrence_date <= checkpoint:
            replay.apply(occurrences[index])
            index += 1
        yield checkpoint


def series_dates(
    occurrences: list[PaymentOccurrence],
    start_date: date,
    end_date: date,
    today: date | None = None,
) -> list[date]:
    """Return the distinct snapshot dates within ``[start_date, end_date]``."""
    candidates = {start_date, end_date}
    if today is not None:
        candidates.add(today)
    candidates.update(occ.occurrence_date for occ in occurrences)
    return sorted(d for d in candidates if start_date <= d <= end_date)


def build_ledger_series(
    participants: list[Participant],
    payments: list[Payment],
    start_date: date,
    end_date: date,
    *,
    today: date | None = None,
    focus_participant_id: int | None = None,
    logger: Logger | None = None,
) -> LedgerSeries:
    """Snapshot the ledger at every relevant date of a closed range.

    Occurrences before ``start_date`` are folded into the first snapshot.
    With ``focus_participant_id`` each snapshot also carries the focus
    participant's net with every other participant.

    Raises:
        ValueError: If ``start_date`` is after ``end_date``.
    """
    if start_date > end_date:
        raise ValueError(
            f"Range start {start_date} is after range end {end_date}"
        )
    occurrences = expand_occurrences(payments, end_date, logger)
    replay = LedgerReplay(
        participants,
        payments,
        logger,
        focus_participant_id=focus_participant_id,
    )
    checkpoints = series_dates(occurrences, start_date, end_date, today)
    snapshots = [
        replay.snapshot(checkpoint)
        for checkpoint in sweep(replay, occurrences, checkpoints)
    ]
    return LedgerSeries(
        start_date=start_date,
        end_date=end_date,
        snapshots=snapshots,
        focus_participant_id=focus_participant_id,
    )


__all__ = ["sweep", "series_dates", "build_ledger_series"]

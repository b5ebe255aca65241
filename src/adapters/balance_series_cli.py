"""CLI adapter printing balance time series over a date range.

Inputs are read from the environment: ``LEDGER_PROJECT_ID`` (required),
``LEDGER_RANGE_START`` (defaults to the first day of the end month),
``LEDGER_RANGE_END`` (defaults to today), ``LEDGER_FOCUS_PARTICIPANT_ID`` and
``LEDGER_INCLUDE_DRAFTS``.
"""

from datetime import date
import os

from src.adapters.env_inputs import parse_bool, parse_date, parse_int
from src.application.use_cases.get_balance_series import (
    GetBalanceSeriesUseCase,
)
from src.domain.services.currency import format_signed_currency
from src.domain.services.dates import format_date
from src.infrastructure.container import build_ledger_repository
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import LedgerSettings


def main() -> None:
    """Print one line per snapshot date with every balance."""
    logger = get_app_logger()
    project_id = parse_int(
        os.getenv("LEDGER_PROJECT_ID"),
        "LEDGER_PROJECT_ID",
        logger,
    )
    if project_id is None:
        logger.warning("LEDGER_PROJECT_ID is required to print a series.")
        return

    prefs = LedgerSettings.from_env().preferences
    end_date = parse_date(os.getenv("LEDGER_RANGE_END"), logger) or date.today()
    start_date = (
        parse_date(os.getenv("LEDGER_RANGE_START"), logger)
        or end_date.replace(day=1)
    )
    if start_date > end_date:
        logger.warning(
            f"LEDGER_RANGE_START {start_date} is after LEDGER_RANGE_END "
            f"{end_date}."
        )
        return
    focus_id = parse_int(
        os.getenv("LEDGER_FOCUS_PARTICIPANT_ID"),
        "LEDGER_FOCUS_PARTICIPANT_ID",
        logger,
    )
    include_drafts = parse_bool(os.getenv("LEDGER_INCLUDE_DRAFTS"))
    get_usage_logger().info(
        f"balance_series_cli project={project_id} "
        f"range={start_date}..{end_date} focus={focus_id}"
    )

    repository = build_ledger_repository()
    participants = {
        participant.id: participant.name
        for participant in repository.fetch_participants(project_id)
    }
    series = GetBalanceSeriesUseCase(repository, logger=logger).execute(
        project_id,
        start_date,
        end_date,
        focus_participant_id=focus_id,
        include_drafts=include_drafts,
    )

    for snapshot in series.snapshots:
        values = snapshot.pairwise if focus_id is not None else snapshot.balances
        cells = [
            f"{participants.get(pid, pid)}={format_signed_currency(amount, prefs)}"
            for pid, amount in sorted(values.items())
        ]
        print(f"{format_date(snapshot.date, preferences=prefs)}  " + "  ".join(cells))


if __name__ == "__main__":  # pragma: no cover
    main()

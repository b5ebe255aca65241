"""CLI adapter printing a project's balances, settlements and pools.

Inputs are read from the environment: ``LEDGER_PROJECT_ID`` (required),
``LEDGER_TARGET_DATE`` (defaults to today), ``LEDGER_INCLUDE_DRAFTS`` and
``LEDGER_SETTLEMENT_MODE`` (``minimal`` or ``direct``). Participants and
payments are fetched once and every section is derived from that snapshot.
"""

from datetime import date
import os

from src.adapters.env_inputs import parse_bool, parse_date, parse_int
from src.application.use_cases.overview_session import LoadOverviewUseCase
from src.domain.constants import SETTLEMENT_MODE_MINIMAL, SETTLEMENT_MODES
from src.domain.policies.integrity import check_ledger_integrity
from src.domain.services.currency import (
    format_currency,
    format_currency_abs,
    format_signed_currency,
)
from src.domain.services.dates import format_date
from src.domain.services.ledger import compute_debt_summary
from src.domain.services.settlements import select_settlements
from src.domain.services.upcoming import upcoming_occurrences
from src.domain.services.warnings import detect_pool_warnings
from src.infrastructure.container import build_ledger_repository
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import LedgerSettings


def _settlement_mode(value: str | None, logger) -> str:
    mode = (value or SETTLEMENT_MODE_MINIMAL).strip().lower()
    if mode not in SETTLEMENT_MODES:
        logger.warning(
            f"Invalid LEDGER_SETTLEMENT_MODE '{value}'. Using minimal."
        )
        return SETTLEMENT_MODE_MINIMAL
    return mode


def main() -> None:
    """Print the debt summary of the configured project."""
    logger = get_app_logger()
    project_id = parse_int(
        os.getenv("LEDGER_PROJECT_ID"),
        "LEDGER_PROJECT_ID",
        logger,
    )
    if project_id is None:
        logger.warning("LEDGER_PROJECT_ID is required to print a summary.")
        return

    prefs = LedgerSettings.from_env().preferences
    today = date.today()
    target_date = parse_date(os.getenv("LEDGER_TARGET_DATE"), logger) or today
    include_drafts = parse_bool(os.getenv("LEDGER_INCLUDE_DRAFTS"))
    mode = _settlement_mode(os.getenv("LEDGER_SETTLEMENT_MODE"), logger)
    get_usage_logger().info(
        f"debt_summary_cli project={project_id} date={target_date} "
        f"drafts={include_drafts} mode={mode}"
    )

    data = LoadOverviewUseCase(
        build_ledger_repository(),
        logger=logger,
    ).execute(project_id, include_drafts)
    check_ledger_integrity(data.participants, data.payments, logger)
    summary = compute_debt_summary(
        data.participants,
        data.payments,
        target_date,
        logger=logger,
    )
    warnings = detect_pool_warnings(
        data.participants,
        data.payments,
        today,
        logger=logger,
    )
    upcoming = upcoming_occurrences(data.payments, today, logger=logger)

    print(f"Balances as of {format_date(target_date, preferences=prefs)}")
    for row in summary.balances:
        print(
            f"  {row.participant_name}: "
            f"{format_signed_currency(row.net_balance, prefs)}"
        )

    print(f"Settlements ({mode})")
    settlements = select_settlements(summary, mode)
    if not settlements:
        print("  Nothing to settle.")
    for debt in settlements:
        print(
            f"  {debt.from_participant_name} -> {debt.to_participant_name}: "
            f"{format_currency_abs(debt.amount, prefs)}"
        )

    for pool in summary.pool_ownerships:
        status = " (below expected)" if pool.is_below_expected else ""
        print(
            f"Pool {pool.pool_name}: {format_currency(pool.total_balance, prefs)}"
            f" / expected {format_currency(pool.expected_minimum, prefs)}{status}"
        )
        for entry in pool.entries:
            print(
                f"  {entry.participant_name}: "
                f"{format_signed_currency(entry.ownership, prefs)}"
            )

    for warning in warnings:
        who = warning.participant_name or warning.pool_name
        print(
            f"Warning [{warning.kind}] {who} in {warning.pool_name} on "
            f"{format_date(warning.date, preferences=prefs)}: "
            f"{format_currency(warning.balance, prefs)}"
        )

    if upcoming:
        print("Upcoming")
    for item in upcoming:
        print(
            f"  {format_date(item.next_date, preferences=prefs)} "
            f"{item.description}: {format_currency_abs(item.amount, prefs)}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()

"""Early warnings for pools projected to fall below their minimums."""

import calendar
from datetime import date
from decimal import Decimal
from logging import Logger

from dateutil.relativedelta import relativedelta

from src.domain.constants import (
    HORIZON_3_MONTHS,
    HORIZON_6_MONTHS,
    HORIZON_END_OF_CURRENT_MONTH,
    HORIZON_END_OF_NEXT_MONTH,
    WARNING_KIND_ACCOUNT,
    WARNING_KIND_USER,
)
from src.domain.models.participants import Participant
from src.domain.models.payments import Payment
from src.domain.models.projections import PoolWarning
from src.domain.services.ledger import LedgerReplay
from src.domain.services.occurrences import expand_occurrences
from src.domain.services.projections import series_dates, sweep


def _end_of_month(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def horizon_end_date(today: date, horizon: str | None) -> date | None:
    """Return the last date covered by a warning horizon.

    Args:
        today: Reference date.
        horizon: Horizon code; None or empty disables warnings.

    Returns:
        date | None: Horizon end, or None when disabled or unknown.
    """
    if not horizon:
        return None
    if horizon == HORIZON_END_OF_CURRENT_MONTH:
        return _end_of_month(today)
    if horizon == HORIZON_END_OF_NEXT_MONTH:
        return _end_of_month(today.replace(day=1) + relativedelta(months=1))
    if horizon == HORIZON_3_MONTHS:
        return today + relativedelta(months=3)
    if horizon == HORIZON_6_MONTHS:
        return today + relativedelta(months=6)
    return None


def detect_pool_warnings(
    participants: list[Participant],
    payments: list[Payment],
    today: date,
    logger: Logger | None = None,
) -> list[PoolWarning]:
    """Find the first projected date each pool or pool member dips too low.

    A pool raises an ``account`` warning when its balance falls below its
    expected minimum within ``warning_horizon_account``. A member raises a
    ``user`` warning when their ownership turns negative within
    ``warning_horizon_users``. Only dates from ``today`` onwards count.

    Args:
        participants: Project participants, pools included.
        payments: Payment definitions.
        today: First date checked.
        logger: Optional logger.

    Returns:
        list[PoolWarning]: Warnings ordered by date, pool and participant.
    """
    horizons: dict[int, tuple[date | None, date | None]] = {}
    for participant in participants:
        if not participant.is_pool:
            continue
        account_end = horizon_end_date(today, participant.warning_horizon_account)
        users_end = horizon_end_date(today, participant.warning_horizon_users)
        if account_end is None and users_end is None:
            continue
        horizons[participant.id] = (account_end, users_end)
    if not horizons:
        return []

    last_date = max(d for ends in horizons.values() for d in ends if d is not None)
    names = {p.id: p.name for p in participants}
    occurrences = expand_occurrences(payments, last_date, logger)
    replay = LedgerReplay(participants, payments, logger)
    checkpoints = series_dates(occurrences, today, last_date)

    warnings: list[PoolWarning] = []
    warned: set[tuple[int, int | None]] = set()
    for checkpoint in sweep(replay, occurrences, checkpoints):
        for pool_id, (account_end, users_end) in horizons.items():
            if (
                account_end is not None
                and checkpoint <= account_end
                and (pool_id, None) not in warned
            ):
                balance = replay.pool_total(pool_id)
                expected = replay.pool_expected(pool_id)
                if balance < expected:
                    warned.add((pool_id, None))
                    warnings.append(
                        PoolWarning(
                            pool_id=pool_id,
                            pool_name=names[pool_id],
                            kind=WARNING_KIND_ACCOUNT,
                            date=checkpoint,
                            balance=balance,
                            expected_minimum=expected,
                        )
                    )
            if users_end is None or checkpoint > users_end:
                continue
            for member_id in replay.pool_members(pool_id):
                if (pool_id, member_id) in warned:
                    continue
                ownership = replay.ownership(pool_id, member_id)
                if ownership < 0:
                    warned.add((pool_id, member_id))
                    warnings.append(
                        PoolWarning(
                            pool_id=pool_id,
                            pool_name=names[pool_id],
                            kind=WARNING_KIND_USER,
                            date=checkpoint,
                            balance=ownership,
                            expected_minimum=Decimal("0"),
                            participant_id=member_id,
                            participant_name=names.get(member_id, ""),
                        )
                    )

    warnings.sort(
        key=lambda w: (w.date, w.pool_id, w.participant_id or 0)
    )
    if logger is not None and warnings:
        logger.info(f"Detected {len(warnings)} pool warnings")
    return warnings


__all__ = ["horizon_end_date", "detect_pool_warnings"]

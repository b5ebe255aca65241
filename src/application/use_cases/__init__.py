"""Application use cases package."""

from .get_balance_series import GetBalanceSeriesUseCase
from .get_debt_summary import GetDebtSummaryUseCase
from .get_pool_warnings import GetPoolWarningsUseCase
from .get_upcoming_payments import GetUpcomingPaymentsUseCase
from .overview_session import (
    ExpandedRows,
    LoadOverviewUseCase,
    OverviewData,
    OverviewLoadError,
    OverviewSession,
)

__all__ = [
    "GetBalanceSeriesUseCase",
    "GetDebtSummaryUseCase",
    "GetPoolWarningsUseCase",
    "GetUpcomingPaymentsUseCase",
    "ExpandedRows",
    "LoadOverviewUseCase",
    "OverviewData",
    "OverviewLoadError",
    "OverviewSession",
]

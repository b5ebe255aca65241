"""SQLAlchemy-backed repository for project ledgers."""

from collections import defaultdict
from datetime import date, datetime

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import ACCOUNT_TYPE_USER
from src.domain.models.participants import Participant
from src.domain.models.payments import Contribution, Payment
from src.domain.services.dates import parse_local_date
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def _to_date(value) -> date | None:
    """Normalize SQL date values stored as dates or ``YYYY-MM-DD`` text."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_local_date(str(value).split(" ")[0])


def _to_bool(value, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository reading participants, payments and contributions."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_participants(self, project_id: int) -> list[Participant]:
        """Return project participants ordered by id."""
        query = text(
            """
            SELECT id, name, account_type, default_weight, user_id,
                   warning_horizon_account, warning_horizon_users
            FROM participants
            WHERE project_id = :project_id
            ORDER BY id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"project_id": project_id}).all()
        return [
            Participant(
                id=row.id,
                name=row.name,
                account_type=row.account_type or ACCOUNT_TYPE_USER,
                default_weight=coerce_decimal(
                    1 if row.default_weight is None else row.default_weight
                ),
                user_id=row.user_id,
                warning_horizon_account=row.warning_horizon_account,
                warning_horizon_users=row.warning_horizon_users,
            )
            for row in rows
        ]

    def fetch_payments(
        self,
        project_id: int,
        include_drafts: bool = False,
    ) -> list[Payment]:
        """Return project payments with contributions, by date then id.

        Payments whose date cannot be parsed are skipped with a warning.
        """
        payments_sql = """
            SELECT id, payer_id, receiver_account_id, amount, description,
                   payment_date, is_recurring, recurrence_type,
                   recurrence_interval, recurrence_times_per,
                   recurrence_end_date, recurrence_weekdays,
                   recurrence_monthdays, recurrence_months, is_final,
                   affects_balance, affects_payer_expectation,
                   affects_receiver_expectation
            FROM payments
            WHERE project_id = :project_id
        """
        if not include_drafts:
            payments_sql += " AND is_final = 1"
        payments_sql += " ORDER BY payment_date, id"
        contributions_query = text(
            """
            SELECT c.payment_id, c.participant_id, c.amount, c.weight
            FROM contributions c
            JOIN payments p ON p.id = c.payment_id
            WHERE p.project_id = :project_id
            ORDER BY c.id
            """
        )

        params = {"project_id": project_id}
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            payment_rows = conn.execute(text(payments_sql), params).all()
            contribution_rows = conn.execute(contributions_query, params).all()

        contributions: dict[int, list[Contribution]] = defaultdict(list)
        for row in contribution_rows:
            contributions[row.payment_id].append(
                Contribution(
                    participant_id=row.participant_id,
                    amount=coerce_decimal(row.amount),
                    weight=coerce_decimal(1 if row.weight is None else row.weight),
                )
            )

        payments: list[Payment] = []
        for row in payment_rows:
            try:
                payment_date = _to_date(row.payment_date)
                end_date = _to_date(row.recurrence_end_date)
            except ValueError:
                self._logger.warning(
                    f"Skipping payment {row.id} with invalid date "
                    f"{row.payment_date!r}"
                )
                continue
            if payment_date is None:
                self._logger.warning(f"Skipping payment {row.id} without a date")
                continue
            payments.append(
                Payment(
                    id=row.id,
                    description=row.description or "",
                    amount=coerce_decimal(row.amount),
                    payment_date=payment_date,
                    payer_id=row.payer_id,
                    receiver_account_id=row.receiver_account_id,
                    contributions=tuple(contributions.get(row.id, [])),
                    is_recurring=_to_bool(row.is_recurring, False),
                    recurrence_type=row.recurrence_type,
                    recurrence_interval=row.recurrence_interval,
                    recurrence_times_per=row.recurrence_times_per,
                    recurrence_end_date=end_date,
                    recurrence_weekdays=row.recurrence_weekdays,
                    recurrence_monthdays=row.recurrence_monthdays,
                    recurrence_months=row.recurrence_months,
                    is_final=_to_bool(row.is_final, True),
                    affects_balance=_to_bool(row.affects_balance, True),
                    affects_payer_expectation=_to_bool(
                        row.affects_payer_expectation, False
                    ),
                    affects_receiver_expectation=_to_bool(
                        row.affects_receiver_expectation, False
                    ),
                    project_id=project_id,
                )
            )
        self._logger.info(
            f"Loaded {len(payments)} payments for project={project_id} "
            f"(include_drafts={include_drafts})"
        )
        return payments


__all__ = ["SqlAlchemyLedgerRepository"]

"""Domain models for ledger participants."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import ACCOUNT_TYPE_POOL, ACCOUNT_TYPE_USER


@dataclass(frozen=True)
class Participant:
    """Person or shared pool taking part in a project ledger.

    Attributes:
        id: Participant identifier.
        name: Display name.
        account_type: ``user`` for people, ``pool`` for shared funds.
        default_weight: Default contribution weight for new payments.
        user_id: Linked user account, if any.
        warning_horizon_account: Pool horizon for total-below-minimum warnings.
        warning_horizon_users: Pool horizon for negative ownership warnings.
    """

    id: int
    name: str
    account_type: str = ACCOUNT_TYPE_USER
    default_weight: Decimal = Decimal("1")
    user_id: int | None = None
    warning_horizon_account: str | None = None
    warning_horizon_users: str | None = None

    @property
    def is_pool(self) -> bool:
        """Return True when the participant holds shared funds."""
        return self.account_type == ACCOUNT_TYPE_POOL


__all__ = ["Participant"]

"""Port for reading project ledgers."""

from typing import Protocol

from src.domain.models.participants import Participant
from src.domain.models.payments import Payment


class LedgerRepositoryPort(Protocol):
    """Port exposing read access to participants and payments."""

    def fetch_participants(self, project_id: int) -> list[Participant]:
        """Return the participants of a project, pools included."""

    def fetch_payments(
        self,
        project_id: int,
        include_drafts: bool = False,
    ) -> list[Payment]:
        """Return payments with their contributions.

        Drafts are excluded unless ``include_drafts`` is True.
        """


__all__ = ["LedgerRepositoryPort"]

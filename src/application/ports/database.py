"""Database ports for the shared-expense ledger.

Infrastructure implementations provide concrete adapters that satisfy these
protocols, so use cases never depend on drivers or configuration.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the ledger database engine."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger backend.
        """


__all__ = ["DatabaseEnginePort"]

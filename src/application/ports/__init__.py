"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort

__all__ = ["DatabaseEnginePort", "LedgerRepositoryPort"]

"""Domain policies package."""

from .integrity import check_ledger_integrity, is_allowed_transfer

__all__ = ["check_ledger_integrity", "is_allowed_transfer"]

"""Weighted share splitting for payment contributions."""

from decimal import Decimal

from src.domain.models.payments import Split
from src.utils.decimal_utils import coerce_decimal, quantize_cents


def compute_shares(amount, splits: list[Split]) -> dict[int, Decimal]:
    """Split an amount across participants proportionally to their weights.

    Excluded splits and non-positive weights receive zero. Shares are rounded
    to cents and any rounding remainder goes to the included split with the
    largest weight (the first one on ties), so the shares add up to the
    amount.

    Args:
        amount: Total amount to split.
        splits: Participant weights.

    Returns:
        dict[int, Decimal]: Share per participant id.
    """
    amount = coerce_decimal(amount)
    valid = [
        split
        for split in splits
        if split.included and coerce_decimal(split.weight) > 0
    ]
    total_weight = sum(
        (coerce_decimal(split.weight) for split in valid),
        Decimal("0"),
    )
    if total_weight == 0:
        return {split.participant_id: Decimal("0") for split in splits}

    shares: dict[int, Decimal] = {}
    for split in splits:
        if split in valid:
            shares[split.participant_id] = quantize_cents(
                amount * coerce_decimal(split.weight) / total_weight
            )
        else:
            shares[split.participant_id] = Decimal("0")

    remainder = quantize_cents(amount - sum(shares.values(), Decimal("0")))
    if remainder != 0:
        target = valid[0]
        for split in valid[1:]:
            if coerce_decimal(split.weight) > coerce_decimal(target.weight):
                target = split
        shares[target.participant_id] = quantize_cents(
            shares[target.participant_id] + remainder
        )
    return shares


__all__ = ["compute_shares"]

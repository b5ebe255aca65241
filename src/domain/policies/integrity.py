"""Data-integrity rules for ledger payments."""

from decimal import Decimal
from logging import Logger

from src.domain.constants import AMOUNT_EPSILON
from src.domain.models.participants import Participant
from src.domain.models.payments import Payment
from src.utils.decimal_utils import coerce_decimal


def is_allowed_transfer(
    payer: Participant | None,
    receiver: Participant | None,
) -> bool:
    """Return True unless the transfer is pool-to-pool or to oneself.

    Args:
        payer: Paying participant, or None for an external source.
        receiver: Receiving account, or None for an external expense.

    Returns:
        bool: Whether the data-entry layer accepts the transfer.
    """
    if payer is None or receiver is None:
        return True
    if payer.id == receiver.id:
        return False
    return not (payer.is_pool and receiver.is_pool)


def check_ledger_integrity(
    participants: list[Participant],
    payments: list[Payment],
    logger: Logger,
) -> list[str]:
    """Log and return the integrity issues found in a ledger.

    Args:
        participants: Project participants.
        payments: Payment definitions with contributions.
        logger: Logger used for warnings.

    Returns:
        list[str]: Human readable issue descriptions.
    """
    by_id = {participant.id: participant for participant in participants}
    issues: list[str] = []

    for payment in payments:
        payer = by_id.get(payment.payer_id) if payment.payer_id is not None else None
        receiver = (
            by_id.get(payment.receiver_account_id)
            if payment.receiver_account_id is not None
            else None
        )

        if payment.payer_id is None and payment.receiver_account_id is None:
            issues.append(f"Payment {payment.id} has neither payer nor receiver")
        for label, ref_id, ref in (
            ("payer", payment.payer_id, payer),
            ("receiver", payment.receiver_account_id, receiver),
        ):
            if ref_id is not None and ref is None:
                issues.append(
                    f"Payment {payment.id} references unknown {label} {ref_id}"
                )
        if not is_allowed_transfer(payer, receiver):
            if payer.id == receiver.id:
                issues.append(f"Payment {payment.id} is a transfer to oneself")
            else:
                issues.append(f"Payment {payment.id} is a pool-to-pool transfer")

        for contribution in payment.contributions:
            if contribution.participant_id not in by_id:
                issues.append(
                    f"Payment {payment.id} has a contribution from unknown "
                    f"participant {contribution.participant_id}"
                )

        is_user_transfer = (
            payment.payer_id is not None
            and payment.receiver_account_id is not None
        )
        if payment.contributions or not is_user_transfer:
            total = sum(
                (coerce_decimal(c.amount) for c in payment.contributions),
                Decimal("0"),
            )
            if abs(total - coerce_decimal(payment.amount)) > AMOUNT_EPSILON:
                issues.append(
                    f"Payment {payment.id} contributions sum to {total} "
                    f"instead of {payment.amount}"
                )

    for issue in issues:
        logger.warning(issue)
    return issues


__all__ = ["is_allowed_transfer", "check_ledger_integrity"]

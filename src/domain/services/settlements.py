"""Settlement transfer lists derived from balances."""

from src.domain.constants import (
    AMOUNT_EPSILON,
    SETTLEMENT_MODE_DIRECT,
    SETTLEMENT_MODE_MINIMAL,
)
from src.domain.models.debts import (
    Debt,
    DebtSummary,
    PairwiseBalance,
    ParticipantBalance,
)
from src.utils.decimal_utils import quantize_cents


def calculate_settlements(balances: list[ParticipantBalance]) -> list[Debt]:
    """Return a reduced transfer list zeroing the net balances.

    The largest remaining debtor pays the largest remaining creditor until
    every net is settled. Equal amounts are ordered by participant id.

    Args:
        balances: Net balances of non-pool participants.

    Returns:
        list[Debt]: Transfers above one cent, rounded to cents.
    """
    debtors = sorted(
        (
            [row.participant_id, row.participant_name, -row.net_balance]
            for row in balances
            if row.net_balance < -AMOUNT_EPSILON
        ),
        key=lambda item: (-item[2], item[0]),
    )
    creditors = sorted(
        (
            [row.participant_id, row.participant_name, row.net_balance]
            for row in balances
            if row.net_balance > AMOUNT_EPSILON
        ),
        key=lambda item: (-item[2], item[0]),
    )

    settlements: list[Debt] = []
    d_idx = 0
    c_idx = 0
    while d_idx < len(debtors) and c_idx < len(creditors):
        debtor = debtors[d_idx]
        creditor = creditors[c_idx]
        transfer = min(debtor[2], creditor[2])
        if transfer > AMOUNT_EPSILON:
            settlements.append(
                Debt(
                    from_participant_id=debtor[0],
                    from_participant_name=debtor[1],
                    to_participant_id=creditor[0],
                    to_participant_name=creditor[1],
                    amount=quantize_cents(transfer),
                )
            )
        debtor[2] -= transfer
        creditor[2] -= transfer
        if debtor[2] < AMOUNT_EPSILON:
            d_idx += 1
        if creditor[2] < AMOUNT_EPSILON:
            c_idx += 1
    return settlements


def calculate_direct_settlements(
    pairwise_balances: list[PairwiseBalance],
) -> list[Debt]:
    """Return one transfer per participant pair with a non-zero net.

    No netting happens across third parties.
    """
    settlements: list[Debt] = []
    for pair in pairwise_balances:
        if pair.participant_id >= pair.other_participant_id:
            continue
        if pair.net > AMOUNT_EPSILON:
            settlements.append(
                Debt(
                    from_participant_id=pair.other_participant_id,
                    from_participant_name=pair.other_participant_name,
                    to_participant_id=pair.participant_id,
                    to_participant_name=pair.participant_name,
                    amount=quantize_cents(pair.net),
                )
            )
        elif pair.net < -AMOUNT_EPSILON:
            settlements.append(
                Debt(
                    from_participant_id=pair.participant_id,
                    from_participant_name=pair.participant_name,
                    to_participant_id=pair.other_participant_id,
                    to_participant_name=pair.other_participant_name,
                    amount=quantize_cents(-pair.net),
                )
            )
    settlements.sort(
        key=lambda debt: (
            -debt.amount,
            debt.from_participant_id,
            debt.to_participant_id,
        )
    )
    return settlements


def select_settlements(summary: DebtSummary, mode: str) -> list[Debt]:
    """Pick the minimal or the direct settlement list.

    Raises:
        ValueError: If the mode is unknown.
    """
    if mode == SETTLEMENT_MODE_MINIMAL:
        return summary.settlements
    if mode == SETTLEMENT_MODE_DIRECT:
        return summary.direct_settlements
    raise ValueError(f"Unknown settlement mode: {mode}")


__all__ = [
    "calculate_settlements",
    "calculate_direct_settlements",
    "select_settlements",
]

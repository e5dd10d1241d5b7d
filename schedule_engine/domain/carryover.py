"""Rolling unpaid overdue balances into the next pending installment"""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence, List

from schedule_engine.domain.models import CarryOverResult, PaymentStatus, ScheduleItem
from schedule_engine.domain.status import refresh_statuses

logger = logging.getLogger(__name__)


def _next_pending(items: List[ScheduleItem], after: int) -> Optional[int]:
    for index in range(after + 1, len(items)):
        if items[index].status == PaymentStatus.PENDING:
            return index
    return None


def process_carry_over(items: Sequence[ScheduleItem], today: date) -> CarryOverResult:
    """
    Move each overdue installment's unpaid balance onto the nearest
    following PENDING installment.

    Statuses are recomputed first. An overdue installment qualifies when
    it still has a balance and has not been carried over before
    (carried_over_amount_cents == 0). After the move:

    - the receiving installment's current due amount and carried-over
      amount both grow by the balance
    - the overdue installment's carried-over amount is set to the balance
      as a marker; its own due and paid amounts do not change

    Intervening non-pending installments are skipped. An overdue
    installment with no pending successor stays uncarried and remains
    collectable directly. Running this twice with the same `today` gives
    the same result as running it once.
    """
    updated = refresh_statuses(items, today)
    carryover_count = 0

    for index in range(len(updated)):
        item = updated[index]
        if item.status != PaymentStatus.OVERDUE:
            continue
        if item.carried_over_amount_cents != 0 or item.balance_cents <= 0:
            continue

        target_index = _next_pending(updated, index)
        if target_index is None:
            logger.debug(
                "Overdue balance left uncarried: no pending installment follows",
                extra={"installment_number": item.installment_number},
            )
            continue

        balance = item.balance_cents
        target = updated[target_index]
        updated[target_index] = replace(
            target,
            current_due_amount_cents=target.current_due_amount_cents + balance,
            carried_over_amount_cents=target.carried_over_amount_cents + balance,
        )
        updated[index] = replace(item, carried_over_amount_cents=balance)
        carryover_count += 1

        logger.info(
            "Carried over overdue balance",
            extra={
                "from_installment": item.installment_number,
                "to_installment": target.installment_number,
                "amount_cents": balance,
            },
        )

    return CarryOverResult(items=updated, carryover_count=carryover_count)

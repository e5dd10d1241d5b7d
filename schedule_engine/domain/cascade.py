"""Cascade payment: one payment applied across installments in order"""

import logging
from dataclasses import replace
from typing import List, Sequence

from schedule_engine.domain.exceptions import InvalidArgumentError
from schedule_engine.domain.models import CascadeEntry, PaymentCascadeResult, PaymentStatus, ScheduleItem

logger = logging.getLogger(__name__)


def apply_cascade_payment(
    amount_cents: int,
    items: Sequence[ScheduleItem],
    start_index: int,
) -> PaymentCascadeResult:
    """
    Apply a payment starting at `start_index`, overflowing forward.

    Walks installments in array order from `start_index`, skipping PAID,
    CANCELLED and WRITTEN_OFF ones. Each payable installment receives
    min(remaining, balance). Stops once the payment is used up.

    Whatever cannot be applied is returned as remaining_amount_cents
    (overpayment) so the caller can show it; it is never dropped.

    Example:
        150.00 against balances [100.00, 200.00]
        -> 100.00 to #1 (PAID), 50.00 to #2 (PARTIALLY_PAID), remaining 0

    Raises:
        InvalidArgumentError: negative amount or start index outside 0..len(items)
    """
    if amount_cents < 0:
        raise InvalidArgumentError("Payment amount must not be negative")
    if not 0 <= start_index <= len(items):
        raise InvalidArgumentError(f"Start index {start_index} out of range (0..{len(items)})")

    remaining = amount_cents
    entries: List[CascadeEntry] = []
    updated = list(items)

    for index in range(start_index, len(items)):
        if remaining <= 0:
            break

        item = items[index]
        if not item.status.is_payable:
            continue

        previous_balance = item.balance_cents
        applied = min(remaining, previous_balance)
        new_paid = item.paid_amount_cents + applied
        new_balance = previous_balance - applied

        if new_balance == 0:
            new_status = PaymentStatus.PAID
        elif new_paid > 0:
            new_status = PaymentStatus.PARTIALLY_PAID
        else:
            new_status = item.status

        entries.append(
            CascadeEntry(
                schedule_item_id=str(item.id) if item.id is not None else f"item-{index}",
                installment_number=item.installment_number,
                amount_applied_cents=applied,
                previous_balance_cents=previous_balance,
                new_balance_cents=new_balance,
                new_status=new_status,
            )
        )
        updated[index] = replace(item, paid_amount_cents=new_paid, status=new_status)
        remaining -= applied

    total_processed = amount_cents - remaining
    if remaining > 0:
        logger.info(
            "Payment exceeds schedule balance",
            extra={"amount_cents": amount_cents, "overpayment_cents": remaining},
        )

    return PaymentCascadeResult(
        entries=entries,
        remaining_amount_cents=remaining,
        total_processed_cents=total_processed,
        updated_items=updated,
    )

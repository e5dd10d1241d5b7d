"""Splitting a payable total across the editable installments of a schedule"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from schedule_engine.domain.exceptions import InvalidArgumentError
from schedule_engine.domain.models import ScheduleItem
from schedule_engine.utils.money import divide_half_up

logger = logging.getLogger(__name__)


def _check_index(items: Sequence[ScheduleItem], index: int) -> None:
    if not 0 <= index < len(items):
        raise InvalidArgumentError(f"Installment index {index} out of range (0..{len(items) - 1})")


def _spread(
    total_amount_cents: int,
    items: Sequence[ScheduleItem],
    receivers: List[int],
    overrides: Dict[int, int],
    share_pool_cents: Optional[int] = None,
) -> List[ScheduleItem]:
    """
    Split what is left of the total evenly over the receiving indexes.

    Steps:
    1. pool = total - every non-receiving amount (overrides included),
       unless the caller passes the pool to share out
    2. each receiver gets pool / n, rounded half-up to the cent
    3. the last receiver absorbs total - every other amount so the
       schedule sums exactly to the total

    When half-up rounding would over-allocate the first n-1 receivers
    (tiny pools, e.g. 2 cents over 4 items) the share falls back to
    floor division so the last amount never goes negative.
    """
    amounts = [overrides.get(i, item.current_due_amount_cents) for i, item in enumerate(items)]
    receiving = set(receivers)
    pool = share_pool_cents
    if pool is None:
        pool = total_amount_cents - sum(a for i, a in enumerate(amounts) if i not in receiving)
    if pool < 0:
        raise InvalidArgumentError(
            f"Amounts exceed the total by {-pool} cents; nothing left to redistribute"
        )

    count = len(receivers)
    share = divide_half_up(pool, count)
    if share * (count - 1) > pool:
        share = pool // count

    for index in receivers[:-1]:
        amounts[index] = share
    last = receivers[-1]
    amounts[last] = total_amount_cents - sum(a for i, a in enumerate(amounts) if i != last)
    if amounts[last] < 0:
        raise InvalidArgumentError(
            f"Amounts exceed the total by {-amounts[last]} cents; nothing left to redistribute"
        )

    return [
        item if amounts[i] == item.current_due_amount_cents
        else replace(item, current_due_amount_cents=amounts[i])
        for i, item in enumerate(items)
    ]


def _apply_overrides(items: Sequence[ScheduleItem], overrides: Dict[int, int]) -> List[ScheduleItem]:
    return [
        replace(item, current_due_amount_cents=overrides[i]) if i in overrides else item
        for i, item in enumerate(items)
    ]


def distribute_even(total_amount_cents: int, items: Sequence[ScheduleItem]) -> List[ScheduleItem]:
    """
    Split (total - locked) evenly across every editable installment.

    Locked installments (paid, overdue, cancelled, explicitly locked...)
    keep their amount but count against the total. A schedule with no
    editable installment is returned unchanged.
    """
    if total_amount_cents < 0:
        raise InvalidArgumentError("Total amount must not be negative")

    receivers = [i for i, item in enumerate(items) if item.is_editable]
    if not receivers:
        logger.debug("No editable installments to distribute over")
        return list(items)

    return _spread(total_amount_cents, items, receivers, {})


def distribute_on_edit(
    total_amount_cents: int,
    items: Sequence[ScheduleItem],
    edited_index: int,
    new_amount_cents: int,
) -> List[ScheduleItem]:
    """
    Set one installment's amount and rebalance every other editable one.

    Editing a non-editable installment is ignored: the schedule comes
    back unchanged.
    """
    _check_index(items, edited_index)
    if total_amount_cents < 0 or new_amount_cents < 0:
        raise InvalidArgumentError("Amounts must not be negative")

    if not items[edited_index].is_editable:
        logger.warning(
            "Edit ignored: installment is not editable",
            extra={
                "installment_number": items[edited_index].installment_number,
                "status": items[edited_index].status.value,
            },
        )
        return list(items)

    overrides = {edited_index: new_amount_cents}
    receivers = [i for i, item in enumerate(items) if item.is_editable and i != edited_index]
    if not receivers:
        return _apply_overrides(items, overrides)

    return _spread(total_amount_cents, items, receivers, overrides)


def smart_distribute(
    total_amount_cents: int,
    items: Sequence[ScheduleItem],
    edited_index: int,
    new_amount_cents: int,
) -> List[ScheduleItem]:
    """
    Forward-only variant of distribute_on_edit.

    Installments up to and including the edited one keep their amounts;
    only later editable installments absorb the difference. They share
    total - sum(items[0..edited]) evenly; the last of them absorbs
    whatever keeps the schedule at exactly the total, which includes
    any later locked installments.
    With no such installment the edit is applied alone and the schedule
    may no longer match the total - validate() reports the mismatch.
    """
    _check_index(items, edited_index)
    if total_amount_cents < 0 or new_amount_cents < 0:
        raise InvalidArgumentError("Amounts must not be negative")

    edited = items[edited_index]
    if not edited.is_editable:
        logger.warning(
            "Edit ignored: installment is not editable",
            extra={"installment_number": edited.installment_number, "status": edited.status.value},
        )
        return list(items)

    overrides = {edited_index: new_amount_cents}
    receivers = [i for i in range(edited_index + 1, len(items)) if items[i].is_editable]
    if not receivers:
        logger.warning(
            "No later editable installments; schedule may not match total",
            extra={"installment_number": edited.installment_number, "total_cents": total_amount_cents},
        )
        return _apply_overrides(items, overrides)

    # Forward pool: what the total leaves after everything up to the edit
    settled_cents = sum(
        overrides.get(i, items[i].current_due_amount_cents) for i in range(edited_index + 1)
    )
    return _spread(total_amount_cents, items, receivers, overrides, total_amount_cents - settled_cents)

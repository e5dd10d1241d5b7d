"""Due date generation and initial schedule construction"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Sequence, Union

from schedule_engine.domain.distribution import distribute_even
from schedule_engine.domain.exceptions import InvalidArgumentError
from schedule_engine.domain.models import ScheduleFrequency, ScheduleItem
from schedule_engine.utils.date_utils import add_days, add_months, add_years, parse_iso_date

logger = logging.getLogger(__name__)

_DAY_STEPS = {
    ScheduleFrequency.DAILY: 1,
    ScheduleFrequency.WEEKLY: 7,
    ScheduleFrequency.BIWEEKLY: 14,
}


def generate_dates(
    frequency: ScheduleFrequency,
    start_date: Union[date, str],
    count: int,
) -> List[date]:
    """
    Generate chronological due dates for a schedule.

    Every date is computed from the start date (never from the previous
    due date), so month-end clamping does not drift:
    Jan 31 -> Feb 28 -> Mar 31 -> Apr 30.

    CUSTOM schedules return no dates; the caller adds them one at a time.

    Raises:
        InvalidArgumentError: count <= 0, unparsable start date, or dates
            beyond year 9999
    """
    try:
        frequency = ScheduleFrequency(frequency)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown frequency: {frequency!r}") from e

    if frequency == ScheduleFrequency.CUSTOM:
        return []

    if count <= 0:
        raise InvalidArgumentError(f"Number of payments must be positive, got {count}")
    start = parse_iso_date(start_date)

    try:
        if frequency in _DAY_STEPS:
            step = _DAY_STEPS[frequency]
            return [add_days(start, i * step) for i in range(count)]
        if frequency == ScheduleFrequency.MONTHLY:
            return [add_months(start, i) for i in range(count)]
        return [add_years(start, i) for i in range(count)]
    except (ValueError, OverflowError) as e:
        raise InvalidArgumentError(
            f"{count} {frequency.value.lower()} payments from {start} run past the last supported date"
        ) from e


def generate_schedule_items(
    dates: Sequence[Union[date, str]],
    total_amount_cents: int,
) -> List[ScheduleItem]:
    """Build a fresh PENDING schedule over the given dates, split evenly"""
    if not dates:
        raise InvalidArgumentError("Schedule must have at least one due date")
    if total_amount_cents < 0:
        raise InvalidArgumentError("Total amount must not be negative")

    due_dates = [parse_iso_date(d) for d in dates]
    items = [
        ScheduleItem(
            installment_number=i + 1,
            original_due_date=due_date,
            current_due_date=due_date,
            original_due_amount_cents=0,
            current_due_amount_cents=0,
        )
        for i, due_date in enumerate(due_dates)
    ]

    distributed = distribute_even(total_amount_cents, items)

    # Fresh schedule: the distributed amounts are the originals
    result = [
        replace(item, original_due_amount_cents=item.current_due_amount_cents)
        for item in distributed
    ]
    logger.debug(
        "Generated schedule",
        extra={"installments": len(result), "total_cents": total_amount_cents},
    )
    return result

"""Manual schedule edits: due date changes and custom installments"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence, Union

from schedule_engine.domain.exceptions import InvalidArgumentError
from schedule_engine.domain.models import DateCheck, ScheduleItem
from schedule_engine.utils.date_utils import parse_iso_date

logger = logging.getLogger(__name__)


def validate_date_range(
    new_date: date,
    today: date,
    prev_date: Optional[date] = None,
    next_date: Optional[date] = None,
) -> DateCheck:
    """Check a proposed due date: not in the past, between its neighbours"""
    if new_date < today:
        return DateCheck(False, "Cannot select past dates")
    if prev_date is not None and new_date <= prev_date:
        return DateCheck(False, "Date must be after previous installment")
    if next_date is not None and new_date >= next_date:
        return DateCheck(False, "Date must be before next installment")
    return DateCheck(True)


def update_due_date(
    items: Sequence[ScheduleItem],
    index: int,
    new_date: Union[date, str],
    today: date,
) -> List[ScheduleItem]:
    """
    Move one installment's current due date.

    Non-editable installments are left alone (schedule returned as is).

    Raises:
        InvalidArgumentError: bad index, unparsable date, or a date that
            is in the past or out of order with its neighbours
    """
    if not 0 <= index < len(items):
        raise InvalidArgumentError(f"Installment index {index} out of range (0..{len(items) - 1})")
    due_date = parse_iso_date(new_date)

    item = items[index]
    if not item.is_editable:
        logger.warning(
            "Edit ignored: installment is not editable",
            extra={"installment_number": item.installment_number, "status": item.status.value},
        )
        return list(items)

    prev_date = items[index - 1].current_due_date if index > 0 else None
    next_date = items[index + 1].current_due_date if index + 1 < len(items) else None
    check = validate_date_range(due_date, today, prev_date, next_date)
    if not check.is_valid:
        raise InvalidArgumentError(check.error_message)

    updated = list(items)
    updated[index] = replace(item, current_due_date=due_date)
    return updated


def add_custom_installment(
    items: Sequence[ScheduleItem],
    due_date: Union[date, str],
    amount_cents: int,
) -> List[ScheduleItem]:
    """Append the next PENDING installment to a custom schedule"""
    due = parse_iso_date(due_date)
    if amount_cents < 0:
        raise InvalidArgumentError("Installment amount must not be negative")
    if items and due <= items[-1].current_due_date:
        raise InvalidArgumentError("Date must be after previous installment")

    number = items[-1].installment_number + 1 if items else 1
    return list(items) + [
        ScheduleItem(
            installment_number=number,
            original_due_date=due,
            current_due_date=due,
            original_due_amount_cents=amount_cents,
            current_due_amount_cents=amount_cents,
        )
    ]


def remove_last_installment(items: Sequence[ScheduleItem]) -> List[ScheduleItem]:
    """
    Drop the most recently added installment.

    Only allowed while nothing in the schedule has been paid and the last
    installment is still editable; otherwise the schedule is unchanged.
    """
    if not items:
        return []
    if any(item.has_payment for item in items) or not items[-1].is_editable:
        logger.warning(
            "Removal ignored: schedule has payments or last installment is locked",
            extra={"installment_number": items[-1].installment_number},
        )
        return list(items)
    return list(items[:-1])

"""Schedule invariant checks"""

import logging
from typing import Sequence

from schedule_engine.domain.models import ScheduleItem, ValidationResult
from schedule_engine.utils.money import from_cents

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_CENTS = 1


def validate(
    items: Sequence[ScheduleItem],
    total_amount_cents: int,
    tolerance_cents: int = DEFAULT_TOLERANCE_CENTS,
) -> ValidationResult:
    """
    Check a schedule against its total, collecting every violation.

    Rules:
    - at least one installment
    - amounts sum to the total within the tolerance (default 0.01)
    - due dates strictly increase in array order
    - every due amount is greater than zero
    """
    errors = []

    if not items:
        errors.append("Schedule must have at least one installment")

    calculated_total = sum(item.current_due_amount_cents for item in items)
    if abs(calculated_total - total_amount_cents) > tolerance_cents:
        errors.append(
            f"Total amount mismatch: Expected {from_cents(total_amount_cents)}, "
            f"Got {from_cents(calculated_total)}"
        )

    for position in range(1, len(items)):
        if items[position].current_due_date <= items[position - 1].current_due_date:
            errors.append(
                f"Installment {position + 1} date must be after installment {position} date"
            )

    for position, item in enumerate(items, start=1):
        if item.current_due_amount_cents <= 0:
            errors.append(f"Installment {position} amount must be greater than zero")

    if errors:
        logger.debug("Schedule validation failed", extra={"error_count": len(errors)})

    return ValidationResult(ok=not errors, errors=errors)

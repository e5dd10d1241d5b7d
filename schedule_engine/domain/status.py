"""Installment status derivation"""

from dataclasses import replace
from datetime import date
from typing import List, Sequence

from schedule_engine.domain.models import PaymentStatus, ScheduleItem


def compute_status(item: ScheduleItem, today: date) -> PaymentStatus:
    """
    Derive an installment's status from its amounts and due date.

    Order of precedence:
    - CANCELLED / WRITTEN_OFF: manual overrides, always kept
    - paid >= due: PAID
    - due date before today: OVERDUE
    - partly paid: PARTIALLY_PAID
    - otherwise PENDING

    Callers must re-run this after any payment, date edit or date rollover.
    """
    if item.status.is_terminal:
        return item.status

    if item.paid_amount_cents >= item.current_due_amount_cents:
        return PaymentStatus.PAID

    if item.current_due_date < today:
        return PaymentStatus.OVERDUE

    if item.paid_amount_cents > 0:
        return PaymentStatus.PARTIALLY_PAID

    return PaymentStatus.PENDING


def refresh_statuses(items: Sequence[ScheduleItem], today: date) -> List[ScheduleItem]:
    """Recompute the status of every installment in a schedule"""
    refreshed = []
    for item in items:
        status = compute_status(item, today)
        refreshed.append(item if status == item.status else replace(item, status=status))
    return refreshed

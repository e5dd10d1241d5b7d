"""POST /v1/schedule/payments/cascade - Apply a payment across installments"""

import time

from fastapi import APIRouter, Depends

from schedule_engine.api.dependencies import get_request_id, resolve_today
from schedule_engine.api.v1.schemas import (
    CascadeEntrySchema,
    CascadePaymentRequest,
    CascadePaymentResponse,
    ScheduleItemSchema,
)
from schedule_engine.config import settings
from schedule_engine.domain.cascade import apply_cascade_payment
from schedule_engine.domain.models import PaymentStatus
from schedule_engine.infrastructure.observability.logging import log_cascade_payment
from schedule_engine.infrastructure.observability.metrics import record_cascade_payment
from schedule_engine.utils.money import from_cents, to_cents

router = APIRouter()


@router.post("/schedule/payments/cascade", response_model=CascadePaymentResponse)
def cascade_payment(
    request_body: CascadePaymentRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Apply one payment starting at `start_index`, overflowing into later
    installments.

    Flow:
    1. Convert the schedule and amount to cents
    2. Run the cascade
    3. Record metrics and log the outcome
    4. Return the breakdown and the updated schedule; any overpayment is
       reported with a message, not rejected
    """
    start_time = time.time()
    today = resolve_today(request_body.today)
    amount_cents = to_cents(request_body.amount)

    result = apply_cascade_payment(amount_cents, request_body.domain_items(), request_body.start_index)

    settled = bool(result.entries) and result.entries[-1].new_status == PaymentStatus.PAID
    record_cascade_payment(result.remaining_amount_cents, len(result.entries), settled)
    duration_ms = (time.time() - start_time) * 1000
    log_cascade_payment(
        request_id, amount_cents, len(result.entries), result.remaining_amount_cents, duration_ms
    )

    message = None
    if result.is_overpayment:
        message = (
            f"Payment exceeds total balance by {settings.currency_code} "
            f"{from_cents(result.remaining_amount_cents)}"
        )

    return CascadePaymentResponse(
        items=[ScheduleItemSchema.from_domain(item, today) for item in result.updated_items],
        currency=settings.currency_code,
        affected_installments=[CascadeEntrySchema.from_domain(entry) for entry in result.entries],
        remaining_amount=from_cents(result.remaining_amount_cents),
        total_processed=from_cents(result.total_processed_cents),
        overpayment=result.is_overpayment,
        message=message,
    )

"""POST /v1/schedule/* - Schedule generation, redistribution, status and validation"""

import logging

from fastapi import APIRouter, HTTPException

from schedule_engine.api.dependencies import resolve_today
from schedule_engine.api.v1.schemas import (
    CarryOverResponse,
    DatesRequest,
    DatesResponse,
    DistributeRequest,
    GenerateRequest,
    ScheduleItemSchema,
    ScheduleRequest,
    ScheduleResponse,
    StatusResponse,
    ValidateRequest,
    ValidateResponse,
)
from schedule_engine.config import settings
from schedule_engine.domain.carryover import process_carry_over
from schedule_engine.domain.distribution import distribute_even, distribute_on_edit, smart_distribute
from schedule_engine.domain.generator import generate_dates, generate_schedule_items
from schedule_engine.domain.models import PaymentStatus
from schedule_engine.domain.status import refresh_statuses
from schedule_engine.domain.validation import validate
from schedule_engine.infrastructure.observability.metrics import (
    carryover_counter,
    ignored_edit_counter,
    validation_failure_counter,
)
from schedule_engine.utils.money import to_cents

router = APIRouter()


def _schedule_response(items, today) -> ScheduleResponse:
    return ScheduleResponse(
        items=[ScheduleItemSchema.from_domain(item, today) for item in items],
        currency=settings.currency_code,
    )


@router.post("/schedule/dates", response_model=DatesResponse)
def create_dates(request_body: DatesRequest):
    """
    Generate due dates for a frequency.

    CUSTOM returns an empty list; dates are then added one by one.
    """
    dates = generate_dates(request_body.frequency, request_body.start_date, request_body.count)
    return DatesResponse(dates=dates)


@router.post("/schedule/generate", response_model=ScheduleResponse)
def create_schedule(request_body: GenerateRequest):
    """Generate due dates and split the total evenly across them"""
    today = resolve_today(request_body.today)
    dates = generate_dates(request_body.frequency, request_body.start_date, request_body.count)
    if not dates:
        raise HTTPException(status_code=422, detail="CUSTOM schedules have no generated dates")

    items = generate_schedule_items(dates, to_cents(request_body.total_amount))
    return _schedule_response(items, today)


@router.post("/schedule/distribute", response_model=ScheduleResponse)
def distribute_schedule(request_body: DistributeRequest):
    """
    Redistribute the total across editable installments.

    Modes:
    - even: split evenly over every editable installment
    - edit: set one amount, rebalance all other editable installments
    - smart: set one amount, rebalance only later pending installments
    """
    today = resolve_today(request_body.today)
    items = request_body.domain_items()
    total_cents = to_cents(request_body.total_amount)

    if request_body.mode == "even":
        return _schedule_response(distribute_even(total_cents, items), today)

    if request_body.edited_index is None or request_body.new_amount is None:
        raise HTTPException(status_code=422, detail="edited_index and new_amount are required for edits")

    index = request_body.edited_index
    if 0 <= index < len(items) and not items[index].is_editable:
        ignored_edit_counter.labels(operation=request_body.mode).inc()

    distribute = distribute_on_edit if request_body.mode == "edit" else smart_distribute
    updated = distribute(total_cents, items, index, to_cents(request_body.new_amount))
    return _schedule_response(updated, today)


@router.post("/schedule/status", response_model=StatusResponse)
def refresh_schedule_status(request_body: ScheduleRequest):
    """Recompute statuses, e.g. from a nightly job after the date rolls over"""
    today = resolve_today(request_body.today)
    items = refresh_statuses(request_body.domain_items(), today)
    base = _schedule_response(items, today)
    return StatusResponse(
        items=base.items,
        currency=base.currency,
        overdue_count=sum(1 for item in items if item.status == PaymentStatus.OVERDUE),
    )


@router.post("/schedule/carry-over", response_model=CarryOverResponse)
def carry_over_schedule(request_body: ScheduleRequest):
    """Move unpaid overdue balances onto the next pending installment"""
    today = resolve_today(request_body.today)
    result = process_carry_over(request_body.domain_items(), today)
    if result.carryover_count:
        carryover_counter.inc(result.carryover_count)

    base = _schedule_response(result.items, today)
    return CarryOverResponse(items=base.items, currency=base.currency, carryover_count=result.carryover_count)


@router.post("/schedule/validate", response_model=ValidateResponse)
def validate_schedule(request_body: ValidateRequest):
    """Check every schedule rule and report all violations"""
    result = validate(
        request_body.domain_items(),
        to_cents(request_body.total_amount),
        tolerance_cents=settings.amount_tolerance_cents,
    )
    if not result.ok:
        validation_failure_counter.inc()
        logging.warning("Schedule failed validation", extra={"errors": result.errors})
    return ValidateResponse(ok=result.ok, errors=result.errors)

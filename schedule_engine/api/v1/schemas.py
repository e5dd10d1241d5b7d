"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from schedule_engine.domain.models import (
    CascadeEntry,
    PaymentStatus,
    ScheduleFrequency,
    ScheduleItem,
)
from schedule_engine.utils.money import from_cents, to_cents


class ScheduleItemSchema(BaseModel):
    """Single installment as exchanged with the UI"""

    id: Optional[Union[int, str]] = None
    installment_number: int = Field(..., gt=0)
    original_due_date: Optional[date] = None
    current_due_date: date
    original_due_amount: Optional[Decimal] = Field(None, ge=0)
    current_due_amount: Decimal = Field(..., ge=0)
    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    carried_over_amount: Decimal = Field(Decimal("0"), ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    locked: bool = False
    is_past_due: Optional[bool] = None
    is_editable: Optional[bool] = None

    def to_domain(self) -> ScheduleItem:
        current_cents = to_cents(self.current_due_amount)
        return ScheduleItem(
            id=self.id,
            installment_number=self.installment_number,
            original_due_date=self.original_due_date or self.current_due_date,
            current_due_date=self.current_due_date,
            original_due_amount_cents=(
                to_cents(self.original_due_amount) if self.original_due_amount is not None else current_cents
            ),
            current_due_amount_cents=current_cents,
            paid_amount_cents=to_cents(self.paid_amount),
            carried_over_amount_cents=to_cents(self.carried_over_amount),
            status=self.payment_status,
            locked=self.locked,
        )

    @classmethod
    def from_domain(cls, item: ScheduleItem, today: date) -> "ScheduleItemSchema":
        return cls(
            id=item.id,
            installment_number=item.installment_number,
            original_due_date=item.original_due_date,
            current_due_date=item.current_due_date,
            original_due_amount=from_cents(item.original_due_amount_cents),
            current_due_amount=from_cents(item.current_due_amount_cents),
            paid_amount=from_cents(item.paid_amount_cents),
            carried_over_amount=from_cents(item.carried_over_amount_cents),
            payment_status=item.status,
            locked=item.locked,
            is_past_due=item.is_past_due(today),
            is_editable=item.is_editable,
        )


class ScheduleRequest(BaseModel):
    """Base body carrying a schedule and the evaluation date"""

    items: List[ScheduleItemSchema]
    today: Optional[date] = Field(None, description="Evaluation date, defaults to the server date")

    def domain_items(self) -> List[ScheduleItem]:
        return [item.to_domain() for item in self.items]


class ScheduleResponse(BaseModel):
    """Updated schedule returned to the caller for persistence"""

    items: List[ScheduleItemSchema]
    currency: str


class DatesRequest(BaseModel):
    """Request body for POST /v1/schedule/dates"""

    frequency: ScheduleFrequency
    start_date: str = Field(..., description="First due date, YYYY-MM-DD")
    count: int = Field(..., description="Number of installments")


class DatesResponse(BaseModel):
    """Response for POST /v1/schedule/dates"""

    dates: List[date]


class GenerateRequest(DatesRequest):
    """Request body for POST /v1/schedule/generate"""

    total_amount: Decimal = Field(..., ge=0)
    today: Optional[date] = None


class DistributeRequest(ScheduleRequest):
    """Request body for POST /v1/schedule/distribute"""

    total_amount: Decimal = Field(..., ge=0)
    mode: Literal["even", "edit", "smart"] = "even"
    edited_index: Optional[int] = None
    new_amount: Optional[Decimal] = Field(None, ge=0)


class StatusResponse(ScheduleResponse):
    """Response for POST /v1/schedule/status"""

    overdue_count: int


class CarryOverResponse(ScheduleResponse):
    """Response for POST /v1/schedule/carry-over"""

    carryover_count: int


class CascadePaymentRequest(ScheduleRequest):
    """Request body for POST /v1/schedule/payments/cascade"""

    amount: Decimal = Field(..., ge=0)
    start_index: int = Field(0, ge=0)


class CascadeEntrySchema(BaseModel):
    """Portion of a payment applied to one installment"""

    schedule_item_id: str
    installment_number: int
    amount_applied: Decimal
    previous_balance: Decimal
    new_balance: Decimal
    new_status: PaymentStatus

    @classmethod
    def from_domain(cls, entry: CascadeEntry) -> "CascadeEntrySchema":
        return cls(
            schedule_item_id=entry.schedule_item_id,
            installment_number=entry.installment_number,
            amount_applied=from_cents(entry.amount_applied_cents),
            previous_balance=from_cents(entry.previous_balance_cents),
            new_balance=from_cents(entry.new_balance_cents),
            new_status=entry.new_status,
        )


class CascadePaymentResponse(ScheduleResponse):
    """Response for POST /v1/schedule/payments/cascade"""

    affected_installments: List[CascadeEntrySchema]
    remaining_amount: Decimal
    total_processed: Decimal
    overpayment: bool
    message: Optional[str] = None


class ValidateRequest(ScheduleRequest):
    """Request body for POST /v1/schedule/validate"""

    total_amount: Decimal = Field(..., ge=0)


class ValidateResponse(BaseModel):
    """Response for POST /v1/schedule/validate"""

    ok: bool
    errors: List[str]

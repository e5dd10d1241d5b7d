"""Domain models - immutable dataclasses representing schedule entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union

from schedule_engine.domain.exceptions import InvalidArgumentError


class PaymentStatus(str, Enum):
    """Lifecycle status of a single installment"""

    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"
    WRITTEN_OFF = "WRITTEN_OFF"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.CANCELLED, PaymentStatus.WRITTEN_OFF)

    @property
    def is_payable(self) -> bool:
        return self not in (PaymentStatus.PAID, PaymentStatus.CANCELLED, PaymentStatus.WRITTEN_OFF)


class ScheduleFrequency(str, Enum):
    """How due dates are spaced when a schedule is generated"""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"
    CUSTOM = "CUSTOM"  # dates entered manually


@dataclass(frozen=True)
class ScheduleItem:
    """Single installment in a payment schedule"""

    installment_number: int
    original_due_date: date
    current_due_date: date
    original_due_amount_cents: int
    current_due_amount_cents: int
    paid_amount_cents: int = 0
    carried_over_amount_cents: int = 0
    status: PaymentStatus = PaymentStatus.PENDING
    id: Optional[Union[int, str]] = None
    locked: bool = False

    def __post_init__(self) -> None:
        if self.installment_number <= 0:
            raise InvalidArgumentError(
                f"Installment number must be positive, got {self.installment_number}"
            )
        for name in (
            "original_due_amount_cents",
            "current_due_amount_cents",
            "paid_amount_cents",
            "carried_over_amount_cents",
        ):
            if getattr(self, name) < 0:
                raise InvalidArgumentError(f"{name} must not be negative")
        if self.paid_amount_cents > self.current_due_amount_cents:
            raise InvalidArgumentError(
                f"Installment {self.installment_number} paid amount exceeds its due amount"
            )

    @property
    def balance_cents(self) -> int:
        return self.current_due_amount_cents - self.paid_amount_cents

    @property
    def has_payment(self) -> bool:
        return self.paid_amount_cents > 0

    @property
    def is_editable(self) -> bool:
        """Date and amount may change only before any payment or lock"""
        return self.status == PaymentStatus.PENDING and not self.locked and not self.has_payment

    def is_past_due(self, today: date) -> bool:
        return self.current_due_date < today and self.balance_cents > 0


@dataclass(frozen=True)
class CascadeEntry:
    """Portion of a cascade payment applied to one installment"""

    schedule_item_id: str
    installment_number: int
    amount_applied_cents: int
    previous_balance_cents: int
    new_balance_cents: int
    new_status: PaymentStatus


@dataclass(frozen=True)
class PaymentCascadeResult:
    """Outcome of applying one payment across a schedule"""

    entries: List[CascadeEntry]
    remaining_amount_cents: int
    total_processed_cents: int
    updated_items: List[ScheduleItem] = field(default_factory=list)

    @property
    def is_overpayment(self) -> bool:
        return self.remaining_amount_cents > 0


@dataclass(frozen=True)
class CarryOverResult:
    """Schedule after overdue balances were moved forward"""

    items: List[ScheduleItem]
    carryover_count: int


@dataclass(frozen=True)
class ValidationResult:
    """All schedule rule violations found by the validator"""

    ok: bool
    errors: List[str]


@dataclass(frozen=True)
class DateCheck:
    """Result of checking a proposed due date against its neighbours"""

    is_valid: bool
    error_message: Optional[str] = None

"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Callable, List
from fastapi.testclient import TestClient
from schedule_engine.api.main import create_app
from schedule_engine.domain.models import PaymentStatus, ScheduleItem


TODAY = date(2025, 6, 15)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def today() -> date:
    """Fixed evaluation date so status rules are deterministic"""
    return TODAY


@pytest.fixture
def make_item() -> Callable[..., ScheduleItem]:
    """Factory for schedule items with sensible defaults"""

    def _make(
        number: int,
        due_cents: int = 0,
        paid_cents: int = 0,
        due_date: date | None = None,
        status: PaymentStatus = PaymentStatus.PENDING,
        **kwargs,
    ) -> ScheduleItem:
        due_date = due_date or TODAY + timedelta(days=30 * number)
        return ScheduleItem(
            installment_number=number,
            original_due_date=due_date,
            current_due_date=due_date,
            original_due_amount_cents=due_cents,
            current_due_amount_cents=due_cents,
            paid_amount_cents=paid_cents,
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def empty_schedule(make_item) -> List[ScheduleItem]:
    """Three PENDING installments with no amounts yet"""
    return [make_item(n) for n in (1, 2, 3)]

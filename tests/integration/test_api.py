"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def schedule_payload():
    """Three pending installments for 1000.00 as the UI sends them"""
    return [
        {"installment_number": 1, "current_due_date": "2025-07-01", "current_due_amount": "333.33"},
        {"installment_number": 2, "current_due_date": "2025-08-01", "current_due_amount": "333.33"},
        {"installment_number": 3, "current_due_date": "2025-09-01", "current_due_amount": "333.34"},
    ]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "schedule_cascade_payments_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_dates_endpoint(client: TestClient):
    response = client.post(
        "/v1/schedule/dates",
        json={"frequency": "MONTHLY", "start_date": "2025-01-31", "count": 3},
    )

    assert response.status_code == 200
    assert response.json()["dates"] == ["2025-01-31", "2025-02-28", "2025-03-31"]


def test_dates_endpoint_rejects_zero_count(client: TestClient):
    response = client.post(
        "/v1/schedule/dates",
        json={"frequency": "DAILY", "start_date": "2025-01-01", "count": 0},
    )
    assert response.status_code == 422


def test_dates_endpoint_rejects_dates_past_year_9999(client: TestClient):
    response = client.post(
        "/v1/schedule/dates",
        json={"frequency": "MONTHLY", "start_date": "9999-11-01", "count": 5},
    )
    assert response.status_code == 422


def test_generate_endpoint(client: TestClient):
    response = client.post(
        "/v1/schedule/generate",
        json={
            "frequency": "WEEKLY",
            "start_date": "2025-07-01",
            "count": 3,
            "total_amount": "1000.00",
            "today": "2025-06-15",
        },
    )

    assert response.status_code == 200
    items = response.json()["items"]
    assert [i["current_due_amount"] for i in items] == ["333.33", "333.33", "333.34"]
    assert [i["payment_status"] for i in items] == ["PENDING"] * 3
    assert all(i["is_editable"] for i in items)


def test_distribute_edit_mode(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/distribute",
        json={
            "items": schedule_payload,
            "total_amount": "1000.00",
            "mode": "edit",
            "edited_index": 0,
            "new_amount": "400.00",
        },
    )

    assert response.status_code == 200
    assert [i["current_due_amount"] for i in response.json()["items"]] == ["400.00", "300.00", "300.00"]


def test_distribute_requires_edit_fields(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/distribute",
        json={"items": schedule_payload, "total_amount": "1000.00", "mode": "smart"},
    )
    assert response.status_code == 422


def test_distribute_overcommit_is_rejected(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/distribute",
        json={
            "items": schedule_payload,
            "total_amount": "1000.00",
            "mode": "edit",
            "edited_index": 1,
            "new_amount": "1500.00",
        },
    )
    assert response.status_code == 422


def test_status_endpoint_counts_overdue(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/status",
        json={"items": schedule_payload, "today": "2025-08-15"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["overdue_count"] == 2
    assert [i["is_past_due"] for i in data["items"]] == [True, True, False]


def test_carry_over_endpoint(client: TestClient, schedule_payload):
    schedule_payload[0]["paid_amount"] = "133.33"
    schedule_payload[0]["payment_status"] = "PARTIALLY_PAID"

    response = client.post(
        "/v1/schedule/carry-over",
        json={"items": schedule_payload, "today": "2025-07-10"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["carryover_count"] == 1
    assert data["items"][0]["carried_over_amount"] == "200.00"
    assert data["items"][1]["current_due_amount"] == "533.33"
    assert data["items"][1]["carried_over_amount"] == "200.00"


def test_cascade_payment_endpoint(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/payments/cascade",
        json={"items": schedule_payload, "amount": "500.00", "start_index": 0, "today": "2025-06-15"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["total_processed"] == "500.00"
    assert data["remaining_amount"] == "0.00"
    assert data["overpayment"] is False
    assert [e["new_status"] for e in data["affected_installments"]] == ["PAID", "PARTIALLY_PAID"]
    assert data["items"][1]["paid_amount"] == "166.67"


def test_cascade_payment_reports_overpayment(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/payments/cascade",
        json={"items": schedule_payload, "amount": "1200.00", "today": "2025-06-15"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["overpayment"] is True
    assert data["remaining_amount"] == "200.00"
    assert data["message"] == "Payment exceeds total balance by PHP 200.00"


def test_cascade_rejects_start_index_out_of_range(client: TestClient, schedule_payload):
    response = client.post(
        "/v1/schedule/payments/cascade",
        json={"items": schedule_payload, "amount": "10.00", "start_index": 9},
    )
    assert response.status_code == 422


def test_validate_endpoint(client: TestClient, schedule_payload):
    schedule_payload[2]["current_due_amount"] = "328.34"

    response = client.post(
        "/v1/schedule/validate",
        json={"items": schedule_payload, "total_amount": "1000.00"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["ok"] is False
    assert data["errors"] == ["Total amount mismatch: Expected 1000.00, Got 995.00"]

"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def mortgage_request() -> dict:
    return {
        "account": {
            "id": "mtg-1",
            "type": "MORTGAGE",
            "name": "Home Mortgage",
            "opening_balance": -300000,
            "current_balance": -200000,
            "interest_rate": 4.0,
            "is_canadian_mortgage": True,
            "payment_amount": 1500,
            "payment_frequency": "MONTHLY",
        },
        "transactions": [
            {"id": "txn-1", "account_id": "mtg-1", "transaction_date": "2024-06-01", "amount": 1000},
            {"id": "txn-x", "account_id": "chq-1", "transaction_date": "2024-06-01", "amount": 5000},
        ],
        "today": "2025-01-15",
    }


@pytest.fixture
def forecast_request() -> dict:
    return {
        "accounts": [
            {"id": "chq-1", "type": "CHEQUING", "current_balance": 1000},
            {"id": "inv-1", "type": "INVESTMENT", "current_balance": 50000},
        ],
        "scheduled_transactions": [
            {
                "id": "st-1",
                "account_id": "chq-1",
                "name": "Rent",
                "amount": -1500,
                "frequency": "MONTHLY",
                "next_due_date": "2025-02-01",
            },
            {
                "id": "st-2",
                "account_id": "chq-1",
                "name": "Paycheque",
                "amount": 2000,
                "frequency": "BIWEEKLY",
                "next_due_date": "2025-01-24",
                "next_override_amount": 2100,
            },
        ],
        "period": "month",
        "today": "2025-01-15",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, mortgage_request: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/debt/payoff-schedule", json=mortgage_request)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "ledger_projection_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_payoff_schedule_endpoint(client: TestClient, mortgage_request: dict):
    """Test POST /v1/debt/payoff-schedule for the mortgage scenario"""
    response = client.post("/v1/debt/payoff-schedule", json=mortgage_request)

    assert response.status_code == 200
    data = response.json()
    assert data["account_id"] == "mtg-1"
    assert data["status"] == "paid_off"

    schedule = data["payoff_schedule"]
    assert schedule[0]["label"] == "Jun 2024"
    assert schedule[0]["principal_paid"] == 1000
    assert schedule[0]["is_projected"] is False
    assert len(schedule) <= 61

    projected = [b for b in schedule if b["is_projected"]]
    assert data["projection_start_label"] == projected[0]["label"]

    # Transactions on other accounts are ignored
    assert data["payoff_summary"]["historical_payment_count"] == 1
    assert data["payoff_summary"]["original_balance"] == 300000
    assert data["payoff_summary"]["percent_paid"] == 33.33
    assert data["payoff_summary"]["projected_payoff_date"] == projected[-1]["date"]
    assert data["summary"]["ending_balance"] == 0


def test_payoff_schedule_non_amortizing(client: TestClient, mortgage_request: dict):
    """Payment below interest is a status, not an error"""
    mortgage_request["account"]["payment_amount"] = 500
    response = client.post("/v1/debt/payoff-schedule", json=mortgage_request)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "non_amortizing"
    assert data["projection_start_label"] is None
    assert data["payoff_summary"]["projected_payoff_date"] is None


def test_payoff_schedule_rejects_non_debt_account(client: TestClient, mortgage_request: dict):
    mortgage_request["account"]["type"] = "CHEQUING"
    response = client.post("/v1/debt/payoff-schedule", json=mortgage_request)
    assert response.status_code == 422


def test_payoff_schedule_validation(client: TestClient):
    response = client.post("/v1/debt/payoff-schedule", json={"transactions": []})
    assert response.status_code == 422


def test_forecast_endpoint(client: TestClient, forecast_request: dict):
    """Test POST /v1/forecast across all accounts"""
    response = client.post("/v1/forecast", json=forecast_request)

    assert response.status_code == 200
    data = response.json()
    assert data["period"] == "month"
    assert data["account_id"] == "all"

    points = data["data_points"]
    # Investment accounts are left out of the aggregate
    assert points[0]["balance"] == 1000
    assert points[0]["date"] == "2025-01-15"
    assert points[-1]["date"] == "2025-02-14"

    by_date = {p["date"]: p for p in points}
    assert by_date["2025-01-24"]["balance"] == 3100  # overridden first paycheque
    assert by_date["2025-02-01"]["balance"] == 1600
    assert by_date["2025-02-07"]["balance"] == 3600
    assert by_date["2025-02-01"]["transactions"][0]["scheduled_transaction_id"] == "st-1"

    summary = data["summary"]
    assert summary["starting_balance"] == 1000
    assert summary["ending_balance"] == 3600
    assert summary["max_balance"] == 3600
    assert summary["goes_negative"] is False


def test_forecast_single_account(client: TestClient, forecast_request: dict):
    forecast_request["account_id"] = "inv-1"
    forecast_request["period"] = "week"
    response = client.post("/v1/forecast", json=forecast_request)

    assert response.status_code == 200
    points = response.json()["data_points"]
    assert len(points) == 8
    assert all(p["balance"] == 50000 for p in points)


def test_forecast_goes_negative(client: TestClient, forecast_request: dict):
    forecast_request["scheduled_transactions"] = forecast_request["scheduled_transactions"][:1]
    response = client.post("/v1/forecast", json=forecast_request)

    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["min_balance"] == -500
    assert summary["goes_negative"] is True


def test_forecast_unknown_account(client: TestClient, forecast_request: dict):
    forecast_request["account_id"] = "missing"
    response = client.post("/v1/forecast", json=forecast_request)
    assert response.status_code == 404


def test_forecast_unknown_period(client: TestClient, forecast_request: dict):
    forecast_request["period"] = "decade"
    response = client.post("/v1/forecast", json=forecast_request)
    assert response.status_code == 422


def test_forecast_periods_endpoint(client: TestClient):
    response = client.get("/v1/forecast/periods")

    assert response.status_code == 200
    periods = {p["period"]: p for p in response.json()}
    assert periods["90days"] == {"period": "90days", "days": 90, "label": "90D"}
    assert periods["year"]["days"] == 365
    assert len(periods) == 5

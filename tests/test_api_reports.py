from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from yachtbook import database
from yachtbook.config import reset_settings
from yachtbook.database import get_db
from yachtbook.main import app


@pytest.fixture
def client(ledger, monkeypatch):
    monkeypatch.setenv("YACHTBOOK_BASE_CURRENCY", "eur")
    reset_settings()

    def override_get_db():
        yield ledger

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    reset_settings()


def test_health_reports_open_ledger(engine):
    database.use_engine(engine)
    try:
        response = TestClient(app).get("/health")
    finally:
        database.close_ledger()

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "ledger_open": True}


def test_annual_report(client):
    response = client.get("/api/reports/annual/2025")

    assert response.status_code == 200
    data = response.json()
    assert data["year"] == 2025
    assert data["period"] == {"start_date": "2025-01-01", "end_date": "2025-12-31"}
    assert Decimal(data["total_income"]) == Decimal("3000")
    assert Decimal(data["grand_total"]) == Decimal("1100")
    assert Decimal(data["remaining_money"]) == Decimal("1900")
    assert [m["month"] for m in data["monthly_totals"]] == list(range(1, 13))
    fuel = data["category_breakdowns"][0]
    assert fuel["category_name"] == "Fuel"
    assert Decimal(fuel["monthly_amounts"]["1"]) == Decimal("600")


def test_annual_report_rejects_out_of_range_year(client):
    assert client.get("/api/reports/annual/0").status_code == 422


def test_period_report_by_dates(client):
    response = client.get(
        "/api/reports/period",
        params={"start_date": "2025-02-01", "end_date": "2025-02-28"},
    )

    assert response.status_code == 200
    assert Decimal(response.json()["total_expense"]) == Decimal("300")


def test_period_report_rejects_inverted_range(client):
    response = client.get(
        "/api/reports/period",
        params={"start_date": "2025-03-01", "end_date": "2025-02-01"},
    )

    assert response.status_code == 400


def test_parsed_period_report(client):
    response = client.get("/api/reports/period/MONTH/2025-03")

    assert response.status_code == 200
    assert response.json()["period"] == {"start_date": "2025-03-01", "end_date": "2025-03-31"}
    assert Decimal(response.json()["total_expense"]) == Decimal("200")


def test_parsed_period_report_rejects_bad_value(client):
    assert client.get("/api/reports/period/MONTH/2025-13").status_code == 400
    assert client.get("/api/reports/period/WEEK/2025").status_code == 422


def test_dashboard_summary(client):
    response = client.get(
        "/api/reports/summary",
        params={"start_date": "2025-01-01", "end_date": "2025-06-30"},
    )

    data = response.json()
    assert Decimal(data["balance"]) == Decimal("1900")
    assert data["income_count"] == 1
    assert data["expense_count"] == 5


def test_expense_tree(client):
    response = client.get(
        "/api/reports/expense-tree",
        params={"start_date": "2025-01-01", "end_date": "2025-12-31"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "EUR"
    assert Decimal(data["total_amount"]) == Decimal("1100")
    technical = data["rows"][0]
    assert technical["type"] == "CLASSIFICATION"
    assert technical["name_en"] == "Technical"
    assert Decimal(technical["percentage"]) == Decimal("81.82")
    assert technical["child_count"] == 1
    actor = technical["children"][0]["children"][0]
    assert actor["type"] == "ACTOR"
    assert actor["level"] == 3


def test_pivot_report(client):
    response = client.get("/api/reports/pivot/2025")

    assert response.status_code == 200
    data = response.json()
    assert data["columns"][0] == "2025-01"
    assert data["columns"][-1] == "TOTAL"
    assert Decimal(data["column_totals"]["TOTAL"]) == Decimal("1100")
    technical = data["rows"][0]
    assert technical["children"][0]["id"].startswith(f"{technical['id']}-")

"""
Tests for expenses and the trip budget summary.
"""
from decimal import Decimal
from conftest import create_trip


def _stop(client, trip_id, city_id, headers):
    return client.post(
        f"/api/trips/{trip_id}/stops",
        json={"city_id": city_id, "start_date": "2026-05-02", "end_date": "2026-05-04"},
        headers=headers
    ).json()


def test_budget_adds_activities_and_expenses(client, user_headers, paris):
    trip = create_trip(client, user_headers, total_budget="1000")
    stop = _stop(client, trip["id"], paris["id"], user_headers)
    client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={"name": "Cooking class", "category": "food", "cost": "150", "duration_hours": "3", "activity_date": "2026-05-03"},
        headers=user_headers
    )
    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"category": "accommodation", "amount": "200", "expense_date": "2026-05-02", "stop_id": stop["id"]},
        headers=user_headers
    )
    assert response.status_code == 201

    budget = client.get(f"/api/trips/{trip['id']}/budget", headers=user_headers).json()
    assert Decimal(budget["activities_cost"]) == Decimal("150")
    assert Decimal(budget["expenses_cost"]) == Decimal("200")
    assert Decimal(budget["total_spent"]) == Decimal("350")
    assert Decimal(budget["remaining"]) == Decimal("650")
    assert budget["fill_ratio"] == 35.0
    assert budget["categories"][0]["category"] == "accommodation"

    detail = client.get(f"/api/trips/{trip['id']}", headers=user_headers).json()
    assert detail["stops"][0]["activities_cost"] == 150.0
    assert len(detail["expenses"]) == 1


def test_over_budget_goes_negative(client, user_headers):
    trip = create_trip(client, user_headers, total_budget="100")
    client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"category": "transport", "amount": "180", "expense_date": "2026-05-01"},
        headers=user_headers
    )
    budget = client.get(f"/api/trips/{trip['id']}/budget", headers=user_headers).json()
    assert Decimal(budget["remaining"]) == Decimal("-80")


def test_expense_validation(client, user_headers, other_headers, paris):
    trip = create_trip(client, user_headers)
    url = f"/api/trips/{trip['id']}/expenses"
    assert client.post(url, json={"amount": "-5", "expense_date": "2026-05-01"}, headers=user_headers).status_code == 400

    foreign_trip = create_trip(client, other_headers)
    foreign_stop = _stop(client, foreign_trip["id"], paris["id"], other_headers)
    response = client.post(
        url,
        json={"amount": "5", "expense_date": "2026-05-01", "stop_id": foreign_stop["id"]},
        headers=user_headers
    )
    assert response.status_code == 400


def test_expense_delete(client, user_headers):
    trip = create_trip(client, user_headers)
    expense = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"amount": "42", "expense_date": "2026-05-01"},
        headers=user_headers
    ).json()
    assert expense["category"] == "other"
    response = client.delete(f"/api/trips/{trip['id']}/expenses/{expense['id']}", headers=user_headers)
    assert response.status_code == 204
    assert client.get(f"/api/trips/{trip['id']}/expenses", headers=user_headers).json() == []


def test_local_trip_budget_has_no_spend(client):
    budget = client.get("/api/trips/mock-1/budget").json()
    assert Decimal(budget["total_budget"]) == Decimal("5000")
    assert Decimal(budget["remaining"]) == Decimal("5000")
    assert client.post(
        "/api/trips/mock-1/expenses",
        json={"amount": "5", "expense_date": "2024-06-16"}
    ).status_code == 409

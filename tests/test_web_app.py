"""Mini README: Tests for the FastAPI expense interface.

The application is created around an in-memory store so no files are
written; the ``TestClient`` drives requests through the real routes.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from iexpense.configuration import IExpenseSettings
from iexpense.expenses import ExpenseStore, InMemoryBackend, ManualScheduler
from iexpense.interface import create_application


@pytest.fixture()
def client(tmp_path):
    settings = IExpenseSettings(data_directory=tmp_path, currency="EUR")
    store = ExpenseStore(InMemoryBackend(), scheduler=ManualScheduler())
    with TestClient(create_application(store=store, settings=settings)) as test_client:
        yield test_client


def test_add_and_list_expenses(client) -> None:
    response = client.post(
        "/expenses",
        data={"name": " Coffee ", "amount": "4.5", "category": "personal", "date": "2025-06-25T08:30:00"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Coffee"
    assert created["highlighted"] is True
    assert created["icon"] == "person.fill"
    assert created["display_amount"] == "EUR 4.50"

    listing = client.get("/expenses").json()
    assert [entry["id"] for entry in listing["expenses"]["Personal"]] == [created["id"]]
    assert listing["expenses"]["Business"] == []
    assert listing["summary"]["total"] == pytest.approx(4.5)


def test_invalid_expense_is_rejected(client) -> None:
    response = client.post("/expenses", data={"name": "  ", "amount": "3", "category": "Personal"})

    assert response.status_code == 400
    assert client.get("/summary").json()["count"] == 0


def test_remove_and_clear(client) -> None:
    ids = [
        client.post("/expenses", data={"name": name, "amount": amount, "category": category}).json()["id"]
        for name, amount, category in [("Rent", "900", "Personal"), ("Laptop", "1200", "Business"), ("Pens", "5", "Business")]
    ]

    assert client.delete(f"/expenses/{ids[0]}").json()["summary"]["personal"] == 0
    assert client.delete(f"/expenses/{ids[0]}").status_code == 404

    summary = client.post("/expenses/remove", json={"ids": [ids[1]]}).json()["summary"]
    assert summary["business"] == pytest.approx(5.0)

    cleared = client.delete("/expenses").json()["summary"]
    assert cleared["total"] == 0
    assert cleared["count"] == 0


def test_summary_reports_currency(client) -> None:
    client.post("/expenses", data={"name": "Train", "amount": "25", "category": "Business"})
    client.post("/expenses", data={"name": "Lunch", "amount": "10", "category": "Personal"})

    summary = client.get("/summary").json()

    assert summary == {"total": 35.0, "personal": 10.0, "business": 25.0, "count": 2, "currency": "EUR"}


def test_non_finite_amount_is_rejected(client) -> None:
    client.post("/expenses", data={"name": "Rent", "amount": "900", "category": "Personal"})

    response = client.post("/expenses", data={"name": "Oops", "amount": "nan", "category": "Personal"})

    assert response.status_code == 400
    assert client.get("/summary").json()["total"] == pytest.approx(900.0)


def test_keypad_amount_digits(client) -> None:
    response = client.post("/expenses", data={"name": "Snack", "amount_digits": "$1,250", "category": "Personal"})

    assert response.status_code == 201
    assert response.json()["amount"] == pytest.approx(12.50)


def test_missing_amount_is_rejected(client) -> None:
    response = client.post("/expenses", data={"name": "Snack", "category": "Personal"})

    assert response.status_code == 400

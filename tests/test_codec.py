"""Mini README: Tests for the expense JSON codec and key-value backends."""

from __future__ import annotations

import json
from datetime import datetime
from uuid import UUID

import pytest
from pydantic import ValidationError

from iexpense.expenses import (
    ExpenseCategory,
    ExpenseCodec,
    ExpenseItem,
    InMemoryBackend,
    JsonFileBackend,
)


def test_decode_inverts_encode() -> None:
    """Every field, including id and timestamp, survives a round trip."""

    items = [
        ExpenseItem(
            name="Coffee",
            category=ExpenseCategory.PERSONAL,
            amount=4.5,
            date=datetime(2025, 6, 25, 8, 30, 15, 120000),
        ),
        ExpenseItem(
            name="Conference ticket",
            category=ExpenseCategory.BUSINESS,
            amount=349.99,
            date=datetime(2025, 7, 1),
        ),
    ]
    codec = ExpenseCodec()

    decoded = codec.decode(codec.encode(items))

    assert [item.as_dict() for item in decoded] == [item.as_dict() for item in items]
    assert isinstance(decoded[0].id, UUID)
    assert decoded[1].category is ExpenseCategory.BUSINESS


def test_encoded_payload_uses_wire_field_names() -> None:
    item = ExpenseItem(name="Taxi", category=ExpenseCategory.BUSINESS, amount=18.0, date=datetime(2025, 2, 1, 9))

    (record,) = json.loads(ExpenseCodec().encode([item]))

    assert record == {
        "id": str(item.id),
        "name": "Taxi",
        "type": "Business",
        "amount": 18.0,
        "date": "2025-02-01T09:00:00",
    }


def test_decode_tolerates_garbage() -> None:
    codec = ExpenseCodec()

    assert codec.decode("%%% definitely not json") == []
    assert codec.decode(None) == []
    assert codec.decode("") == []
    assert codec.decode('{"id": "x"}') == []
    assert codec.decode('[{"id": "not-a-uuid", "name": "a", "type": "Personal", "amount": 1, "date": "2025-01-01"}]') == []
    assert codec.decode('[{"id": "2b0e0f1c-33f5-4c2b-9e47-9df0d1fb0c11", "name": "a", "type": "Leisure", "amount": 1, "date": "2025-01-01T00:00:00"}]') == []


def test_load_without_key_is_silent() -> None:
    errors = []
    codec = ExpenseCodec(on_error=errors.append)

    assert codec.load(InMemoryBackend(), "Items") == []
    assert errors == []


def test_json_file_backend_round_trips_and_keeps_other_keys(tmp_path) -> None:
    path = tmp_path / "store" / "expenses.json"
    backend = JsonFileBackend(path)

    assert backend.get("Items") is None
    backend.set("Theme", "dark")
    backend.set("Items", "[]")

    reopened = JsonFileBackend(path)
    assert reopened.get("Items") == "[]"
    assert reopened.get("Theme") == "dark"


def test_json_file_backend_treats_corrupt_file_as_empty(tmp_path) -> None:
    path = tmp_path / "expenses.json"
    path.write_text("not json", encoding="utf-8")

    assert JsonFileBackend(path).get("Items") is None


def test_encode_refuses_non_finite_amounts() -> None:
    item = ExpenseItem(name="Broken", category=ExpenseCategory.PERSONAL, amount=float("nan"))

    with pytest.raises(ValidationError):
        ExpenseCodec().encode([item])

"""Mini README: JSON codec translating expense lists to a storable payload.

Structure:
    * ExpenseRecord - Pydantic model describing one encoded expense.
    * PersistenceError - failure report handed to optional error hooks.
    * ExpenseCodec - encode/decode helpers plus backend load/save wrappers.

Payloads are JSON arrays of records with the fields ``id``, ``name``,
``type``, ``amount`` and ``date`` (ISO-8601). Decoding is forgiving: a
missing, empty or malformed payload yields an empty list. The ``load`` and
``save`` wrappers never raise; failures are logged and passed to the
``on_error`` hook when one is configured. Amounts must be finite; an item
with ``nan`` or ``inf`` fails to encode and the stored payload is left as is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..logging_utils import get_logger
from .backends import KeyValueBackend
from .models import ExpenseCategory, ExpenseItem

LOGGER = get_logger(__name__)


class ExpenseRecord(BaseModel):
    """Wire representation of an ``ExpenseItem``."""

    id: UUID
    name: str
    type: ExpenseCategory
    amount: float = Field(allow_inf_nan=False)
    date: datetime

    @classmethod
    def from_item(cls, item: ExpenseItem) -> "ExpenseRecord":
        return cls(
            id=item.id,
            name=item.name,
            type=item.category,
            amount=item.amount,
            date=item.date,
        )

    def to_item(self) -> ExpenseItem:
        return ExpenseItem(
            id=self.id,
            name=self.name,
            category=self.type,
            amount=self.amount,
            date=self.date,
        )


class PersistenceError(Exception):
    """Describe a failed load or save against the backend."""

    def __init__(self, operation: str, key: str, message: str) -> None:
        super().__init__(f"{operation} of '{key}' failed: {message}")
        self.operation = operation
        self.key = key


ErrorHook = Callable[[PersistenceError], None]

_RECORDS = TypeAdapter(List[ExpenseRecord])


class ExpenseCodec:
    """Encode and decode expense sequences, degrading failures to no data."""

    def __init__(self, on_error: Optional[ErrorHook] = None) -> None:
        self.on_error = on_error

    def encode(self, items: Iterable[ExpenseItem]) -> str:
        records = [ExpenseRecord.from_item(item) for item in items]
        return _RECORDS.dump_json(records).decode("utf-8")

    def decode(self, payload: Optional[str]) -> List[ExpenseItem]:
        try:
            return self._parse(payload)
        except ValidationError as error:
            LOGGER.warning("Discarding undecodable expense payload (%s errors)", error.error_count())
            return []

    def load(self, backend: KeyValueBackend, key: str) -> List[ExpenseItem]:
        """Read and decode ``key``; any failure results in an empty list."""

        try:
            return self._parse(backend.get(key))
        except Exception as error:  # noqa: BLE001
            self._report("load", key, error)
            return []

    def save(self, backend: KeyValueBackend, key: str, items: Iterable[ExpenseItem]) -> bool:
        """Encode ``items`` and write them under ``key``; return success."""

        try:
            backend.set(key, self.encode(items))
        except Exception as error:  # noqa: BLE001
            self._report("save", key, error)
            return False
        return True

    @staticmethod
    def _parse(payload: Optional[str]) -> List[ExpenseItem]:
        if not payload:
            return []
        return [record.to_item() for record in _RECORDS.validate_json(payload)]

    def _report(self, operation: str, key: str, error: Exception) -> None:
        LOGGER.warning("Expense %s for key '%s' failed: %s", operation, key, error)
        if self.on_error is None:
            return
        failure = PersistenceError(operation, key, str(error))
        failure.__cause__ = error
        self.on_error(failure)

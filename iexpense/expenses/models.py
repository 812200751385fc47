"""Mini README: Domain types for recorded expenses.

Structure:
    * ExpenseCategory - enum of the two supported expense categories.
    * ExpenseItem - immutable record describing one expense.

Items never change after construction. Corrections are made by removing the
item from the store and adding a replacement, which receives a new id.
Presentation metadata (icons, colours) lives in ``iexpense.presentation``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict
from uuid import UUID, uuid4


class ExpenseCategory(str, Enum):
    """Enumerate the supported expense categories."""

    PERSONAL = "Personal"
    BUSINESS = "Business"

    @classmethod
    def from_str(cls, value: str) -> "ExpenseCategory":
        """Coerce arbitrary casing into a valid category."""

        try:
            normalised = value.strip().lower()
        except AttributeError as error:
            raise ValueError(f"Unsupported expense category: {value}") from error
        for category in cls:
            if category.value.lower() == normalised:
                return category
        raise ValueError(f"Unsupported expense category: {value}")


@dataclass(frozen=True, slots=True, eq=False)
class ExpenseItem:
    """A single recorded expense, identified solely by ``id``."""

    name: str
    category: ExpenseCategory
    amount: float
    date: datetime = field(default_factory=datetime.now)
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpenseItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def as_dict(self) -> Dict[str, object]:
        """Export the item with serialisable values using the wire field names."""

        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.category.value,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }

"""Mini README: Display metadata for expense categories and amounts.

Structure:
    * CategoryStyle - icon and colour identifiers for a category.
    * CATEGORY_STYLES - lookup table keyed by ``ExpenseCategory``.
    * amount_tier - colour band for an amount (small, medium, large).
    * format_amount - two-decimal amount string with a currency code.

Only interfaces import this module; the expense core has no rendering
concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .expenses.models import ExpenseCategory


@dataclass(frozen=True, slots=True)
class CategoryStyle:
    """Presentation hints attached to a category."""

    icon: str
    color: str


CATEGORY_STYLES: Dict[ExpenseCategory, CategoryStyle] = {
    ExpenseCategory.PERSONAL: CategoryStyle(icon="person.fill", color="blue"),
    ExpenseCategory.BUSINESS: CategoryStyle(icon="briefcase.fill", color="green"),
}


def amount_tier(amount: float) -> str:
    """Return the colour used to render ``amount``."""

    if amount < 10:
        return "green"
    if amount < 100:
        return "orange"
    return "red"


def format_amount(amount: float, currency: str = "USD") -> str:
    return f"{currency} {amount:,.2f}"

"""Mini README: Input helpers for building expenses from user entry.

Structure:
    * EntryError - raised when submitted fields cannot form an expense.
    * parse_amount_digits - interpret keypad-style amount text.
    * build_entry - validate raw fields and construct an ``ExpenseItem``.

The store trusts what it is given, so interfaces call these helpers before
``ExpenseStore.add``. Amount text follows the cash-register convention of
the add form: every digit typed shifts the value left, and the last two
digits are cents, so ``"1250"`` and ``"$12.50"`` both mean 12.50.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Union

from .models import ExpenseCategory, ExpenseItem


class EntryError(ValueError):
    """Submitted expense fields failed validation."""


def parse_amount_digits(text: str) -> float:
    """Return the amount encoded by the digits in ``text`` (cents last)."""

    digits = "".join(character for character in text if character.isdigit())
    if not digits:
        return 0.0
    return int(digits) / 100


def build_entry(
    name: str,
    amount: Union[float, str],
    category: Union[ExpenseCategory, str],
    date: Optional[datetime] = None,
) -> ExpenseItem:
    """Validate raw form values and return a new expense."""

    trimmed = (name or "").strip()
    if not trimmed:
        raise EntryError("Expense name must not be empty.")
    value = parse_amount_digits(amount) if isinstance(amount, str) else float(amount)
    if not math.isfinite(value):
        raise EntryError("Expense amount must be a finite number.")
    if value <= 0:
        raise EntryError("Expense amount must be greater than zero.")
    if not isinstance(category, ExpenseCategory):
        try:
            category = ExpenseCategory.from_str(category)
        except ValueError as error:
            raise EntryError(str(error)) from error
    return ExpenseItem(
        name=trimmed,
        category=category,
        amount=value,
        date=date or datetime.now(),
    )

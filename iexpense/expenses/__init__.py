"""Mini README: Expense tracking core for iExpense.

This package holds the domain types, the JSON persistence codec, the
key-value backends, and the ``ExpenseStore`` that ties them together with
write-through persistence and short-lived highlights for new entries.
Interfaces build on the store; nothing here knows about rendering.
"""

from .backends import InMemoryBackend, JsonFileBackend, KeyValueBackend
from .codec import ExpenseCodec, ExpenseRecord, PersistenceError
from .entry import EntryError, build_entry, parse_amount_digits
from .models import ExpenseCategory, ExpenseItem
from .scheduler import AsyncioScheduler, DelayedTask, ManualScheduler, Scheduler, SchedulerUnavailable
from .store import ExpenseStore

__all__ = [
    "AsyncioScheduler",
    "DelayedTask",
    "EntryError",
    "ExpenseCategory",
    "ExpenseCodec",
    "ExpenseItem",
    "ExpenseRecord",
    "ExpenseStore",
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
    "ManualScheduler",
    "PersistenceError",
    "Scheduler",
    "SchedulerUnavailable",
    "build_entry",
    "parse_amount_digits",
]

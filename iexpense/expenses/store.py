"""Mini README: Expense store with write-through persistence.

Structure:
    * ExpenseStore - owns the ordered expense list, persists it after every
      mutation, derives category totals, and tracks recently added items.

The store is constructed once per process and passed to the presentation
layer. It expects a single coordination context (one thread or one event
loop), so no locking is performed. Persistence problems never reach the
caller: a failed load starts from an empty list and a failed save leaves the
in-memory state untouched until the next successful write.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple
from uuid import UUID

from ..logging_utils import get_logger
from .backends import KeyValueBackend
from .codec import ErrorHook, ExpenseCodec
from .models import ExpenseCategory, ExpenseItem
from .scheduler import AsyncioScheduler, DelayedTask, Scheduler, SchedulerUnavailable

LOGGER = get_logger(__name__)

DEFAULT_KEY = "Items"
DEFAULT_HIGHLIGHT_DELAY = 1.0


class ExpenseStore:
    """Manage recorded expenses and derive aggregates for display."""

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        key: str = DEFAULT_KEY,
        codec: Optional[ExpenseCodec] = None,
        scheduler: Optional[Scheduler] = None,
        highlight_delay: float = DEFAULT_HIGHLIGHT_DELAY,
        on_error: Optional[ErrorHook] = None,
    ) -> None:
        self._backend = backend
        self._key = key
        self._codec = codec or ExpenseCodec(on_error=on_error)
        if codec is not None and on_error is not None:
            self._codec.on_error = on_error
        self._scheduler = scheduler or AsyncioScheduler()
        self._highlight_delay = highlight_delay
        self._items: List[ExpenseItem] = []
        self._highlighted: Set[UUID] = set()
        self._expiry_tasks: Dict[UUID, DelayedTask] = {}
        self._closed = False
        self.load()

    def load(self) -> None:
        """Replace the in-memory list with the persisted one."""

        items: List[ExpenseItem] = []
        seen: Set[UUID] = set()
        for item in self._codec.load(self._backend, self._key):
            if item.id in seen:
                LOGGER.warning("Skipping duplicate persisted expense %s", item.id)
                continue
            seen.add(item.id)
            items.append(item)
        self._items = items
        LOGGER.debug("Expense store loaded %s items from key '%s'", len(self._items), self._key)

    def _persist(self) -> None:
        self._codec.save(self._backend, self._key, self._items)

    def add(self, item: ExpenseItem) -> None:
        """Append ``item``, highlight it briefly, and persist the list."""

        if any(existing.id == item.id for existing in self._items):
            LOGGER.warning("Expense %s is already recorded; ignoring duplicate add", item.id)
            return
        self._items.append(item)
        self._persist()
        self._highlight(item.id)
        LOGGER.info("Added %s expense '%s' (%.2f)", item.category.value, item.name, item.amount)

    def remove(self, ids: Iterable[UUID]) -> None:
        """Drop every item whose id is in ``ids``; unknown ids are ignored."""

        doomed = set(ids)
        before = len(self._items)
        self._items = [item for item in self._items if item.id not in doomed]
        self._persist()
        LOGGER.info("Removed %s expenses", before - len(self._items))

    def remove_from_category(self, category: ExpenseCategory, positions: Iterable[int]) -> None:
        """Remove items by their positions within the ``category`` view."""

        view = self.by_category(category)
        ids = {view[position].id for position in positions if 0 <= position < len(view)}
        self.remove(ids)

    def remove_all(self) -> None:
        """Clear the store and persist the empty list."""

        self._items = []
        self._persist()
        LOGGER.info("Cleared all expenses")

    def _highlight(self, item_id: UUID) -> None:
        if self._closed:
            return
        try:
            task = self._scheduler.schedule(
                self._highlight_delay, lambda: self._expire_highlight(item_id)
            )
        except SchedulerUnavailable:
            LOGGER.warning("No scheduler context; expense %s is not highlighted", item_id)
            return
        self._highlighted.add(item_id)
        self._expiry_tasks[item_id] = task

    def _expire_highlight(self, item_id: UUID) -> None:
        self._highlighted.discard(item_id)
        self._expiry_tasks.pop(item_id, None)

    def close(self) -> None:
        """Cancel pending highlight timers.

        The store stays usable afterwards, but new items are no longer highlighted.
        """

        for task in self._expiry_tasks.values():
            task.cancel()
        self._expiry_tasks.clear()
        self._closed = True
        LOGGER.debug("Expense store closed")

    @property
    def items(self) -> Tuple[ExpenseItem, ...]:
        return tuple(self._items)

    def by_category(self, category: ExpenseCategory) -> List[ExpenseItem]:
        return [item for item in self._items if item.category == category]

    def total_for(self, category: ExpenseCategory) -> float:
        return sum((item.amount for item in self.by_category(category)), 0.0)

    @property
    def grand_total(self) -> float:
        return sum((item.amount for item in self._items), 0.0)

    def is_highlighted(self, item_id: UUID) -> bool:
        return item_id in self._highlighted

    @property
    def highlighted_ids(self) -> frozenset:
        return frozenset(self._highlighted)

    def summary(self) -> Dict[str, float | int]:
        """Aggregate totals for the summary cards of the presentation layer."""

        return {
            "total": self.grand_total,
            "personal": self.total_for(ExpenseCategory.PERSONAL),
            "business": self.total_for(ExpenseCategory.BUSINESS),
            "count": len(self._items),
        }

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ExpenseItem]:
        return iter(tuple(self._items))

    def find(self, item_id: UUID) -> Optional[ExpenseItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None


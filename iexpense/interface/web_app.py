"""Mini README: FastAPI JSON interface for the expense tracker.

Structure:
    * create_application - application factory wiring routes to a store.
    * _serialise_item - item payload enriched with display hints.

The routes are ``async`` so every store mutation, and every highlight
expiry scheduled by the ``AsyncioScheduler``, runs on the same event loop.
Form validation happens here through ``build_entry`` before the store is
touched. The store's pending timers are cancelled on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, List, Optional
from uuid import UUID

from fastapi import Body, FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..configuration import IExpenseSettings, get_settings
from ..expenses import (
    AsyncioScheduler,
    EntryError,
    ExpenseCategory,
    ExpenseItem,
    ExpenseStore,
    JsonFileBackend,
    build_entry,
)
from ..logging_utils import get_logger
from ..presentation import CATEGORY_STYLES, amount_tier, format_amount

LOGGER = get_logger(__name__)


def _serialise_item(store: ExpenseStore, item: ExpenseItem, currency: str) -> Dict[str, object]:
    style = CATEGORY_STYLES[item.category]
    payload = item.as_dict()
    payload.update(
        {
            "highlighted": store.is_highlighted(item.id),
            "icon": style.icon,
            "color": style.color,
            "amount_color": amount_tier(item.amount),
            "display_amount": format_amount(item.amount, currency),
        }
    )
    return payload


def create_application(
    store: Optional[ExpenseStore] = None,
    settings: Optional[IExpenseSettings] = None,
) -> FastAPI:
    """Create the FastAPI application around a single expense store."""

    settings = settings or get_settings()
    if store is None:
        store = ExpenseStore(
            JsonFileBackend(settings.storage_path),
            key=settings.storage_key,
            scheduler=AsyncioScheduler(),
            highlight_delay=settings.highlight_delay_seconds,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        LOGGER.info("Serving %s expenses from key '%s'", len(store), settings.storage_key)
        yield
        store.close()

    app = FastAPI(title="iExpense", version="0.1.0", lifespan=lifespan)
    app.state.store = store

    @app.get("/expenses")
    async def list_expenses() -> JSONResponse:
        """Return expenses grouped by category in insertion order."""

        groups = {
            category.value: [
                _serialise_item(store, item, settings.currency)
                for item in store.by_category(category)
            ]
            for category in ExpenseCategory
        }
        LOGGER.debug("Returning %s expenses", len(store))
        return JSONResponse({"expenses": groups, "summary": store.summary()})

    @app.get("/summary")
    async def summary() -> JSONResponse:
        """Return the totals shown on the summary cards."""

        totals = store.summary()
        totals["currency"] = settings.currency
        return JSONResponse(totals)

    @app.post("/expenses", status_code=201)
    async def add_expense(
        name: str = Form(...),
        amount: Optional[float] = Form(None),
        amount_digits: Optional[str] = Form(None),
        category: str = Form(...),
        date: Optional[datetime] = Form(None),
    ) -> JSONResponse:
        """Validate the submitted form and record a new expense.

        ``amount_digits`` takes keypad-style text where the last two digits are
        cents (``"1250"`` is 12.50) and wins over ``amount`` when both are sent.
        """

        raw_amount = amount_digits if amount_digits is not None else amount
        if raw_amount is None:
            raise HTTPException(status_code=400, detail="An amount is required.")
        try:
            item = build_entry(name, raw_amount, category, date)
        except EntryError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        store.add(item)
        return JSONResponse(_serialise_item(store, item, settings.currency), status_code=201)

    @app.delete("/expenses/{item_id}")
    async def delete_expense(item_id: UUID) -> JSONResponse:
        """Remove a single expense."""

        if store.find(item_id) is None:
            raise HTTPException(status_code=404, detail=f"Expense {item_id} not found")
        store.remove({item_id})
        return JSONResponse({"removed": [str(item_id)], "summary": store.summary()})

    @app.post("/expenses/remove")
    async def remove_expenses(ids: List[UUID] = Body(..., embed=True)) -> JSONResponse:
        """Remove several expenses; unknown ids are ignored."""

        store.remove(ids)
        return JSONResponse({"summary": store.summary()})

    @app.delete("/expenses")
    async def clear_expenses() -> JSONResponse:
        """Remove every expense."""

        store.remove_all()
        return JSONResponse({"summary": store.summary()})

    return app

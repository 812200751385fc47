"""Mini README: Command line entry point for iExpense.

The Typer CLI starts the web interface and offers quick commands that work
directly against the JSON file store configured through ``IEXPENSE_``
environment variables: add, list, remove, clear and totals.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

import typer
import uvicorn

from iexpense.configuration import get_settings
from iexpense.expenses import (
    EntryError,
    ExpenseCategory,
    ExpenseStore,
    JsonFileBackend,
    ManualScheduler,
    build_entry,
)
from iexpense.logging_utils import configure_root_logger, level_for_environment
from iexpense.presentation import format_amount

cli = typer.Typer(help="Track personal and business expenses.")


def _open_store() -> ExpenseStore:
    settings = get_settings()
    return ExpenseStore(
        JsonFileBackend(settings.storage_path),
        key=settings.storage_key,
        scheduler=ManualScheduler(),
        highlight_delay=settings.highlight_delay_seconds,
    )


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # Browsers cannot navigate to the 0.0.0.0 / :: bind-all addresses.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting iExpense on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}/expenses"
    )
    uvicorn.run(
        "iexpense.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(
    name: str = typer.Argument(..., help="What the money was spent on."),
    amount: float = typer.Argument(..., help="Amount, e.g. 12.50."),
    category: str = typer.Option("Personal", help="Personal or Business."),
    date: Optional[datetime] = typer.Option(None, help="When it was spent (defaults to now)."),
) -> None:
    """Record a new expense."""

    try:
        item = build_entry(name, amount, category, date)
    except EntryError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    store = _open_store()
    store.add(item)
    store.close()
    typer.echo(f"Added {item.name} ({item.category.value}) {item.id}")


@cli.command("list")
def list_expenses() -> None:
    """Show expenses grouped by category."""

    settings = get_settings()
    store = _open_store()
    for category in ExpenseCategory:
        items = store.by_category(category)
        if not items:
            continue
        typer.echo(f"{category.value} Expenses")
        for item in items:
            typer.echo(
                f"  {item.id}  {item.date:%Y-%m-%d}  {item.name:<24} "
                f"{format_amount(item.amount, settings.currency):>14}"
            )
        typer.echo(f"  Total: {format_amount(store.total_for(category), settings.currency)}")


@cli.command()
def remove(ids: List[str] = typer.Argument(..., help="Identifiers to remove.")) -> None:
    """Remove expenses by identifier."""

    try:
        parsed = {UUID(value) for value in ids}
    except ValueError as error:
        typer.echo(f"Error: invalid identifier ({error})", err=True)
        raise typer.Exit(code=1) from error
    store = _open_store()
    before = len(store)
    store.remove(parsed)
    typer.echo(f"Removed {before - len(store)} expense(s).")


@cli.command()
def clear(yes: bool = typer.Option(False, "--yes", help="Skip confirmation.")) -> None:
    """Delete every recorded expense."""

    if not yes:
        typer.confirm("Remove all expenses?", abort=True)
    _open_store().remove_all()
    typer.echo("All expenses removed.")


@cli.command()
def totals() -> None:
    """Print personal, business and overall totals."""

    settings = get_settings()
    summary = _open_store().summary()
    typer.echo(f"Personal: {format_amount(summary['personal'], settings.currency)}")
    typer.echo(f"Business: {format_amount(summary['business'], settings.currency)}")
    typer.echo(f"Total:    {format_amount(summary['total'], settings.currency)}")


if __name__ == "__main__":
    cli()

"""Mini README: Tests for the Typer command line against a temporary store."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from iexpense.configuration import get_settings
from iexpense_cli import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("IEXPENSE_DATA_DIRECTORY", str(tmp_path))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_add_list_and_totals() -> None:
    assert runner.invoke(cli, ["add", "Coffee", "4.50"]).exit_code == 0
    assert runner.invoke(cli, ["add", "Hotel", "120", "--category", "Business"]).exit_code == 0

    listing = runner.invoke(cli, ["list"])
    assert "Personal Expenses" in listing.output
    assert "Hotel" in listing.output

    totals = runner.invoke(cli, ["totals"])
    assert "Total:    USD 124.50" in totals.output


def test_add_rejects_non_positive_amount() -> None:
    result = runner.invoke(cli, ["add", "Refund", "0"])

    assert result.exit_code == 1
    assert "greater than zero" in result.output


def test_remove_and_clear() -> None:
    added = runner.invoke(cli, ["add", "Parking", "6"]).output
    item_id = added.strip().split()[-1]

    assert "Removed 1 expense(s)." in runner.invoke(cli, ["remove", item_id]).output
    assert runner.invoke(cli, ["remove", "nope"]).exit_code == 1
    assert runner.invoke(cli, ["clear", "--yes"]).exit_code == 0
    assert "Total:    USD 0.00" in runner.invoke(cli, ["totals"]).output

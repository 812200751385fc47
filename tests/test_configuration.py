"""Mini README: Tests for settings validation and logging level selection."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from iexpense.configuration import IExpenseSettings
from iexpense.logging_utils import level_for_environment


def test_settings_create_data_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("IEXPENSE_HIGHLIGHT_DELAY_SECONDS", "2.5")
    target = tmp_path / "nested" / "data"

    settings = IExpenseSettings(data_directory=target)

    assert target.is_dir()
    assert settings.storage_path == target.resolve() / "expenses.json"
    assert settings.storage_key == "Items"
    assert settings.highlight_delay_seconds == pytest.approx(2.5)


def test_settings_reject_non_positive_highlight_delay(tmp_path) -> None:
    with pytest.raises(ValidationError):
        IExpenseSettings(data_directory=tmp_path, highlight_delay_seconds=0)


def test_level_for_environment() -> None:
    assert level_for_environment("Development") == logging.DEBUG
    assert level_for_environment("test") == logging.WARNING
    assert level_for_environment("production") == logging.INFO

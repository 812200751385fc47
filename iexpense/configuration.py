"""Mini README: Centralised configuration for iExpense.

Structure:
    * IExpenseSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and web interface.

Usage:
    Environment variables prefixed with ``IEXPENSE_`` (or a local ``.env``
    file) override the defaults, e.g. ``IEXPENSE_DATA_DIRECTORY=~/expenses``.
    Settings are validated once per process and cached afterwards.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IExpenseSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    model_config = SettingsConfigDict(
        env_prefix="IEXPENSE_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted expense store.",
        validate_default=True,
    )
    storage_file: str = Field(
        "expenses.json",
        description="File name of the key-value store inside the data directory.",
    )
    storage_key: str = Field(
        "Items",
        description="Key under which the encoded expense list is stored.",
    )
    highlight_delay_seconds: float = Field(
        1.0,
        description="Seconds a newly added expense stays highlighted.",
        gt=0,
    )
    currency: str = Field(
        "USD",
        description="Currency code used when rendering amounts.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface exposes.",
        ge=1,
        le=65535,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def storage_path(self) -> Path:
        """Full path of the JSON key-value file."""

        return self.data_directory / self.storage_file


@lru_cache()
def get_settings() -> IExpenseSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return IExpenseSettings()

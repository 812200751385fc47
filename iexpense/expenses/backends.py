"""Mini README: Key-value persistence backends for the expense store.

Structure:
    * KeyValueBackend - abstract interface storing one string per key.
    * InMemoryBackend - dictionary implementation for tests and previews.
    * JsonFileBackend - keeps every key in a single JSON object on disk.

The store only ever reads and writes one key, so backends stay deliberately
small. Errors raised by ``set`` are left for the caller to handle.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class KeyValueBackend(ABC):
    """Base interface for string key-value stores."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` replacing any previous value."""


class InMemoryBackend(KeyValueBackend):
    """Volatile backend holding values in a dictionary."""

    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileBackend(KeyValueBackend):
    """Backend persisting all keys into one JSON object file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as error:
            LOGGER.warning("Could not read %s: %s", self.path, error)
            return {}
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring corrupt key-value file %s", self.path)
            return {}
        if not isinstance(values, dict):
            return {}
        return {str(key): value for key, value in values.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        temp_path.write_text(json.dumps(values), encoding="utf-8")
        os.replace(temp_path, self.path)
        LOGGER.debug("Wrote key '%s' to %s", key, self.path)

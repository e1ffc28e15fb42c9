"""
File-backed key-value store.

All persisted settings and lists live in one JSON object on disk.  Every
mutation rewrites the whole file; there is a single writer at a time.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from ..core.config import STORE_DIR_NAME, STORE_FILE_NAME


class KeyValueStore:
    """
    Local persistent key-value storage.

    An unreadable or corrupt file reads as empty; the next write replaces it.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Path to the JSON file (created on first write)
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self.path}: top level is not an object")
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def contains(self, key: str) -> bool:
        return key in self._read()

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def get_int(self, key: str, default: int) -> int:
        """Read an integer setting, falling back to ``default`` on bad data."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring non-integer value for {key!r}: {value!r}")
            return default

    def get_str(self, key: str, default: str) -> str:
        value = self.get(key)
        return value if isinstance(value, str) else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        return value if isinstance(value, bool) else default


def get_default_store_path() -> Path:
    """Return ~/.interval-timer/store.json."""
    return Path.home() / STORE_DIR_NAME / STORE_FILE_NAME

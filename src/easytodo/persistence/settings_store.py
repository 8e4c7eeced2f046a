"""Flat key-value settings stores.

The task store keeps its whole collection as one string value under a
fixed key. These classes provide that key-value area:

- JsonFileSettingsStore: a single JSON object file with atomic writes
- MemorySettingsStore: a dict, for tests and throwaway sessions

Example:
    >>> store = JsonFileSettingsStore(Path("~/.easytodo/user_defaults.json"))
    >>> store.set("TodoItems", "[]")
    >>> store.get("TodoItems")
    '[]'
"""

import json
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from easytodo.errors import CorruptStorageError, StorageReadError, StorageWriteError
from easytodo.logging import Loggers
from easytodo.persistence._utils import atomic_write_json

if TYPE_CHECKING:
    from easytodo.config import Settings

logger = Loggers.persistence()


@runtime_checkable
class SettingsStore(Protocol):
    """Protocol for a flat string key-value store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        ...

    def keys(self) -> list[str]:
        """Return all keys currently stored."""
        ...


class MemorySettingsStore:
    """In-process settings store backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._values)


class JsonFileSettingsStore:
    """Settings store persisted as one JSON object file.

    The file is re-read on every access so that external edits are picked
    up, and every write replaces the whole file atomically.

    Layout:
        {workspace_dir}/user_defaults.json
        {"TodoItems": "<serialized task list>", ...}
    """

    def __init__(self, path: Path) -> None:
        """Initialize the file store.

        Args:
            path: Location of the JSON file. It is created on first write.
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Cannot read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise CorruptStorageError(f"Corrupt settings file {self.path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"Corrupt settings file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStorageError(
                f"Settings file {self.path} does not contain a JSON object"
            )
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, values: dict[str, str]) -> None:
        try:
            atomic_write_json(self.path, values)
        except OSError as e:
            raise StorageWriteError(f"Cannot write {self.path}: {e}") from e
        logger.debug("settings_store_written", path=str(self.path), keys=len(values))

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                values = self._read()
            except CorruptStorageError:
                logger.warning("settings_store_reset", path=str(self.path))
                values = {}
            values[key] = value
            self._write(values)

    def remove(self, key: str) -> None:
        with self._lock:
            values = self._read()
            if key not in values:
                return
            del values[key]
            self._write(values)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._read())


def create_settings_store(settings: "Settings") -> JsonFileSettingsStore:
    """Create the file-backed settings store described by settings."""
    settings.ensure_workspace_exists()
    return JsonFileSettingsStore(settings.settings_store_path)

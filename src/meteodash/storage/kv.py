"""Flat string key-value persistence, the stand-in for browser storage."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from meteodash.utils.file import atomic_write_text

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string-to-string storage.

    Values are opaque strings; callers own their serialization.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored value or None when the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete *key*; absent keys are ignored."""
        ...


class MemoryStore:
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStore:
    """Store persisted as a single JSON object on disk.

    The whole file is rewritten on every change. A missing or unreadable
    file starts an empty store; it is replaced on the next write.
    """

    def __init__(self, path: Path) -> None:
        """Open (or lazily create) the store.

        Args:
            path: Location of the JSON file
        """
        self.path = path
        self._items: dict[str, str] = self._read()

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top level is not an object", self.path)
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _flush(self) -> None:
        atomic_write_text(self.path, json.dumps(self._items, indent=2, ensure_ascii=False))
        logger.debug("Saved %d keys to %s", len(self._items), self.path)

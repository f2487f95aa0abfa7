"""Bounded, de-duplicated lists of places (favorites and recents)."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import TypeAdapter, ValidationError

from meteodash.models.place import Place
from meteodash.storage.kv import KeyValueStore

logger: Final = logging.getLogger(__name__)

FAVORITES_KEY: Final = "favoriteCitiesV2"
LEGACY_FAVORITES_KEY: Final = "favoriteCitiesV1"
RECENTS_KEY: Final = "recentCitiesV1"
FAVORITES_CAPACITY: Final = 8
RECENTS_CAPACITY: Final = 6
MIGRATION_MARKER_SUFFIX: Final = ":migrated"

_PLACES: Final = TypeAdapter(list[Place])
_LEGACY_NAMES: Final = TypeAdapter(list[str])

ChangeCallback = Callable[[str, list[Place]], None]


class InsertPolicy(Enum):
    """How :meth:`PlaceStore.add` treats a name that is already stored."""

    DEDUP_NO_MOVE = "dedup-no-move"  # favorites: keep existing position
    DEDUP_PROMOTE_TO_FRONT = "dedup-promote-to-front"  # recents: move to front


class PlaceStore:
    """Ordered place lists kept in a key-value store.

    Lists are stored as JSON arrays, most recent first, unique by name.
    Every mutation writes the full list back before returning and then
    notifies ``on_change`` with the key and the new list.
    """

    def __init__(self, store: KeyValueStore, on_change: ChangeCallback | None = None) -> None:
        self.store = store
        self.on_change = on_change

    def load(self, key: str) -> list[Place]:
        """Read the list under *key*.

        Absent keys and malformed content both yield an empty list.
        """
        raw = self.store.get_item(key)
        if raw is None:
            return []
        try:
            return _PLACES.validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding malformed place list %r: %s", key, exc.errors()[0]["msg"])
            return []

    def add(self, key: str, place: Place, capacity: int, policy: InsertPolicy) -> list[Place]:
        """Insert *place* at the front of the list under *key*.

        Args:
            key: Storage key of the list
            place: Place to insert
            capacity: Maximum list length; the oldest entries are evicted
            policy: Behaviour when a place with the same name exists

        Returns:
            The persisted list
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        places = self.load(key)
        if policy is InsertPolicy.DEDUP_NO_MOVE:
            if any(existing.name == place.name for existing in places):
                updated = places
            else:
                updated = [place, *places]
        else:
            updated = [place, *(existing for existing in places if existing.name != place.name)]
        return self._save(key, updated[:capacity])

    def remove(self, key: str, name: str) -> list[Place]:
        """Drop every entry named *name*."""
        return self._save(key, [place for place in self.load(key) if place.name != name])

    def clear(self, key: str) -> list[Place]:
        return self._save(key, [])

    def migrate_legacy(self, key: str, legacy_key: str, capacity: int | None = None) -> bool:
        """Seed *key* from a legacy list of bare names, at most once.

        Migration happens only when the legacy list is non-empty and the
        current list is empty. Once a non-empty legacy list has been seen
        the decision is recorded, so clearing the current list later does
        not bring the legacy names back.

        Args:
            key: Storage key of the current list
            legacy_key: Storage key of the legacy name list (read only)
            capacity: Optional bound applied to the migrated list

        Returns:
            True if places were migrated
        """
        marker = f"{key}{MIGRATION_MARKER_SUFFIX}"
        if self.store.get_item(marker) is not None:
            return False
        names = self._load_legacy_names(legacy_key)
        if not names:
            return False

        self.store.set_item(marker, "1")
        if self.load(key):
            logger.debug("Skipping legacy migration of %r: %r is not empty", legacy_key, key)
            return False

        migrated = [Place(name=name) for name in names]
        if capacity is not None:
            migrated = migrated[:capacity]
        self._save(key, migrated)
        logger.info("Migrated %d legacy places from %r to %r", len(migrated), legacy_key, key)
        return True

    def _load_legacy_names(self, legacy_key: str) -> list[str]:
        raw = self.store.get_item(legacy_key)
        if raw is None:
            return []
        try:
            names = _LEGACY_NAMES.validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed legacy list %r", legacy_key)
            return []
        # Keep first occurrence of each non-blank name
        return list(dict.fromkeys(name for name in names if name.strip()))

    def _save(self, key: str, places: list[Place]) -> list[Place]:
        payload = [place.model_dump(exclude_none=True) for place in places]
        self.store.set_item(key, json.dumps(payload, ensure_ascii=False))
        if self.on_change is not None:
            self.on_change(key, places)
        return places


@dataclass(frozen=True)
class PlaceList:
    """One named list bound to its key, capacity and insertion policy."""

    store: PlaceStore
    key: str
    capacity: int
    policy: InsertPolicy
    legacy_key: str | None = None

    @classmethod
    def favorites(cls, store: PlaceStore, capacity: int = FAVORITES_CAPACITY) -> PlaceList:
        return cls(store, FAVORITES_KEY, capacity, InsertPolicy.DEDUP_NO_MOVE, LEGACY_FAVORITES_KEY)

    @classmethod
    def recents(cls, store: PlaceStore, capacity: int = RECENTS_CAPACITY) -> PlaceList:
        return cls(store, RECENTS_KEY, capacity, InsertPolicy.DEDUP_PROMOTE_TO_FRONT)

    def items(self) -> list[Place]:
        """Current entries, running the one-time legacy migration first."""
        if self.legacy_key is not None:
            self.store.migrate_legacy(self.key, self.legacy_key, self.capacity)
        return self.store.load(self.key)

    def find(self, name: str) -> Place | None:
        return next((place for place in self.items() if place.name == name), None)

    def add(self, place: Place) -> list[Place]:
        if self.legacy_key is not None:
            self.store.migrate_legacy(self.key, self.legacy_key, self.capacity)
        return self.store.add(self.key, place, self.capacity, self.policy)

    def remove(self, name: str) -> list[Place]:
        return self.store.remove(self.key, name)

    def clear(self) -> list[Place]:
        return self.store.clear(self.key)

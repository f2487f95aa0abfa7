"""Local persistence: key-value store, place lists and preferences."""

from meteodash.storage.kv import JsonFileStore, KeyValueStore, MemoryStore
from meteodash.storage.places import (
    FAVORITES_KEY,
    LEGACY_FAVORITES_KEY,
    RECENTS_KEY,
    InsertPolicy,
    PlaceList,
    PlaceStore,
)
from meteodash.storage.preferences import Preferences, Theme

__all__ = [
    "FAVORITES_KEY",
    "LEGACY_FAVORITES_KEY",
    "RECENTS_KEY",
    "InsertPolicy",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PlaceList",
    "PlaceStore",
    "Preferences",
    "Theme",
]

import json

import pytest

from meteodash.models.place import Place
from meteodash.storage.kv import MemoryStore
from meteodash.storage.places import (
    FAVORITES_KEY,
    LEGACY_FAVORITES_KEY,
    RECENTS_KEY,
    InsertPolicy,
    PlaceList,
    PlaceStore,
)


@pytest.fixture
def changes() -> list[tuple[str, list[Place]]]:
    return []


@pytest.fixture
def places(memory_store: MemoryStore, changes: list[tuple[str, list[Place]]]) -> PlaceStore:
    return PlaceStore(memory_store, on_change=lambda key, items: changes.append((key, items)))


def _names(items: list[Place]) -> list[str]:
    return [place.name for place in items]


def test_load_absent_key(places: PlaceStore) -> None:
    assert places.load(FAVORITES_KEY) == []


@pytest.mark.parametrize("raw", ["not json", "{}", '[{"lat": 1}]', '[{"name": ""}]', "42"])
def test_load_malformed_returns_empty(memory_store: MemoryStore, places: PlaceStore, raw: str) -> None:
    memory_store.set_item(FAVORITES_KEY, raw)
    assert places.load(FAVORITES_KEY) == []


def test_add_no_move_keeps_position(places: PlaceStore) -> None:
    for name in ("A", "B", "C"):
        places.add(FAVORITES_KEY, Place(name=name), 8, InsertPolicy.DEDUP_NO_MOVE)
    result = places.add(FAVORITES_KEY, Place(name="B", lat=1.0, lon=2.0), 8, InsertPolicy.DEDUP_NO_MOVE)
    assert _names(result) == ["C", "B", "A"]
    # existing entry wins
    assert result[1].lat is None


def test_add_promote_moves_to_front(places: PlaceStore) -> None:
    for name in ("A", "B", "C"):
        places.add(RECENTS_KEY, Place(name=name), 6, InsertPolicy.DEDUP_PROMOTE_TO_FRONT)
    result = places.add(RECENTS_KEY, Place(name="A"), 6, InsertPolicy.DEDUP_PROMOTE_TO_FRONT)
    assert _names(result) == ["A", "C", "B"]


def test_add_truncates_to_capacity(places: PlaceStore) -> None:
    for i in range(10):
        result = places.add(RECENTS_KEY, Place(name=f"City {i}"), 6, InsertPolicy.DEDUP_PROMOTE_TO_FRONT)
    assert len(result) == 6
    assert result[0].name == "City 9"
    assert result[-1].name == "City 4"


def test_dedup_is_case_sensitive(places: PlaceStore) -> None:
    places.add(FAVORITES_KEY, Place(name="paris"), 8, InsertPolicy.DEDUP_NO_MOVE)
    result = places.add(FAVORITES_KEY, Place(name="Paris"), 8, InsertPolicy.DEDUP_NO_MOVE)
    assert _names(result) == ["Paris", "paris"]


def test_add_rejects_zero_capacity(places: PlaceStore) -> None:
    with pytest.raises(ValueError):
        places.add(FAVORITES_KEY, Place(name="A"), 0, InsertPolicy.DEDUP_NO_MOVE)


def test_add_persists_and_notifies(
    memory_store: MemoryStore, places: PlaceStore, changes: list[tuple[str, list[Place]]]
) -> None:
    places.add(FAVORITES_KEY, Place(name="Paris, FR", lat=48.85, lon=2.35), 8, InsertPolicy.DEDUP_NO_MOVE)
    stored = json.loads(memory_store.get_item(FAVORITES_KEY) or "")
    assert stored == [{"name": "Paris, FR", "lat": 48.85, "lon": 2.35}]
    assert changes == [(FAVORITES_KEY, [Place(name="Paris, FR", lat=48.85, lon=2.35)])]


def test_duplicate_add_still_notifies(places: PlaceStore, changes: list[tuple[str, list[Place]]]) -> None:
    places.add(FAVORITES_KEY, Place(name="A"), 8, InsertPolicy.DEDUP_NO_MOVE)
    places.add(FAVORITES_KEY, Place(name="A"), 8, InsertPolicy.DEDUP_NO_MOVE)
    assert len(changes) == 2


def test_remove_and_clear(memory_store: MemoryStore, places: PlaceStore) -> None:
    for name in ("A", "B"):
        places.add(FAVORITES_KEY, Place(name=name), 8, InsertPolicy.DEDUP_NO_MOVE)
    assert _names(places.remove(FAVORITES_KEY, "A")) == ["B"]
    assert _names(places.remove(FAVORITES_KEY, "missing")) == ["B"]
    assert places.clear(FAVORITES_KEY) == []
    assert memory_store.get_item(FAVORITES_KEY) == "[]"


def test_migrate_legacy_into_empty_list(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, json.dumps(["Paris", "", "Berlin", "Paris", "  "]))
    assert places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY) is True
    migrated = places.load(FAVORITES_KEY)
    assert _names(migrated) == ["Paris", "Berlin"]
    assert all(not place.has_coordinates for place in migrated)
    # legacy key is left in place
    assert memory_store.get_item(LEGACY_FAVORITES_KEY) is not None


def test_migrate_legacy_never_overwrites(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, json.dumps(["Paris"]))
    places.add(FAVORITES_KEY, Place(name="Rome"), 8, InsertPolicy.DEDUP_NO_MOVE)
    assert places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY) is False
    assert _names(places.load(FAVORITES_KEY)) == ["Rome"]


def test_migrate_legacy_runs_once(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, json.dumps(["Paris"]))
    assert places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY) is True
    places.clear(FAVORITES_KEY)
    assert places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY) is False
    assert places.load(FAVORITES_KEY) == []


def test_migrate_legacy_ignores_malformed(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, '{"not": "a list"}')
    assert places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY) is False
    assert places.load(FAVORITES_KEY) == []


def test_migrate_legacy_respects_capacity(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, json.dumps([f"City {i}" for i in range(12)]))
    places.migrate_legacy(FAVORITES_KEY, LEGACY_FAVORITES_KEY, capacity=8)
    assert len(places.load(FAVORITES_KEY)) == 8


def test_place_list_favorites_migrates_on_read(memory_store: MemoryStore, places: PlaceStore) -> None:
    memory_store.set_item(LEGACY_FAVORITES_KEY, json.dumps(["Oslo"]))
    favorites = PlaceList.favorites(places)
    assert _names(favorites.items()) == ["Oslo"]
    assert favorites.find("Oslo") == Place(name="Oslo")
    assert favorites.find("oslo") is None


def test_place_list_recents(places: PlaceStore) -> None:
    recents = PlaceList.recents(places, capacity=2)
    recents.add(Place(name="A"))
    recents.add(Place(name="B"))
    recents.add(Place(name="C"))
    assert _names(recents.items()) == ["C", "B"]
    recents.remove("C")
    assert _names(recents.items()) == ["B"]
    assert recents.clear() == []


def test_ninth_favorite_evicts_oldest(places: PlaceStore) -> None:
    favorites = PlaceList.favorites(places)
    for i in range(1, 10):
        favorites.add(Place(name=f"City {i}"))
    items = favorites.items()
    assert len(items) == 8
    assert _names(items) == [f"City {i}" for i in range(9, 1, -1)]

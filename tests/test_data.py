import json
import pytest
from datetime import datetime, timezone
from pathlib import Path

from config import PEOPLE_KEY, CATEGORIES_KEY, FAVORITES_KEY, LAST_BACKUP_KEY
from tracker import FavoritesTracker
from data import (
    LocalStore, MemoryStore,
    load_people, save_people, load_categories, save_categories,
    load_favorites, save_favorites, load_last_backup, record_backup_time,
)

@pytest.fixture()
def store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "data")

# ---- LocalStore ----

def test_missing_key_loads_none(store):
    assert store.load(PEOPLE_KEY) is None

def test_save_creates_dir_and_file(store):
    store.save("k", "hello")
    assert (store.data_dir / "k.json").read_text(encoding="utf-8") == "hello"
    assert store.load("k") == "hello"

def test_save_leaves_no_tmp(store):
    store.save("k", "[]")
    assert not list(store.data_dir.glob("*.tmp"))

def test_write_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    store = LocalStore(blocker)  # mkdir under a regular file fails
    store.save("k", "v")
    assert "Storage set error" in caplog.text

def test_read_failure_is_logged_and_returns_none(store, caplog):
    (store.data_dir / "k.json").mkdir(parents=True)  # a directory can't be opened as a file
    assert store.load("k") is None
    assert "Storage get error" in caplog.text

def test_memory_store_failed_write_keeps_old_value(caplog):
    store = MemoryStore({"k": "old"}, fail_writes=True)
    store.save("k", "new")
    assert store.load("k") == "old"
    assert "quota exceeded" in caplog.text

# ---- typed helpers ----

def test_defaults_on_first_run():
    store = MemoryStore()
    assert load_people(store) == []
    assert load_favorites(store) == {}
    cats = load_categories(store)
    assert [c["name"] for c in cats] == ["Candy", "Ice Cream", "Snack", "Fast Food", "Movie", "TV Show"]
    assert all(c["archived"] is False for c in cats)

def test_seed_is_a_fresh_copy():
    store = MemoryStore()
    load_categories(store)[0]["name"] = "Changed"
    assert load_categories(store)[0]["name"] == "Candy"

def test_saved_empty_category_list_is_not_reseeded():
    store = MemoryStore()
    save_categories(store, [])
    assert load_categories(store) == []

def test_corrupt_values_reset_to_defaults():
    store = MemoryStore({
        PEOPLE_KEY: "{{not json",
        CATEGORIES_KEY: json.dumps({"not": "a list"}),
        FAVORITES_KEY: json.dumps([1, 2]),
    })
    assert load_people(store) == []
    assert load_categories(store) == []
    assert load_favorites(store) == {}

def test_non_object_records_reset_to_defaults():
    store = MemoryStore({
        PEOPLE_KEY: json.dumps(["Mia"]),
        CATEGORIES_KEY: json.dumps(["Candy"]),
    })
    assert load_people(store) == []
    assert load_categories(store) == []

def test_records_without_string_id_reset_to_defaults():
    store = MemoryStore({
        PEOPLE_KEY: json.dumps([{"id": "p1", "name": "Mia"}, {"id": ["x"], "name": "Leo"}]),
        CATEGORIES_KEY: json.dumps([{"name": "Candy"}]),
    })
    assert load_people(store) == []
    assert load_categories(store) == []

def test_tracker_starts_on_malformed_records():
    store = MemoryStore({
        PEOPLE_KEY: json.dumps(["Mia"]),
        CATEGORIES_KEY: json.dumps(["Candy"]),
    })
    t = FavoritesTracker.load(store)
    assert t.people == []
    assert t.categories == []
    assert t.current_category_id is None

class CountingStore(MemoryStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = []

    def load(self, key):
        self.reads.append(key)
        return super().load(key)

@pytest.mark.parametrize("initial", [{}, {CATEGORIES_KEY: json.dumps([{"id": "c1", "name": "X"}])}])
def test_categories_key_is_read_once(initial):
    store = CountingStore(initial)
    load_categories(store)
    assert store.reads == [CATEGORIES_KEY]

def test_roundtrip_collections(store):
    people = [{"id": "p1", "name": "Zoë", "archived": False}]
    favs = {"c1": {"p1": "Gummy bears"}}
    save_people(store, people)
    save_favorites(store, favs)
    assert load_people(store) == people
    assert load_favorites(store) == favs

def test_backup_timestamp_roundtrip():
    store = MemoryStore()
    assert load_last_backup(store) is None
    when = datetime(2024, 3, 10, 8, 30, 15, tzinfo=timezone.utc)
    record_backup_time(store, when)
    assert store.load(LAST_BACKUP_KEY) == "2024-03-10T08:30:15.000Z"
    assert load_last_backup(store) == when

def test_unreadable_backup_timestamp_is_ignored():
    store = MemoryStore({LAST_BACKUP_KEY: "yesterday-ish"})
    assert load_last_backup(store) is None

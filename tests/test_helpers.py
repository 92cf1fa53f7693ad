import random
import pytest
from datetime import datetime, timedelta, timezone
from helpers import (
    new_id, active, first_active_id, pick_random, build_favorite_pool,
    favorite_text, format_local_datetime, time_since, backup_reminder,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

def test_new_id_is_reproducible_with_seeded_rng():
    a = new_id("person", random.Random(7))
    b = new_id("person", random.Random(7))
    assert a == b
    assert a.startswith("person_")
    # different seeds -> different ids
    assert new_id("person", random.Random(8)) != a

def test_new_id_without_rng_is_unique():
    ids = {new_id("cat") for _ in range(200)}
    assert len(ids) == 200

def test_active_keeps_order_and_drops_archived():
    items = [
        {"id": "a", "name": "A", "archived": False},
        {"id": "b", "name": "B", "archived": True},
        {"id": "c", "name": "C"},  # missing flag counts as active
    ]
    assert [r["id"] for r in active(items)] == ["a", "c"]
    assert first_active_id(items) == "a"
    assert first_active_id([{"id": "x", "archived": True}]) is None

def test_pick_random_empty_pool():
    assert pick_random([], random.Random(1)) is None

def test_pick_random_is_uniform_enough():
    rng = random.Random(42)
    seen = {pick_random(["x", "y", "z"], rng) for _ in range(100)}
    assert seen == {"x", "y", "z"}

def test_favorite_pool_filters_blank_and_archived():
    people = [
        {"id": "p1", "name": "Mia", "archived": False},
        {"id": "p2", "name": "Leo", "archived": True},
        {"id": "p3", "name": "Ana", "archived": False},
    ]
    categories = [
        {"id": "c1", "name": "Candy", "archived": False},
        {"id": "c2", "name": "Movie", "archived": True},
    ]
    favorites = {
        "c1": {"p1": "  Gummy bears ", "p2": "Mints", "p3": "   "},
        "c2": {"p1": "Up"},
        "ghost": {"p1": "Orphan"},
    }
    pool = build_favorite_pool(categories, people, favorites)
    assert len(pool) == 1
    pick = pool[0]
    assert (pick.category_id, pick.person_id, pick.value) == ("c1", "p1", "Gummy bears")
    assert pick.person_name == "Mia"
    assert pick.category_name == "Candy"

def test_favorite_pool_order_is_categories_then_people():
    people = [{"id": "p1", "name": "A"}, {"id": "p2", "name": "B"}]
    categories = [{"id": "c2", "name": "Y"}, {"id": "c1", "name": "X"}]
    favorites = {"c1": {"p2": "x2", "p1": "x1"}, "c2": {"p1": "y1"}}
    pool = build_favorite_pool(categories, people, favorites)
    assert [(p.category_id, p.person_id) for p in pool] == [("c2", "p1"), ("c1", "p1"), ("c1", "p2")]

def test_favorite_pool_ignores_non_string_values():
    people = [{"id": "p1", "name": "A"}]
    categories = [{"id": "c1", "name": "X"}]
    assert build_favorite_pool(categories, people, {"c1": {"p1": 5}}) == []
    assert build_favorite_pool(categories, people, {"c1": "oops"}) == []

def test_favorite_text_defaults_to_empty():
    favs = {"c1": {"p1": "Pizza"}}
    assert favorite_text(favs, "c1", "p1") == "Pizza"
    assert favorite_text(favs, "c1", "p2") == ""
    assert favorite_text(favs, "c9", "p1") == ""

def test_format_local_datetime():
    assert format_local_datetime(None) == "Unknown time"
    naive = datetime(2024, 3, 3, 9, 41)
    assert format_local_datetime(naive) == "Mar 3, 09:41"

def test_time_since():
    assert time_since(NOW - timedelta(days=3, hours=2), NOW) == "3 days"
    assert time_since(NOW - timedelta(hours=1), NOW) == "1 hour"
    assert time_since(NOW + timedelta(minutes=5), NOW) == "just now"

@pytest.mark.parametrize("last, needs, prefix", [
    (None, True, "No backup yet."),
    (NOW - timedelta(hours=3), False, "Last backup:"),
    (NOW - timedelta(days=2), True, "It's been more than a day"),
])
def test_backup_reminder(last, needs, prefix):
    flag, text = backup_reminder(last, NOW)
    assert flag is needs
    assert text.startswith(prefix)

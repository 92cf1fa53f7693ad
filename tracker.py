# tracker.py
# In-memory people / categories / favorites, persisted on every mutation

import logging
import random
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

import pandas as pd

from data import (
    LocalStore,
    load_people, save_people,
    load_categories, save_categories,
    load_favorites, save_favorites,
)
from helpers import (
    active, build_favorite_pool, display_name, favorite_text, find_by_id,
    first_active_id, new_id, pick_random,
)
from models import Category, FavoritePick, Person

logger = logging.getLogger(__name__)

PEOPLE = "people"
CATEGORIES = "categories"
FAVORITES = "favorites"

_SAVERS = {
    PEOPLE: save_people,
    CATEGORIES: save_categories,
    FAVORITES: save_favorites,
}


class ModelChange(NamedTuple):
    kind: str
    collections: Tuple[str, ...]
    message: str = ""


Listener = Callable[[ModelChange], None]


class FavoritesTracker:
    """
    Owns the three collections plus the selected category. Every mutation
    applies in memory, writes the affected collections, re-checks the
    selection and then tells subscribers what changed.
    """

    def __init__(self, store: LocalStore, people: Optional[List[dict]] = None,
                 categories: Optional[List[dict]] = None, favorites: Optional[Dict[str, Any]] = None,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.people: List[Dict[str, Any]] = people if people is not None else []
        self.categories: List[Dict[str, Any]] = categories if categories is not None else []
        self.favorites: Dict[str, Any] = favorites if favorites is not None else {}
        self.rng = rng
        self.current_category_id: Optional[str] = first_active_id(self.categories)
        self._listeners: List[Listener] = []

    @classmethod
    def load(cls, store: LocalStore, rng: Optional[random.Random] = None) -> "FavoritesTracker":
        return cls(
            store,
            people=load_people(store),
            categories=load_categories(store),
            favorites=load_favorites(store),
            rng=rng,
        )

    # ---------- Observers ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self, change: ModelChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Listener failed on {change.kind}")

    def _commit(self, kind: str, collections: Tuple[str, ...], message: str = "") -> ModelChange:
        for name in collections:
            _SAVERS[name](self.store, getattr(self, name))
        self._ensure_selection()
        change = ModelChange(kind, collections, message)
        self._notify(change)
        return change

    def _ensure_selection(self) -> None:
        ids = [c.get("id") for c in self.active_categories()]
        if self.current_category_id not in ids:
            self.current_category_id = ids[0] if ids else None

    # ---------- Queries ----------
    def active_people(self) -> List[Dict[str, Any]]:
        return active(self.people)

    def active_categories(self) -> List[Dict[str, Any]]:
        return active(self.categories)

    def current_category(self) -> Optional[Dict[str, Any]]:
        return find_by_id(self.categories, self.current_category_id)

    def favorites_for(self, category_id: str) -> Dict[str, str]:
        sub = self.favorites.get(category_id)
        return dict(sub) if isinstance(sub, dict) else {}

    def favorite(self, category_id: str, person_id: str) -> str:
        return favorite_text(self.favorites, category_id, person_id)

    def overview(self) -> pd.DataFrame:
        """Active people (rows) x active categories (columns); unset cells are ''."""
        cats = self.active_categories()
        ppl = self.active_people()
        rows = [[self.favorite(c.get("id"), p.get("id")) for c in cats] for p in ppl]
        return pd.DataFrame(
            rows,
            index=pd.Index([display_name(p) for p in ppl], name="Person"),
            columns=[display_name(c) for c in cats],
        )

    # ---------- Add ----------
    def _fresh_id(self, prefix: str) -> str:
        taken = {r.get("id") for r in self.people} | {r.get("id") for r in self.categories}
        while True:
            candidate = new_id(prefix, self.rng)
            if candidate not in taken:
                return candidate

    def add_person(self, name: str) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise ValueError("Enter a name before adding.")
        record = Person(id=self._fresh_id("person"), name=name).model_dump()
        self.people = self.people + [record]
        self._commit("person_added", (PEOPLE,), f"Added {name}.")
        return record

    def add_category(self, name: str) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise ValueError("Enter a favorite type before adding.")
        record = Category(id=self._fresh_id("cat"), name=name).model_dump()
        self.categories = self.categories + [record]
        self._commit("category_added", (CATEGORIES,), f"Added favorite type: {name}.")
        return record

    # ---------- Archive / restore ----------
    def _set_archived(self, collection: str, item_id: str, archived: bool, message: str) -> bool:
        record = find_by_id(getattr(self, collection), item_id)
        if record is None:
            return False
        record["archived"] = archived
        kind = f"{collection}_{'archived' if archived else 'restored'}"
        self._commit(kind, (collection,), message.format(name=display_name(record)))
        return True

    def archive_person(self, person_id: str) -> bool:
        return self._set_archived(PEOPLE, person_id, True, "Archived {name}.")

    def restore_person(self, person_id: str) -> bool:
        return self._set_archived(PEOPLE, person_id, False, "Restored {name}.")

    def archive_category(self, category_id: str) -> bool:
        return self._set_archived(CATEGORIES, category_id, True, "Archived favorite type: {name}.")

    def restore_category(self, category_id: str) -> bool:
        return self._set_archived(CATEGORIES, category_id, False, "Restored favorite type: {name}.")

    # ---------- Delete (cascades into favorites) ----------
    def delete_person(self, person_id: str) -> bool:
        record = find_by_id(self.people, person_id)
        if record is None:
            return False
        people = [p for p in self.people if p.get("id") != person_id]
        favorites = {
            cat_id: ({k: v for k, v in sub.items() if k != person_id} if isinstance(sub, dict) else sub)
            for cat_id, sub in self.favorites.items()
        }
        self.people, self.favorites = people, favorites
        self._commit("person_deleted", (PEOPLE, FAVORITES), f"Deleted {display_name(record)}.")
        return True

    def delete_category(self, category_id: str) -> bool:
        record = find_by_id(self.categories, category_id)
        if record is None:
            return False
        categories = [c for c in self.categories if c.get("id") != category_id]
        favorites = {k: v for k, v in self.favorites.items() if k != category_id}
        self.categories, self.favorites = categories, favorites
        self._commit("category_deleted", (CATEGORIES, FAVORITES),
                     f"Deleted favorite type: {display_name(record)}.")
        return True

    # ---------- Id-dispatching variants ----------
    def _owner(self, item_id: str) -> Optional[str]:
        if find_by_id(self.people, item_id) is not None:
            return PEOPLE
        if find_by_id(self.categories, item_id) is not None:
            return CATEGORIES
        return None

    def archive(self, item_id: str) -> bool:
        owner = self._owner(item_id)
        if owner == PEOPLE:
            return self.archive_person(item_id)
        if owner == CATEGORIES:
            return self.archive_category(item_id)
        return False

    def restore(self, item_id: str) -> bool:
        owner = self._owner(item_id)
        if owner == PEOPLE:
            return self.restore_person(item_id)
        if owner == CATEGORIES:
            return self.restore_category(item_id)
        return False

    def delete(self, item_id: str) -> bool:
        owner = self._owner(item_id)
        if owner == PEOPLE:
            return self.delete_person(item_id)
        if owner == CATEGORIES:
            return self.delete_category(item_id)
        return False

    # ---------- Rename ----------
    def _rename(self, collection: str, item_id: str, name: str) -> bool:
        name = (name or "").strip()
        record = find_by_id(getattr(self, collection), item_id)
        if record is None or not name:
            return False
        old = display_name(record)
        record["name"] = name
        self._commit(f"{collection}_renamed", (collection,), f"Renamed {old} to {name}.")
        return True

    def rename_person(self, person_id: str, name: str) -> bool:
        return self._rename(PEOPLE, person_id, name)

    def rename_category(self, category_id: str, name: str) -> bool:
        return self._rename(CATEGORIES, category_id, name)

    # ---------- Favorites ----------
    def set_favorite(self, category_id: str, person_id: str, value: str) -> bool:
        """Upsert one cell. '' is stored as an explicit empty value."""
        if find_by_id(self.categories, category_id) is None or find_by_id(self.people, person_id) is None:
            return False
        value = "" if value is None else str(value)
        sub = self.favorites.get(category_id)
        sub = dict(sub) if isinstance(sub, dict) else {}
        sub[person_id] = value
        self.favorites = {**self.favorites, category_id: sub}
        self._commit("favorite_set", (FAVORITES,))
        return True

    # ---------- Selection ----------
    def select_category(self, category_id: Optional[str]) -> bool:
        ids = [c.get("id") for c in self.active_categories()]
        if category_id not in ids:
            return False
        self.current_category_id = category_id
        self._notify(ModelChange("selection_changed", ()))
        return True

    # ---------- Wholesale replace (import) ----------
    def replace_all(self, people: List[dict], categories: List[dict], favorites: Dict[str, Any]) -> ModelChange:
        self.people, self.categories, self.favorites = people, categories, favorites
        self.current_category_id = first_active_id(self.categories)
        return self._commit("replaced", (PEOPLE, CATEGORIES, FAVORITES),
                            "Family Favorites data imported.")

    # ---------- Random picks ----------
    def pick_random_category(self) -> Optional[Dict[str, Any]]:
        """Moves the selection to a random active category; None when there are none."""
        cat = pick_random(self.active_categories(), self.rng)
        if cat is None:
            return None
        self.current_category_id = cat.get("id")
        self._notify(ModelChange("selection_changed", (), f"Random type: {display_name(cat)}"))
        return cat

    def pick_random_person(self) -> Optional[Dict[str, Any]]:
        return pick_random(self.active_people(), self.rng)

    def pick_random_filled_favorite(self) -> Optional[FavoritePick]:
        pool = build_favorite_pool(self.categories, self.people, self.favorites)
        return pick_random(pool, self.rng)

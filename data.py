# data.py
# Local key-value persistence (one JSON file per key) + typed load/save helpers

import copy
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pathlib import Path

from dateutil.parser import isoparse

from config import (
    DATA_DIR,
    PEOPLE_KEY, CATEGORIES_KEY, FAVORITES_KEY, LAST_BACKUP_KEY,
    DEFAULT_CATEGORIES, EMPTY_PEOPLE, EMPTY_CATEGORIES, EMPTY_FAVORITES,
)
from models import is_record

logger = logging.getLogger(__name__)


class StorageIOError(OSError):
    """A read or write against the backing store failed."""


class LocalStore:
    """Flat key-value store: every key is a file under `data_dir`."""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise StorageIOError(f"cannot read {path}: {e}") from e

    def _write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            tmp.replace(path)
        except OSError as e:
            raise StorageIOError(f"cannot write {path}: {e}") from e

    def load(self, key: str) -> Optional[str]:
        try:
            return self._read(key)
        except StorageIOError as e:
            logger.error(f"Storage get error for {key}: {e}")
            return None

    def save(self, key: str, value: str) -> None:
        try:
            self._write(key, value)
        except StorageIOError as e:
            logger.error(f"Storage set error for {key}: {e}")


class MemoryStore(LocalStore):
    """In-process store with the same contract; `fail_writes` simulates a full or disabled disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, fail_writes: bool = False):
        self.items: Dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes

    def _read(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def _write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageIOError(f"quota exceeded writing {key}")
        self.items[key] = value


def _fresh(default):
    return copy.deepcopy(default)

def _parse_json(key: str, raw: Optional[str], default, expected: type):
    if not raw:
        return _fresh(default)
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing {key}: {e}")
        return _fresh(default)
    if not isinstance(value, expected):
        logger.warning(f"Unexpected shape for {key} ({type(value).__name__}); resetting")
        return _fresh(default)
    return value

def _parse_records(key: str, raw: Optional[str], default) -> List[Dict[str, Any]]:
    items = _parse_json(key, raw, default, list)
    if not all(is_record(r) for r in items):
        logger.warning(f"Unexpected record shape in {key}; resetting")
        return _fresh(default)
    return items

def _write_json(store: LocalStore, key: str, obj) -> None:
    store.save(key, json.dumps(obj, ensure_ascii=False))

def load_people(store: LocalStore) -> List[Dict[str, Any]]:
    return _parse_records(PEOPLE_KEY, store.load(PEOPLE_KEY), EMPTY_PEOPLE)

def save_people(store: LocalStore, items: List[Dict[str, Any]]) -> None:
    _write_json(store, PEOPLE_KEY, items)

def load_categories(store: LocalStore) -> List[Dict[str, Any]]:
    raw = store.load(CATEGORIES_KEY)
    # Absent key -> first run, seed examples. Present but broken -> empty.
    if not raw:
        return _fresh(DEFAULT_CATEGORIES)
    return _parse_records(CATEGORIES_KEY, raw, EMPTY_CATEGORIES)

def save_categories(store: LocalStore, items: List[Dict[str, Any]]) -> None:
    _write_json(store, CATEGORIES_KEY, items)

def load_favorites(store: LocalStore) -> Dict[str, Dict[str, str]]:
    return _parse_json(FAVORITES_KEY, store.load(FAVORITES_KEY), EMPTY_FAVORITES, dict)

def save_favorites(store: LocalStore, favorites: Dict[str, Dict[str, str]]) -> None:
    _write_json(store, FAVORITES_KEY, favorites)

def load_last_backup(store: LocalStore) -> Optional[datetime]:
    raw = store.load(LAST_BACKUP_KEY)
    if not raw:
        return None
    try:
        dt = isoparse(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring unreadable backup timestamp: {raw!r}")
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

def record_backup_time(store: LocalStore, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    store.save(LAST_BACKUP_KEY, stamp)
    return now

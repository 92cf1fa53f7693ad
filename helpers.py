# helpers.py
# Id generation, active filters, random pools, backup-reminder text

import logging
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar

from dateutil.relativedelta import relativedelta

from config import BACKUP_REMINDER_AFTER
from models import FavoritePick

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------- Ids ----------
def new_id(prefix: str, rng: Optional[random.Random] = None) -> str:
    """
    Return `<prefix>_<uuid4>`. With an injected `rng` the sequence is
    reproducible (tests); without one the system UUID source is used.
    """
    if rng is None:
        return f"{prefix}_{uuid.uuid4()}"
    return f"{prefix}_{uuid.UUID(int=rng.getrandbits(128), version=4)}"

# ---------- Records ----------
def is_active(record: Dict[str, Any]) -> bool:
    # imported records may lack the flag; treat missing as active
    return not record.get("archived")

def active(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Non-archived records, in collection order."""
    return [r for r in items if is_active(r)]

def find_by_id(items: List[Dict[str, Any]], item_id: Optional[str]) -> Optional[Dict[str, Any]]:
    if item_id is None:
        return None
    return next((r for r in items if r.get("id") == item_id), None)

def first_active_id(items: List[Dict[str, Any]]) -> Optional[str]:
    act = active(items)
    return act[0].get("id") if act else None

def display_name(record: Dict[str, Any]) -> str:
    name = record.get("name")
    return name if isinstance(name, str) else ""

def favorite_text(favorites: Dict[str, Any], category_id: str, person_id: str) -> str:
    """Stored value for a pair, '' when unset or not a string."""
    sub = favorites.get(category_id)
    if not isinstance(sub, dict):
        return ""
    value = sub.get(person_id)
    return value if isinstance(value, str) else ""

# ---------- Random picks ----------
def pick_random(items: Sequence[T], rng: Optional[random.Random] = None) -> Optional[T]:
    """Uniform choice; None when the pool is empty."""
    if not items:
        return None
    return (rng or random).choice(items)

def build_favorite_pool(categories: List[Dict[str, Any]], people: List[Dict[str, Any]],
                        favorites: Dict[str, Any]) -> List[FavoritePick]:
    """
    Every filled-in (category, person, value) where both ends are active and
    the value is non-blank after trimming. Order: categories in collection
    order, then people in collection order.
    """
    pool = []
    act_people = active(people)
    for cat in active(categories):
        cat_id = cat.get("id")
        sub = favorites.get(cat_id)
        if not isinstance(sub, dict):
            continue
        for person in act_people:
            person_id = person.get("id")
            value = sub.get(person_id)
            if not isinstance(value, str) or not value.strip():
                continue
            pool.append(FavoritePick(
                category_id=cat_id,
                category_name=display_name(cat),
                person_id=person_id,
                person_name=display_name(person),
                value=value.strip(),
            ))
    return pool

# ---------- Time / backup reminder ----------
def format_local_datetime(dt: Optional[datetime]) -> str:
    """Short local form like 'Mar 3, 09:41'."""
    if not isinstance(dt, datetime):
        return "Unknown time"
    local = dt.astimezone() if dt.tzinfo else dt
    return f"{local.strftime('%b')} {local.day}, {local.strftime('%H:%M')}"

def time_since(dt: datetime, now: datetime) -> str:
    """Coarse human age: '3 days', '2 hours', 'just now'."""
    if now <= dt:
        return "just now"
    delta = relativedelta(now, dt)
    for unit in ("years", "months", "days", "hours", "minutes"):
        n = getattr(delta, unit)
        if n:
            label = unit if n != 1 else unit[:-1]
            return f"{n} {label}"
    return "just now"

def backup_reminder(last_backup: Optional[datetime], now: Optional[datetime] = None,
                    after: timedelta = BACKUP_REMINDER_AFTER) -> Tuple[bool, str]:
    """
    Returns (needs_backup, text). Advisory only.
    """
    now = now or datetime.now(timezone.utc)
    if last_backup is None:
        return True, "No backup yet."
    when = format_local_datetime(last_backup)
    if now - last_backup > after:
        return True, (f"It's been more than a day since your last backup ({when}, "
                      f"{time_since(last_backup, now)} ago).")
    return False, f"Last backup: {when}"

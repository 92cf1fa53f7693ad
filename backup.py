# backup.py
# JSON snapshot export / import + clipboard delivery with manual-copy fallback

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, NamedTuple, Optional

from pydantic import ValidationError

from data import record_backup_time
from models import Snapshot
from tracker import FavoritesTracker

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("id", "name", "archived")

ClipboardWriter = Callable[[str], None]


class SnapshotError(ValueError):
    """Import document could not be used; nothing was changed."""


class ExportResult(NamedTuple):
    text: str
    copied: bool
    message: str
    backed_up_at: datetime


def _ordered(record: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: record[k] for k in RECORD_FIELDS if k in record}
    out.update({k: v for k, v in record.items() if k not in out})
    return out

def snapshot_dict(tracker: FavoritesTracker) -> Dict[str, Any]:
    return {
        "people": [_ordered(p) for p in tracker.people],
        "categories": [_ordered(c) for c in tracker.categories],
        "favorites": tracker.favorites,
    }

def export_snapshot(tracker: FavoritesTracker) -> str:
    """Pretty JSON of the full state. Pure: does not touch the store."""
    return json.dumps(snapshot_dict(tracker), ensure_ascii=False, indent=2)

def parse_snapshot(raw: str) -> Snapshot:
    if not raw or not raw.strip():
        raise SnapshotError("Paste your backup JSON first.")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Error importing data: {e}")
        raise SnapshotError("Error importing data. Check the JSON and try again.") from e
    if not isinstance(data, dict):
        logger.warning(f"Backup root is {type(data).__name__}, expected object")
        raise SnapshotError("Invalid backup format.")
    try:
        return Snapshot.model_validate(data, strict=True)
    except ValidationError as e:
        logger.warning(f"Backup failed shape check: {e.error_count()} error(s)")
        raise SnapshotError("Invalid backup format.") from e

def import_snapshot(tracker: FavoritesTracker, raw: str) -> Snapshot:
    """
    Replace all data with the document in `raw`. All-or-nothing: on
    SnapshotError the tracker is left exactly as it was.
    """
    snap = parse_snapshot(raw)
    tracker.replace_all(snap.people, snap.categories, snap.favorites)
    logger.info(f"Imported {len(snap.people)} people, {len(snap.categories)} categories")
    return snap

def export_backup(tracker: FavoritesTracker, clipboard: Optional[ClipboardWriter] = None,
                  now: Optional[datetime] = None) -> ExportResult:
    """
    Try the clipboard first; if there is none, or the write is rejected, the
    caller should show `text` for manual copy. The backup time is recorded
    either way.
    """
    text = export_snapshot(tracker)
    copied = False
    if clipboard is not None:
        try:
            clipboard(text)
            copied = True
        except Exception as e:
            logger.warning(f"Clipboard write rejected, falling back to panel: {e}")
    stamp = record_backup_time(tracker.store, now)
    logger.info(f"Exported {len(tracker.people)} people, {len(tracker.categories)} categories")
    message = ("Family Favorites data copied to clipboard." if copied
               else "Backup ready – copy from the panel.")
    return ExportResult(text, copied, message, stamp)

def backup_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"family-favorites-{now.strftime('%Y%m%d-%H%M')}.json"

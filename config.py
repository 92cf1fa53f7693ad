# config.py
# Paths, storage keys & seed defaults

import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("FAMILY_FAVORITES_DATA", BASE_DIR / "data")).expanduser()

# Flat key-value namespace (one <key>.json per key under DATA_DIR)
PEOPLE_KEY = "familyFavorites_people"
CATEGORIES_KEY = "familyFavorites_categories"
FAVORITES_KEY = "familyFavorites_favorites"
LAST_BACKUP_KEY = "familyFavorites_lastBackup"

# Seeded only when the categories key has never been written
DEFAULT_CATEGORIES = [
    {"id": "cat_candy", "name": "Candy", "archived": False},
    {"id": "cat_icecream", "name": "Ice Cream", "archived": False},
    {"id": "cat_snack", "name": "Snack", "archived": False},
    {"id": "cat_fastfood", "name": "Fast Food", "archived": False},
    {"id": "cat_movie", "name": "Movie", "archived": False},
    {"id": "cat_tv", "name": "TV Show", "archived": False},
]

EMPTY_PEOPLE = []
EMPTY_CATEGORIES = []
EMPTY_FAVORITES = {}

BACKUP_REMINDER_AFTER = timedelta(days=1)

# Off -> export always opens the manual-copy panel
CLIPBOARD_ENABLED = os.environ.get("FAMILY_FAVORITES_CLIPBOARD", "1").lower() not in ("0", "false", "no")

# app.py
# Family Favorites — who likes what, kept locally as JSON
# + random picks & copy/paste backups

import streamlit as st

from config import DATA_DIR
from data import LocalStore
from tracker import FavoritesTracker, ModelChange
from ui import (
    category_select_section,
    favorites_list_section,
    add_person_section,
    random_section,
    people_manage_section,
    categories_manage_section,
    overview_section,
    backup_reminder_section,
    export_section,
    import_section,
)

st.set_page_config(page_title="Family Favorites", page_icon="⭐", layout="centered")
st.title("⭐ Family Favorites")

def _on_change(change: ModelChange) -> None:
    # toasts show on the next run; typing into a cell doesn't need one
    if change.message:
        st.session_state.toasts.append(change.message)
    if change.kind != "favorite_set":
        st.session_state.rerun_requested = True

if "tracker" not in st.session_state:
    tracker = FavoritesTracker.load(LocalStore(DATA_DIR))
    tracker.subscribe(_on_change)
    st.session_state.tracker = tracker
    st.session_state.toasts = []
    st.session_state.rerun_requested = False

tracker: FavoritesTracker = st.session_state.tracker

# Changes made in widget callbacks already precede this run
st.session_state.rerun_requested = False
for msg in st.session_state.toasts:
    st.toast(msg)
st.session_state.toasts = []

# Main view
category_select_section(tracker)
favorites_list_section(tracker)
add_person_section(tracker)

st.markdown("---")
random_section(tracker)

# Settings
st.markdown("---")
with st.expander("⚙️ Settings", expanded=False):
    people_manage_section(tracker)
    st.markdown("---")
    categories_manage_section(tracker)
    st.markdown("---")
    st.markdown("### Everyone at a glance")
    overview_section(tracker)

st.markdown("---")
st.markdown("## 💾 Backup & Restore")
export_section(tracker)
backup_reminder_section(tracker)
with st.expander("Import from backup", expanded=False):
    import_section(tracker)

st.caption(f"Data is stored locally under {DATA_DIR}/*.json. Export a backup now and then.")

# Changes made inline during this run: render again from the new state
if st.session_state.rerun_requested:
    st.session_state.rerun_requested = False
    st.rerun()

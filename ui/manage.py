import streamlit as st
from typing import Callable, Dict, List

from helpers import display_name, is_active
from tracker import FavoritesTracker
from ui.favorites import add_person_section

def _manage_rows(items: List[Dict], prefix: str, empty_text: str,
                 archive: Callable[[str], bool], restore: Callable[[str], bool],
                 delete: Callable[[str], bool]) -> None:
    if not items:
        st.info(empty_text)
        return
    for r in items:
        rid = r.get("id")
        c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
        c1.markdown(f"**{display_name(r)}**")
        c2.caption("Active" if is_active(r) else "Archived")
        if is_active(r):
            c3.button("Archive", key=f"{prefix}_archive::{rid}", on_click=archive, args=(rid,))
        else:
            c3.button("Restore", key=f"{prefix}_restore::{rid}", on_click=restore, args=(rid,), type="primary")
        c4.button("Delete", key=f"{prefix}_delete::{rid}", on_click=delete, args=(rid,))

def _rename_form(items: List[Dict], form_key: str, rename: Callable[[str, str], bool]) -> None:
    if not items:
        return
    with st.form(form_key, clear_on_submit=True):
        c1, c2, c3 = st.columns([2, 2, 1])
        target = c1.selectbox("Rename", items, format_func=display_name, label_visibility="collapsed")
        new_name = c2.text_input("New name", placeholder="New name", label_visibility="collapsed")
        ok = c3.form_submit_button("Rename")
        if ok and target is not None:
            if not rename(target.get("id"), new_name):
                st.toast("Enter a new name first.")

def people_manage_section(tracker: FavoritesTracker) -> None:
    st.markdown("### Family members")
    _manage_rows(tracker.people, "person", "No family members yet.",
                 tracker.archive_person, tracker.restore_person, tracker.delete_person)
    add_person_section(tracker, form_key="add_person_settings")
    _rename_form(tracker.people, "rename_person", tracker.rename_person)

def categories_manage_section(tracker: FavoritesTracker) -> None:
    st.markdown("### Favorite types")
    _manage_rows(tracker.categories, "category", "No favorite types yet.",
                 tracker.archive_category, tracker.restore_category, tracker.delete_category)
    with st.form("add_category", clear_on_submit=True):
        c1, c2 = st.columns([3, 1])
        name = c1.text_input("New favorite type", placeholder="e.g. Pizza topping", label_visibility="collapsed")
        ok = c2.form_submit_button("Add")
        if ok:
            try:
                tracker.add_category(name)
            except ValueError as e:
                st.toast(str(e))
    _rename_form(tracker.categories, "rename_category", tracker.rename_category)

def overview_section(tracker: FavoritesTracker) -> None:
    df = tracker.overview()
    if df.empty:
        st.info("Nothing to show yet.")
        return
    st.dataframe(df, use_container_width=True)

import streamlit as st
from helpers import display_name
from tracker import FavoritesTracker

SELECT_KEY = "category_select"

def _fav_key(category_id: str, person_id: str) -> str:
    return f"fav::{category_id}::{person_id}"

def _on_select(tracker: FavoritesTracker) -> None:
    tracker.select_category(st.session_state.get(SELECT_KEY))

def _on_edit(tracker: FavoritesTracker, category_id: str, person_id: str) -> None:
    tracker.set_favorite(category_id, person_id, st.session_state.get(_fav_key(category_id, person_id), ""))

def category_select_section(tracker: FavoritesTracker) -> None:
    cats = tracker.active_categories()
    if not cats:
        st.selectbox("Favorite type", ["No types yet"], disabled=True)
        st.caption("Add a favorite type in settings (⚙️) to begin.")
        return

    names = {c.get("id"): display_name(c) for c in cats}
    # keep the widget in step with selections made elsewhere (random pick, deletes)
    st.session_state[SELECT_KEY] = tracker.current_category_id
    st.selectbox(
        "Favorite type", options=list(names), key=SELECT_KEY,
        format_func=lambda cid: names.get(cid, ""),
        on_change=_on_select, args=(tracker,),
    )
    current = tracker.current_category()
    if current:
        st.caption(f"Showing favorites for: {display_name(current)}")
    else:
        st.caption("Choose a favorite type above.")

def favorites_list_section(tracker: FavoritesTracker) -> None:
    cat_id = tracker.current_category_id
    if not cat_id:
        st.info("No favorite type selected yet.")
        return
    people = tracker.active_people()
    if not people:
        st.info("No family members yet. Add one below.")
        return

    for p in people:
        pid = p.get("id")
        key = _fav_key(cat_id, pid)
        st.session_state[key] = tracker.favorite(cat_id, pid)
        c1, c2 = st.columns([1, 3])
        c1.markdown(f"**{display_name(p)}**")
        c2.text_input(
            display_name(p), key=key, placeholder="Their favorite...",
            label_visibility="collapsed",
            on_change=_on_edit, args=(tracker, cat_id, pid),
        )

def add_person_section(tracker: FavoritesTracker, form_key: str = "add_person_main") -> None:
    with st.form(form_key, clear_on_submit=True):
        c1, c2 = st.columns([3, 1])
        name = c1.text_input("Add family member", placeholder="Name", label_visibility="collapsed")
        ok = c2.form_submit_button("Add")
        if ok:
            try:
                tracker.add_person(name)
            except ValueError as e:
                st.toast(str(e))

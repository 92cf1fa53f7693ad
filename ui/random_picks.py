import streamlit as st
from helpers import display_name
from tracker import FavoritesTracker

HIGHLIGHT_KEY = "random_highlight"

def random_section(tracker: FavoritesTracker) -> None:
    c1, c2, c3 = st.columns(3)

    if c1.button("🎲 Random type", use_container_width=True):
        # selection change reaches the user through the tracker's toast
        if tracker.pick_random_category() is None:
            st.toast("No favorite types available.")

    if c2.button("🎲 Random person", use_container_width=True):
        person = tracker.pick_random_person()
        if person is None:
            st.toast("No family members yet.")
        else:
            st.session_state[HIGHLIGHT_KEY] = f"**Random person:** {display_name(person)}"
            st.toast(f"Tonight’s star: {display_name(person)}")

    if c3.button("🎲 Random favorite", use_container_width=True):
        if not tracker.active_people() or not tracker.active_categories():
            st.toast("Need at least one person and one type.")
        else:
            pick = tracker.pick_random_filled_favorite()
            if pick is None:
                st.toast("No favorites filled in yet.")
            else:
                st.session_state[HIGHLIGHT_KEY] = (
                    f"**Tonight’s pick:** {pick.person_name} → {pick.value} **({pick.category_name})**"
                )
                st.toast("Random favorite chosen!")

    if st.session_state.get(HIGHLIGHT_KEY):
        st.markdown(st.session_state[HIGHLIGHT_KEY])

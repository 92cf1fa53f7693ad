import json
import streamlit as st
import streamlit.components.v1 as components
from datetime import datetime, timezone

from backup import SnapshotError, backup_filename, export_backup, import_snapshot
from config import CLIPBOARD_ENABLED
from data import load_last_backup
from helpers import backup_reminder
from tracker import FavoritesTracker

PANEL_KEY = "backup_panel_text"

def browser_clipboard(text: str) -> None:
    """
    Hand the text to the browser's clipboard. The write itself is async on
    the client; if the browser has no clipboard API or rejects the write,
    the snippet shows the JSON in a selectable box instead.
    """
    payload = json.dumps(text)
    components.html(f"""
<div id="fallback" style="display:none;font-family:sans-serif;font-size:13px">
  Clipboard blocked. Copy the backup below:
  <textarea id="fb" style="width:100%;height:140px"></textarea>
</div>
<script>
(async () => {{
  const text = {payload};
  const showPanel = () => {{
    const box = document.getElementById("fb");
    box.value = text;
    document.getElementById("fallback").style.display = "block";
    box.focus(); box.select();
  }};
  if (!navigator.clipboard || !navigator.clipboard.writeText) {{ showPanel(); return; }}
  try {{ await navigator.clipboard.writeText(text); }} catch (e) {{ showPanel(); }}
}})();
</script>
""", height=180)

def backup_reminder_section(tracker: FavoritesTracker) -> bool:
    needs, text = backup_reminder(load_last_backup(tracker.store), datetime.now(timezone.utc))
    if needs:
        st.warning(text)
    else:
        st.caption(text)
    return needs

def export_section(tracker: FavoritesTracker) -> None:
    c1, c2 = st.columns([1, 1])
    if c1.button("📤 Export / Backup", use_container_width=True):
        result = export_backup(tracker, clipboard=browser_clipboard if CLIPBOARD_ENABLED else None)
        st.session_state[PANEL_KEY] = None if result.copied else result.text
        st.toast(result.message)
    if st.session_state.get(PANEL_KEY) and c2.button("Close backup panel", use_container_width=True):
        st.session_state[PANEL_KEY] = None

    text = st.session_state.get(PANEL_KEY)
    if text:
        st.markdown("**Backup ready – copy everything below and keep it somewhere safe.**")
        st.code(text, language="json")
        st.download_button("⬇️ Download backup", data=text, file_name=backup_filename(),
                           mime="application/json")

def import_section(tracker: FavoritesTracker) -> None:
    with st.form("import_form", clear_on_submit=True):
        st.markdown("Paste your Family Favorites backup JSON here. **This will replace your current data.**")
        raw = st.text_area("Backup JSON", value="", height=160, label_visibility="collapsed")
        upload = st.file_uploader("…or upload a backup file", type=["json"])
        ok = st.form_submit_button("📥 Import (replace all data)")
        if ok:
            if upload is not None:
                raw = upload.getvalue().decode("utf-8", errors="replace")
            try:
                import_snapshot(tracker, raw)
            except SnapshotError as e:
                st.error(str(e))
            else:
                st.session_state[PANEL_KEY] = None

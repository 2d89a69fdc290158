from typing import Any, Dict, List

import streamlit as st

from services.apod import apod_item_id, entry_media_url

CAPTION_LIMIT = 140
GRID_COLUMNS = 3

def short_caption(text: str, limit: int = CAPTION_LIMIT) -> str:
    if not text:
        return ""
    return text[:limit] + ("…" if len(text) > limit else "")

@st.dialog("Astronomy Picture of the Day", width="large")
def show_detail(item: Dict[str, Any]):
    """Full-size view of one entry. Close button, Escape and outside click dismiss it."""
    render_detail(item)

def render_detail(item: Dict[str, Any]):
    st.subheader(item.get("title") or "Untitled")
    st.caption(item.get("date", ""))

    if item.get("media_type") == "video" and item.get("url"):
        st.video(item["url"])
    else:
        url = entry_media_url(item)
        if url:
            st.image(url, width='stretch')
        else:
            st.info("No preview available.")

    st.write(item.get("explanation", ""))
    if item.get("copyright"):
        st.caption(f"© {item.get('copyright')}")

def render_card(item: Dict[str, Any], idx: int):
    d = item.get("date", "")
    st.markdown(f"**{item.get('title') or 'Untitled'}**")
    st.caption(d)
    st.image(entry_media_url(item), width='stretch')
    st.write(short_caption(item.get("explanation", "")))
    if st.button("🔭 View", key=f"open_{apod_item_id(item)}_{idx}"):
        show_detail(item)


class StreamlitGalleryDisplay:
    """Renders gallery states into a single st.empty() slot; each call replaces the last."""

    def __init__(self, slot):
        self.slot = slot

    def show_idle(self):
        self.slot.info("Pick an optional date range and press **Fetch Space Images**.")

    def show_loading(self):
        self.slot.info("Loading images…")

    def show_error(self, message: str):
        self.slot.error(message)

    def show_empty(self):
        self.slot.info("No images found.")

    def show_grid(self, entries: List[Dict[str, Any]]):
        # Masonry: 3 columns, round-robin
        with self.slot.container():
            cols = st.columns(GRID_COLUMNS, gap="small")
            for idx, it in enumerate(entries):
                with cols[idx % GRID_COLUMNS].container(border=True):
                    render_card(it, idx)

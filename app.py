import logging
from datetime import date
from typing import Optional

import streamlit as st

from services.apod import APOD_EARLIEST, dataset_url, date_from_query_value
from services.gallery import GalleryCache, GalleryController
from components.gallery_view import StreamlitGalleryDisplay
from components.facts import render_did_you_know

# ---------------------------
# Logging
# ---------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
)
logger = logging.getLogger("apod_gallery")

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="NASA Space Gallery",
    page_icon="🔭",
    layout="wide",
    initial_sidebar_state="expanded",
)

TODAY = date.today()

def _date_from_query(name: str) -> Optional[date]:
    """Read ?start= / ?end= so a date range can be shared as a link."""
    return date_from_query_value(st.query_params.get(name), TODAY)

def _iso(d: Optional[date]) -> str:
    return d.isoformat() if d else ""

# ---------------------------
# Session bootstrap
# ---------------------------
if "apod_cache" not in st.session_state:
    st.session_state.apod_cache = GalleryCache()  # one dataset per browser session

if "gallery_requested" not in st.session_state:
    st.session_state.gallery_requested = False

if "start_date" not in st.session_state:
    st.session_state.start_date = _date_from_query("start")

if "end_date" not in st.session_state:
    st.session_state.end_date = _date_from_query("end")

def request_gallery():
    st.session_state.gallery_requested = True
    params = {"start": _iso(st.session_state.start_date), "end": _iso(st.session_state.end_date)}
    st.query_params.clear()
    st.query_params.update({k: v for k, v in params.items() if v})

# ---------------------------
# Sidebar: date range + fetch
# ---------------------------
st.sidebar.title("⚙️ Controls")
st.sidebar.date_input(
    "Start date",
    min_value=APOD_EARLIEST,
    max_value=TODAY,
    format="YYYY-MM-DD",
    key="start_date",
    on_change=request_gallery,
)
st.sidebar.date_input(
    "End date",
    min_value=APOD_EARLIEST,
    max_value=TODAY,
    format="YYYY-MM-DD",
    key="end_date",
    on_change=request_gallery,
)
st.sidebar.button("🚀 Fetch Space Images", type="primary", on_click=request_gallery, width='stretch')
st.sidebar.caption("Leave both dates empty to see the newest pictures.")

render_did_you_know()

# ---------------------------
# Header
# ---------------------------
st.markdown(
    """
    <div style="display:flex;align-items:center;gap:12px;">
    <h1 style="margin:0;">🔭 NASA Space Gallery</h1>
    <span style="opacity:.8;">Astronomy Picture of the Day, by date range</span>
    </div>
    """,
    unsafe_allow_html=True
)

# ---------------------------
# Gallery
# ---------------------------
display = StreamlitGalleryDisplay(st.empty())
controller = GalleryController(display, cache=st.session_state.apod_cache, url=dataset_url())

if st.session_state.gallery_requested:
    controller.display_range(_iso(st.session_state.start_date), _iso(st.session_state.end_date))
else:
    display.show_idle()

st.caption("APOD © NASA | Images served from the public APOD dataset mirror.")

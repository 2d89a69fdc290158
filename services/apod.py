import os
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests
import streamlit as st
from dateutil.parser import isoparse

from services.errors import FetchError, ParseError

DATA_URL = "https://cdn.jsdelivr.net/gh/GCA-Classroom/apod/data.json"
# Earliest APOD date is 1995-06-16
APOD_EARLIEST = date(1995, 6, 16)
REQUEST_TIMEOUT = 30

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

logger = logging.getLogger(__name__)

def dataset_url() -> str:
    # secrets first, then env, then the public mirror
    try:
        return st.secrets["apod"]["data_url"]
    except Exception:
        return os.environ.get("APOD_DATA_URL", DATA_URL)

def fetch_dataset(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
    bypass_cache: bool = False,
) -> Any:
    """Fetch the APOD feed and decode it as JSON.

    Raises FetchError for network failures and non-2xx responses,
    ParseError when the body is not JSON. The decoded value is returned
    untouched; callers decide what to do with non-list payloads.
    """
    http = session or requests
    headers = NO_CACHE_HEADERS if bypass_cache else None
    logger.info("Fetching APOD dataset from %s", url)
    try:
        r = http.get(url, headers=headers, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Could not fetch {url}: {e}") from e
    try:
        return r.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON from {url}: {e}") from e

def sort_newest_first(items: List[Any]) -> List[Dict[str, Any]]:
    """Dict entries only, newest date first. Missing dates sort last, ties keep feed order."""
    entries = [it for it in items if isinstance(it, dict)]
    dropped = len(items) - len(entries)
    if dropped:
        logger.warning("Ignoring %d non-object entries in APOD dataset", dropped)
    return sorted(entries, key=lambda x: x.get("date") or "", reverse=True)

def entry_media_url(item: Dict[str, Any]) -> Optional[str]:
    """hdurl wins over url; None when the entry has neither."""
    return item.get("hdurl") or item.get("url") or None

def is_image(item: Dict[str, Any]) -> bool:
    media_type = item.get("media_type")
    return not media_type or media_type == "image"

def apod_item_id(item: Dict[str, Any]) -> str:
    """Stable ID: use date; APOD is unique per date."""
    return item.get("date", "")

def parse_apod_date(s: str) -> date:
    return isoparse(s).date()

def date_from_query_value(raw: Optional[str], latest: date) -> Optional[date]:
    """Date-picker value for a ?start= / ?end= parameter, or None if missing, malformed or out of range."""
    if not raw:
        return None
    try:
        d = parse_apod_date(raw)
    except ValueError:
        logger.warning("Ignoring malformed date query parameter %r", raw)
        return None
    if d < APOD_EARLIEST or d > latest:
        return None
    return d

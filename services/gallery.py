"""Gallery controller: cached dataset, date-range filtering and card selection.

Dates are compared as plain strings. That is only correct because every
``date`` in the feed (and every bound coming from the date pickers) is a
fixed-width ``YYYY-MM-DD`` string, so callers must pass bounds in that form.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from services.apod import DATA_URL, entry_media_url, fetch_dataset, is_image, sort_newest_first
from services.errors import FetchError, InvalidRangeError, ParseError

DISPLAY_LIMIT = 9  # 3x3 grid
GENERIC_ERROR = "Sorry, could not load images. Try again later."
RANGE_ERROR = "Start date must be before or equal to end date."

logger = logging.getLogger(__name__)

Entry = Dict[str, Any]


class DisplayState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    ERROR = "error"


class GallerySurface(Protocol):
    def show_idle(self) -> None: ...
    def show_loading(self) -> None: ...
    def show_error(self, message: str) -> None: ...
    def show_empty(self) -> None: ...
    def show_grid(self, entries: List[Entry]) -> None: ...


@dataclass
class GalleryCache:
    """Holds the sorted dataset for one session. Written once, never refreshed."""
    entries: Optional[List[Entry]] = None

    @property
    def loaded(self) -> bool:
        return self.entries is not None


def validate_range(start: str, end: str) -> None:
    if start and end and start > end:
        raise InvalidRangeError(RANGE_ERROR)


def filter_by_range(items: Optional[List[Entry]], start: str = "", end: str = "") -> List[Entry]:
    """Entries whose date falls in [start, end]; an empty bound is open on that side."""
    if items is None:
        return []
    if not start and not end:
        return items

    def in_range(item: Entry) -> bool:
        d = item.get("date") or ""
        if not d:
            return False
        if start and d < start:
            return False
        if end and d > end:
            return False
        return True

    return [it for it in items if in_range(it)]


def select_for_display(items: List[Entry], limit: int = DISPLAY_LIMIT) -> List[Entry]:
    # cap first, then drop entries with nothing to show
    shown = [it for it in items if is_image(it)][:limit]
    return [it for it in shown if entry_media_url(it)]


class GalleryController:
    def __init__(
        self,
        display: GallerySurface,
        cache: Optional[GalleryCache] = None,
        url: str = DATA_URL,
        fetcher: Callable[..., Any] = fetch_dataset,
    ):
        self.display = display
        self.cache = cache if cache is not None else GalleryCache()
        self.url = url
        self.fetcher = fetcher
        self.state = DisplayState.IDLE

    def load(self) -> List[Entry]:
        """Return the cached dataset, fetching it on first use."""
        if self.cache.loaded:
            return self.cache.entries
        data = self.fetcher(self.url, bypass_cache=True)
        if isinstance(data, list):
            entries = sort_newest_first(data)
        else:
            logger.warning("Unexpected APOD payload %s; expected a list", type(data).__name__)
            entries = []
        self.cache.entries = entries
        logger.info("Cached %d APOD entries", len(entries))
        return entries

    def fetch_and_display(self) -> List[Entry]:
        return self.display_range("", "")

    def display_range(self, start: str = "", end: str = "") -> List[Entry]:
        """Validate, load, filter and render. Returns the entries shown as cards."""
        try:
            validate_range(start, end)
        except InvalidRangeError as e:
            self._fail(str(e))
            return []

        self.state = DisplayState.LOADING
        self.display.show_loading()
        try:
            entries = self.load()
        except (FetchError, ParseError) as e:
            logger.error("Error fetching APOD data: %s", e, exc_info=True)
            self._fail(GENERIC_ERROR)
            return []

        return self.render(filter_by_range(entries, start, end))

    def render(self, items: List[Entry]) -> List[Entry]:
        selected = select_for_display(items)
        if selected:
            self.state = DisplayState.POPULATED
            self.display.show_grid(selected)
        else:
            self.state = DisplayState.EMPTY
            self.display.show_empty()
        return selected

    def _fail(self, message: str) -> None:
        self.state = DisplayState.ERROR
        self.display.show_error(message)

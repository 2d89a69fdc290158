from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest


class RecordingDisplay:
    """Stand-in for the Streamlit surface; records every render call in order."""

    def __init__(self):
        self.calls: List[tuple] = []

    def show_idle(self):
        self.calls.append(("idle",))

    def show_loading(self):
        self.calls.append(("loading",))

    def show_error(self, message):
        self.calls.append(("error", message))

    def show_empty(self):
        self.calls.append(("empty",))

    def show_grid(self, entries):
        self.calls.append(("grid", [e.get("date") for e in entries]))


def json_response(payload: Any) -> MagicMock:
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = payload
    return resp


def image_response(body: bytes = b"\xff\xd8fake-jpeg") -> MagicMock:
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.iter_content.return_value = [body]
    return resp


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def sample_entries() -> List[Dict[str, Any]]:
    return [
        {"date": "2024-01-01", "media_type": "image", "url": "http://x/a.jpg", "title": "A"},
        {"date": "2024-01-03", "media_type": "video", "url": "http://x/b", "title": "B"},
        {"date": "2024-01-02", "media_type": "image", "hdurl": "http://x/c.jpg", "title": "C"},
    ]

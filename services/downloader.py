"""Download a handful of APOD images into ``img/apod``.

Run with ``python -m services.downloader`` (or the ``fetch-apod`` script).
The feed is fetched fresh every run, image entries are walked in feed order,
and downloads stop after MAX_DOWNLOAD successful files. A failed image is
logged and skipped; only a failed feed fetch makes the run exit non-zero.
"""
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from services.apod import DATA_URL, REQUEST_TIMEOUT, fetch_dataset
from services.errors import DownloadError, FetchError, ParseError

OUT_DIR = Path(__file__).resolve().parent.parent / "img" / "apod"
MAX_DOWNLOAD = 6  # how many images to download
CHUNK_SIZE = 64 * 1024

HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
UNSAFE_CHARS = re.compile(r"[^a-z0-9\-_. ]", re.IGNORECASE)

logger = logging.getLogger(__name__)


def download_url(item: Dict[str, Any]) -> Optional[str]:
    """hdurl if it is http(s), else url if it is http(s), else None."""
    for key in ("hdurl", "url"):
        candidate = item.get(key)
        if candidate and HTTP_URL.match(candidate):
            return candidate
    return None


def select_downloadable(data: List[Any]) -> List[Dict[str, Any]]:
    return [
        it for it in data
        if isinstance(it, dict) and it.get("media_type") == "image" and download_url(it)
    ]


def safe_filename(item: Dict[str, Any], url: str) -> str:
    """``<date>_<title><ext>`` with the title reduced to filesystem-friendly characters.

    Raises DownloadError when the URL cannot be parsed.
    """
    try:
        path = urlparse(url).path
    except ValueError as e:
        raise DownloadError(f"{url}: {e}") from e
    ext = os.path.splitext(path)[1] or ".jpg"
    title = UNSAFE_CHARS.sub("", item.get("title") or "apod")
    title = re.sub(r"\s+", "_", title)[:40]
    return f"{item.get('date') or 'unknown'}_{title}{ext}"


def download_file(url: str, dest: Path, *, session: requests.Session) -> Path:
    r = None
    try:
        r = session.get(url, stream=True, timeout=REQUEST_TIMEOUT)
        r.raise_for_status()
        with open(dest, "wb") as fh:
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    fh.write(chunk)
    except (requests.RequestException, OSError) as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"{url}: {e}") from e
    finally:
        if r is not None:
            r.close()
    return dest


def run(
    *,
    session: Optional[requests.Session] = None,
    out_dir: Path = OUT_DIR,
    limit: int = MAX_DOWNLOAD,
    url: str = DATA_URL,
) -> int:
    """Fetch the feed and download up to ``limit`` images. Returns the number written."""
    session = session or requests.Session()
    out_dir.mkdir(parents=True, exist_ok=True)

    data = fetch_dataset(url, session=session)
    if not isinstance(data, list):
        raise ParseError("Unexpected JSON shape: expected an array")

    images = select_downloadable(data)
    logger.info("Found %d image entries; will download up to %d.", len(images), limit)

    count = 0
    for item in images:
        if count >= limit:
            break
        src = download_url(item)
        try:
            dest = out_dir / safe_filename(item, src)
            logger.info("Downloading (%d) %s -> %s", count + 1, src, dest)
            download_file(src, dest, session=session)
        except DownloadError as e:
            logger.error("Failed to download: %s", e)
            continue
        count += 1
    return count


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    )
    try:
        count = run()
    except FetchError as e:
        logger.error("Failed to fetch JSON: %s", e)
        return 1
    except ParseError as e:
        logger.error("Failed to read JSON: %s", e)
        return 1
    print(f"Done. Downloaded {count} files into {OUT_DIR}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

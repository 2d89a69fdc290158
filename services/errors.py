class ApodError(Exception):
    """Base class for gallery and downloader failures."""


class FetchError(ApodError):
    """Dataset request failed (network error or non-success status)."""


class ParseError(ApodError):
    """Dataset body could not be decoded as expected."""


class InvalidRangeError(ApodError):
    """Start date is after end date. The message is shown to the user as-is."""


class DownloadError(ApodError):
    """A single image could not be downloaded or written."""

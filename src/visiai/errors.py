class ScanError(Exception):
    """Base class for failures that abort a whole scan request."""


class InvalidURLError(ScanError, ValueError):
    pass


class CaptureError(ScanError):
    """The headless browser could not load or snapshot the page."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Failed to capture {url}: {message}")
        self.url = url

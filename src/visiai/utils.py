import math
from typing import Any, Optional
from urllib.parse import urlparse

from .errors import InvalidURLError


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a score dial does: .5 always goes up (no banker's rounding)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def as_number(value: Any) -> Optional[float]:
    """Return a finite float for int/float inputs, else None. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def bounded_score(value: Any, default: float = 0.0) -> float:
    number = as_number(value)
    if number is None:
        return default
    return clamp(number, 0.0, 100.0)


def strip_data_uri(image: str) -> str:
    if image and "base64," in image:
        return image.split("base64,", 1)[1]
    return image or ""


def validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise InvalidURLError("URL is required")
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        raise InvalidURLError(f"Invalid URL format: {url}")
    return url

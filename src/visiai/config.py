import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
REIMAGINE_ENDPOINT = "https://api.reimagine-web.dev/v1/analyze"
DEFAULT_VISION_MODEL = "google/gemini-2.5-flash"


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Explicit configuration handed to every provider adapter.
    A missing API key is not an error: the adapter falls back to its default record.
    """
    audit_api_key: Optional[str] = None
    vision_api_key: Optional[str] = None
    ux_api_key: Optional[str] = None

    audit_timeout: float = 60.0
    vision_timeout: float = 60.0
    ux_timeout: float = 30.0
    capture_timeout: float = 45.0

    vision_model: str = DEFAULT_VISION_MODEL
    audit_endpoint: str = PAGESPEED_ENDPOINT
    vision_base_url: str = OPENROUTER_BASE_URL
    ux_endpoint: str = REIMAGINE_ENDPOINT
    audit_referer: str = "http://localhost:5000"

    data_dir: Path = Path("data")

    @staticmethod
    def from_env(dotenv: bool = True) -> "AnalyzerConfig":
        if dotenv:
            load_dotenv()
        return AnalyzerConfig(
            audit_api_key=_env_str("PAGESPEED_API_KEY") or _env_str("LIGHTHOUSE_API_KEY"),
            vision_api_key=_env_str("OPENROUTER_API_KEY"),
            ux_api_key=_env_str("REIMAGINE_API_KEY"),
            audit_timeout=_env_float("VISIAI_AUDIT_TIMEOUT", 60.0),
            vision_timeout=_env_float("VISIAI_VISION_TIMEOUT", 60.0),
            ux_timeout=_env_float("VISIAI_UX_TIMEOUT", 30.0),
            capture_timeout=_env_float("VISIAI_CAPTURE_TIMEOUT", 45.0),
            vision_model=_env_str("VISIAI_VISION_MODEL") or DEFAULT_VISION_MODEL,
            audit_endpoint=_env_str("VISIAI_AUDIT_ENDPOINT") or PAGESPEED_ENDPOINT,
            vision_base_url=_env_str("VISIAI_VISION_BASE_URL") or OPENROUTER_BASE_URL,
            ux_endpoint=_env_str("VISIAI_UX_ENDPOINT") or REIMAGINE_ENDPOINT,
            data_dir=Path(_env_str("VISIAI_DATA_DIR") or "data"),
        )

    def provider_status(self) -> dict:
        return {
            "audit": bool(self.audit_api_key),
            "vision": bool(self.vision_api_key),
            "ux": bool(self.ux_api_key),
        }


def _env_str(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}; using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}; using {default}")
        return default
    return value

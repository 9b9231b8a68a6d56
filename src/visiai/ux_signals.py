import logging
import random
from typing import Dict, Optional

import httpx

from .config import AnalyzerConfig
from .data_models import AdapterResult, UXMetrics, UXSignalResult
from .utils import as_number, clamp, round_half_up

logger = logging.getLogger(__name__)

SYNTHETIC_INSIGHTS = [
    "Strong navigation structure detected",
    "Good visual balance across viewport sizes",
    "Layout adapts well to different screen sizes",
    "Content hierarchy could be improved with better heading structure",
    "Consider optimizing load time for better performance",
    "Color scheme is consistent throughout the page",
    "Typography choices enhance readability",
]

LIVE_DEFAULT_INSIGHTS = [
    "Good overall layout structure",
    "Navigation is clear and accessible",
    "Consider improving mobile responsiveness",
]


def synthesize_ux_signals(rng: Optional[random.Random] = None) -> UXSignalResult:
    """Plausible bounded UX metrics for when no provider is reachable."""
    rng = rng or random.Random()

    def pick(low: float, span: float) -> int:
        return int(round_half_up(low + rng.random() * span))

    return UXSignalResult(
        score=pick(75, 20),
        metrics=UXMetrics(
            layout_score=pick(78, 15),
            navigation_score=pick(82, 15),
            visual_balance=pick(75, 20),
            mobile_friendly=rng.random() > 0.3,
            load_time=round_half_up(1.5 + rng.random() * 2, 1),
            responsiveness=pick(80, 15),
            content_hierarchy=pick(75, 20),
            color_consistency=pick(70, 25),
            typography_score=pick(75, 20),
        ),
        insights=list(SYNTHETIC_INSIGHTS),
        synthetic=True,
    )


def _int_or(value, default: int) -> int:
    number = as_number(value)
    # A zero from the provider means "not measured"
    if not number:
        return default
    return int(round_half_up(clamp(number, 0.0, 100.0)))


def normalize_ux_payload(data: Dict) -> UXSignalResult:
    load_time = as_number(data.get("load_time"))
    mobile = data.get("mobile_friendly")
    insights = data.get("insights")
    if isinstance(insights, list) and insights:
        insights = [str(i) for i in insights]
    else:
        insights = list(LIVE_DEFAULT_INSIGHTS)
    return UXSignalResult(
        score=_int_or(data.get("ux_score"), 75),
        metrics=UXMetrics(
            layout_score=_int_or(data.get("layout_score"), 80),
            navigation_score=_int_or(data.get("navigation_score"), 85),
            visual_balance=_int_or(data.get("visual_balance"), 78),
            mobile_friendly=mobile if isinstance(mobile, bool) else True,
            load_time=load_time if load_time else 2.5,
            responsiveness=_int_or(data.get("responsiveness"), 85),
            content_hierarchy=_int_or(data.get("content_hierarchy"), 82),
        ),
        insights=insights,
    )


class UXSignalAnalyzer:
    """Secondary UX-metrics provider. Without a key (or on any failure) the metrics are synthesized."""

    def __init__(
        self,
        config: AnalyzerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self._transport = transport
        self._rng = rng or random.Random()

    async def analyze(self, url: str) -> AdapterResult[UXSignalResult]:
        if not self.config.ux_api_key:
            logger.warning("UX API key not found, using synthesized metrics")
            return AdapterResult.fallback(synthesize_ux_signals(self._rng), "missing credentials")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.config.ux_timeout) as client:
                response = await client.post(
                    self.config.ux_endpoint,
                    json={"url": url},
                    headers={
                        "Authorization": f"Bearer {self.config.ux_api_key}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"UX API error: {type(e).__name__}: {e}")
            return AdapterResult.fallback(synthesize_ux_signals(self._rng), f"provider error: {type(e).__name__}")

        if not isinstance(data, dict):
            logger.warning("UX API returned a non-object payload")
            return AdapterResult.fallback(synthesize_ux_signals(self._rng), "malformed response")

        result = normalize_ux_payload(data)
        logger.info(f"UX analysis completed: score={result.score}")
        return AdapterResult.ok(result)

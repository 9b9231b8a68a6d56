"""
Vision analysis adapter: asks a vision-capable model to critique a page screenshot.

The model reply is untrusted free text. It goes through an explicit
parse-and-validate step (`normalize_vision_payload`) and anything that does not
fit the contract degrades to the default record.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import AnalyzerConfig
from .data_models import AdapterResult, AttentionZone, VisionResult
from .json_extractor import extract_first_json
from .llm_client import OpenRouterClient
from .utils import as_number, clamp, strip_data_uri

logger = logging.getLogger(__name__)

FALLBACK_PROVIDER = "Fallback"
DEFAULT_CLARITY = 75.0
FALLBACK_CLARITY = 70.0
MAX_ITEMS = 5

VISION_PROMPT = """You are a web design expert analyzing a website screenshot. Provide ONLY a JSON response with no additional text.

{
  "visualIssues": ["issue1", "issue2", "issue3"],
  "layoutProblems": ["problem1", "problem2"],
  "clarityScore": 75,
  "attentionZones": [
    {"area": "header", "intensity": 0.9, "x": 50, "y": 20},
    {"area": "main-content", "intensity": 0.7, "x": 50, "y": 50},
    {"area": "sidebar", "intensity": 0.5, "x": 80, "y": 50},
    {"area": "footer", "intensity": 0.3, "x": 50, "y": 80}
  ]
}"""


def default_zones() -> List[AttentionZone]:
    return [
        AttentionZone(area="header", intensity=0.9, x=50, y=20),
        AttentionZone(area="main-content", intensity=0.7, x=50, y=50),
        AttentionZone(area="sidebar", intensity=0.5, x=80, y=50),
        AttentionZone(area="footer", intensity=0.3, x=50, y=80),
    ]


def default_vision_result() -> VisionResult:
    return VisionResult(
        visual_issues=["Visual analysis unavailable - using defaults"],
        layout_problems=["Layout analysis unavailable - using defaults"],
        attention_zones=default_zones(),
        clarity_score=FALLBACK_CLARITY,
        provider=FALLBACK_PROVIDER,
    )


def _first_strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value[:MAX_ITEMS]]


def _zone(raw: Dict) -> AttentionZone:
    intensity = as_number(raw.get("intensity"))
    x = as_number(raw.get("x"))
    y = as_number(raw.get("y"))
    area = raw.get("area")
    return AttentionZone(
        area=str(area) if area else "unknown",
        intensity=clamp(intensity if intensity is not None else 0.5, 0.0, 1.0),
        x=x if x is not None else 50,
        y=y if y is not None else 50,
    )


def normalize_vision_payload(data: Dict, provider: str) -> VisionResult:
    visual_issues = _first_strings(data.get("visualIssues"))
    layout_problems = _first_strings(data.get("layoutProblems"))

    clarity = as_number(data.get("clarityScore"))
    clarity_score = clamp(clarity, 0.0, 100.0) if clarity is not None else DEFAULT_CLARITY

    zones_raw = data.get("attentionZones")
    zones = [_zone(z) for z in zones_raw if isinstance(z, dict)] if isinstance(zones_raw, list) else []

    return VisionResult(
        visual_issues=visual_issues or ["Consider improving visual hierarchy"],
        layout_problems=layout_problems or ["Ensure adequate whitespace"],
        attention_zones=zones or default_zones(),
        clarity_score=clarity_score,
        provider=provider,
    )


class VisionAnalyzer:
    def __init__(self, config: AnalyzerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.model = config.vision_model
        self.client: Optional[OpenRouterClient] = None
        if config.vision_api_key:
            self.client = OpenRouterClient(
                config.vision_api_key,
                base_url=config.vision_base_url,
                timeout=config.vision_timeout,
                transport=transport,
            )

    def _build_messages(self, screenshot: str) -> List[Dict]:
        image_b64, mime = self.client.optimize_image_data(strip_data_uri(screenshot), "image/jpeg")
        return [
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{image_b64}"}},
                    {"type": "text", "text": VISION_PROMPT},
                ],
            }
        ]

    async def analyze(self, screenshot: str) -> AdapterResult[VisionResult]:
        if self.client is None:
            logger.warning("Vision API key not found; using default visual analysis")
            return AdapterResult.fallback(default_vision_result(), "missing credentials")

        try:
            messages = self._build_messages(screenshot)
            response, _metrics = await self.client.get_completion(
                self.model,
                messages,
                max_tokens=1000,
                analysis_type="visual_analysis",
            )
            content = OpenRouterClient.message_text(response)
        except Exception as e:
            logger.warning(f"Vision analysis failed: {e}")
            return AdapterResult.fallback(default_vision_result(), f"provider error: {e}")

        if not content.strip():
            logger.warning("No response text from vision model")
            return AdapterResult.fallback(default_vision_result(), "empty response")

        parsed = extract_first_json(content, context="visual_analysis")
        if parsed is None:
            logger.debug(f"Raw vision response: {content[:300]!r}")
            return AdapterResult.fallback(default_vision_result(), "malformed response")

        result = normalize_vision_payload(parsed, provider=self.model)
        logger.info(f"Vision analysis completed: clarity={result.clarity_score}")
        return AdapterResult.ok(result)

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import AnalyzerConfig
from .data_models import AdapterResult, AuditResult
from .utils import as_number, clamp, round_half_up

logger = logging.getLogger(__name__)

CATEGORIES = ["performance", "accessibility", "best-practices", "seo"]

# Checked in this order; one message per failing sub-audit
ACCESSIBILITY_AUDITS = [
    ("color-contrast", "Low color contrast - fails WCAG standards"),
    ("image-alt", "Missing alt text on images"),
    ("aria-allowed-attr", "Invalid ARIA attributes detected"),
    ("aria-required-attr", "Missing required ARIA attributes"),
    ("form-field-multiple-labels", "Form fields missing proper labels"),
    ("label", "Form inputs without associated labels"),
    ("link-name", "Links without descriptive text"),
    ("document-title", "Page missing document title"),
]


def default_audit_result() -> AuditResult:
    return AuditResult(
        accessibility_score=70,
        performance_score=70,
        best_practices_score=70,
        seo_score=70,
        accessibility_issues=[],
    )


def _category_score(categories: Dict, name: str) -> int:
    entry = categories.get(name)
    score = as_number(entry.get("score")) if isinstance(entry, dict) else None
    return int(round_half_up(clamp((score or 0.0) * 100, 0.0, 100.0)))


def _failing_audits(audits: Dict) -> List[str]:
    issues = []
    for audit_id, message in ACCESSIBILITY_AUDITS:
        entry = audits.get(audit_id)
        score = as_number(entry.get("score")) if isinstance(entry, dict) else None
        # Lighthouse reports null for audits that do not apply; those are skipped, not counted as failing
        if score is not None and score < 1:
            issues.append(message)
    return issues


def normalize_lighthouse(lighthouse: Dict[str, Any]) -> AuditResult:
    categories = lighthouse.get("categories") or {}
    audits = lighthouse.get("audits") or {}
    if not isinstance(categories, dict):
        categories = {}
    if not isinstance(audits, dict):
        audits = {}
    return AuditResult(
        accessibility_score=_category_score(categories, "accessibility"),
        performance_score=_category_score(categories, "performance"),
        best_practices_score=_category_score(categories, "best-practices"),
        seo_score=_category_score(categories, "seo"),
        accessibility_issues=_failing_audits(audits),
    )


class PageAuditor:
    """Google PageSpeed Insights (Lighthouse) adapter."""

    def __init__(self, config: AnalyzerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    async def analyze(self, url: str) -> AdapterResult[AuditResult]:
        if not self.config.audit_api_key:
            logger.warning("Lighthouse API key not found; using default audit scores")
            return AdapterResult.fallback(default_audit_result(), "missing credentials")

        logger.info("Analyzing with Google Lighthouse API...")
        params = [("url", url), ("key", self.config.audit_api_key)]
        params += [("category", c) for c in CATEGORIES]
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.config.audit_timeout) as client:
                response = await client.get(
                    self.config.audit_endpoint,
                    params=params,
                    headers={"Referer": self.config.audit_referer},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Lighthouse request failed: HTTP {e.response.status_code} {e.response.text[:300]}")
            return AdapterResult.fallback(default_audit_result(), f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Lighthouse request failed: {type(e).__name__}: {e}")
            return AdapterResult.fallback(default_audit_result(), f"{type(e).__name__}")
        except ValueError as e:
            logger.warning(f"Lighthouse returned invalid JSON: {e}")
            return AdapterResult.fallback(default_audit_result(), "invalid JSON")

        lighthouse = payload.get("lighthouseResult") if isinstance(payload, dict) else None
        if not isinstance(lighthouse, dict):
            logger.error("No lighthouse result in response")
            return AdapterResult.fallback(default_audit_result(), "missing lighthouseResult")

        result = normalize_lighthouse(lighthouse)
        logger.info(
            f"Lighthouse analysis completed: accessibility={result.accessibility_score} "
            f"performance={result.performance_score} best-practices={result.best_practices_score} "
            f"seo={result.seo_score}"
        )
        return AdapterResult.ok(result)

from __future__ import annotations

import asyncio
import json

import httpx

from visiai.audit import PageAuditor, default_audit_result, normalize_lighthouse
from visiai.config import AnalyzerConfig

LIGHTHOUSE = {
    "lighthouseResult": {
        "categories": {
            "performance": {"score": 0.87},
            "accessibility": {"score": 0.5},
            "best-practices": {"score": 1},
            "seo": {"score": 0.92},
        },
        "audits": {
            "color-contrast": {"score": 0},
            "image-alt": {"score": 1},
            "label": {"score": 0.5},
            "link-name": {"score": None},
            "document-title": {"score": 0},
        },
    }
}


def _auditor(handler) -> PageAuditor:
    config = AnalyzerConfig(audit_api_key="test-key")
    return PageAuditor(config, transport=httpx.MockTransport(handler))


def test_missing_key_returns_default_without_network():
    def handler(request):
        raise AssertionError("network should not be used")

    auditor = PageAuditor(AnalyzerConfig(), transport=httpx.MockTransport(handler))
    first = asyncio.run(auditor.analyze("https://example.com"))
    second = asyncio.run(auditor.analyze("https://example.com"))
    assert first.is_default and first.reason == "missing credentials"
    assert first.value == second.value == default_audit_result()
    assert first.value.accessibility_issues == []


def test_successful_audit_maps_categories_and_failing_audits():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=LIGHTHOUSE)

    result = asyncio.run(_auditor(handler).analyze("https://example.com"))
    assert not result.is_default
    audit = result.value
    assert audit.performance_score == 87
    assert audit.accessibility_score == 50
    assert audit.best_practices_score == 100
    assert audit.seo_score == 92
    assert audit.accessibility_issues == [
        "Low color contrast - fails WCAG standards",
        "Form inputs without associated labels",
        "Page missing document title",
    ]

    request = seen["request"]
    assert request.method == "GET"
    assert request.url.params["url"] == "https://example.com"
    assert request.url.params["key"] == "test-key"
    assert request.url.params.get_list("category") == ["performance", "accessibility", "best-practices", "seo"]
    assert request.headers["Referer"] == "http://localhost:5000"


def test_http_error_falls_back():
    result = asyncio.run(_auditor(lambda request: httpx.Response(500, text="boom")).analyze("https://example.com"))
    assert result.is_default
    assert result.reason == "HTTP 500"
    assert result.value == default_audit_result()


def test_timeout_falls_back():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    result = asyncio.run(_auditor(handler).analyze("https://example.com"))
    assert result.is_default
    assert result.reason == "ReadTimeout"


def test_missing_lighthouse_result_falls_back():
    result = asyncio.run(_auditor(lambda request: httpx.Response(200, json={"error": "x"})).analyze("https://example.com"))
    assert result.is_default
    assert result.reason == "missing lighthouseResult"


def test_invalid_json_falls_back():
    result = asyncio.run(_auditor(lambda request: httpx.Response(200, text="<html>")).analyze("https://example.com"))
    assert result.is_default
    assert result.reason == "invalid JSON"


def test_missing_categories_score_zero():
    audit = normalize_lighthouse({"categories": {"performance": {"score": None}}, "audits": "nope"})
    assert audit.performance_score == 0
    assert audit.accessibility_score == 0
    assert audit.accessibility_issues == []


def test_payload_round_trips_through_json():
    audit = normalize_lighthouse(json.loads(json.dumps(LIGHTHOUSE))["lighthouseResult"])
    assert len(audit.accessibility_issues) == 3

from __future__ import annotations

import asyncio
import random

import pytest

from visiai.config import AnalyzerConfig
from visiai.data_models import AnalysisInput, HeadingInfo, StructuralSummary
from visiai.errors import CaptureError, InvalidURLError
from visiai.fusion import compute_overall
from visiai.pipeline import ScanPipeline
from visiai.readability import analyze_readability
from visiai.repository import ScanRepository
from visiai.ux_signals import UXSignalAnalyzer

HTML = """<html lang="en"><body>
<a href="#main">Skip to content</a>
<h1>Welcome</h1>
<img src="logo.png" alt="Logo">
<p>We build small tools. They are easy to use. You will like them a lot.</p>
</body></html>"""
TEXT = "Welcome. We build small tools. They are easy to use. You will like them a lot. Try one today and see."


class FakeCapturer:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def capture(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return AnalysisInput(
            url=url,
            html=HTML,
            text_content=TEXT,
            screenshot="data:image/jpeg;base64,QUJD",
            structure=StructuralSummary(headings=[HeadingInfo(tag="H1", text="Welcome")]),
        )


def _pipeline(tmp_path, capturer, config=None):
    config = config or AnalyzerConfig()
    return ScanPipeline(
        config,
        capturer=capturer,
        ux=UXSignalAnalyzer(config, rng=random.Random(7)),
        repository=ScanRepository(tmp_path),
    )


def test_scan_without_providers_uses_defaults_and_saves(tmp_path):
    capturer = FakeCapturer()
    doc = asyncio.run(_pipeline(tmp_path, capturer).run("https://example.com"))

    assert capturer.calls == ["https://example.com"]
    assert doc["fallbacks"] == {
        "audit": "missing credentials",
        "vision": "missing credentials",
        "ux": "missing credentials",
    }
    readability = analyze_readability(TEXT).score
    ux_score = doc["scores"]["reimagineUX"]
    assert doc["scores"]["readability"] == readability
    assert doc["scores"]["overall"] == compute_overall(70, 70, readability, 70, ux_score)
    assert doc["metrics"]["accessibility"]["heuristicScore"] == 100
    assert doc["aiAnalysis"]["provider"] == "Fallback"
    assert doc["metrics"]["colorContrast"] == {"passAA": False, "passAAA": False, "issues": []}
    assert 1 <= len(doc["recommendations"]) <= 10
    assert ScanRepository(tmp_path).get(doc["id"]) == doc


def test_no_save_returns_document_without_id(tmp_path):
    doc = asyncio.run(_pipeline(tmp_path, FakeCapturer()).run("https://example.com", save=False))
    assert "id" not in doc
    assert ScanRepository(tmp_path).list_scans()["pagination"]["total"] == 0


@pytest.mark.parametrize("url", ["", "example.com", "ftp://example.com/file", "https://"])
def test_invalid_url_never_reaches_capture(tmp_path, url):
    capturer = FakeCapturer()
    with pytest.raises(InvalidURLError):
        asyncio.run(_pipeline(tmp_path, capturer).run(url))
    assert capturer.calls == []


def test_capture_failure_aborts_the_scan(tmp_path):
    capturer = FakeCapturer(error=CaptureError("https://example.com", "net::ERR_NAME_NOT_RESOLVED"))
    with pytest.raises(CaptureError, match="Failed to capture https://example.com"):
        asyncio.run(_pipeline(tmp_path, capturer).run("https://example.com"))
    assert ScanRepository(tmp_path).list_scans()["pagination"]["total"] == 0

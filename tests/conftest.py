from __future__ import annotations

import random

import pytest

from visiai.accessibility import analyze_accessibility
from visiai.audit import default_audit_result
from visiai.data_models import StructuralSummary
from visiai.fusion import build_record
from visiai.readability import analyze_readability
from visiai.ux_signals import synthesize_ux_signals
from visiai.vision import default_vision_result


@pytest.fixture
def make_record():
    """Factory for a fully-defaulted FusedScoreRecord."""

    def _make(url: str = "https://example.com", screenshot: str = "data:image/jpeg;base64,QUJD"):
        return build_record(
            url=url,
            screenshot=screenshot,
            audit=default_audit_result(),
            vision=default_vision_result(),
            ux=synthesize_ux_signals(random.Random(1)),
            readability=analyze_readability(""),
            accessibility=analyze_accessibility("", StructuralSummary()),
            recommendations=["Validate HTML and CSS for errors"],
        )

    return _make

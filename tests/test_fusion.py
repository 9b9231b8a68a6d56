from __future__ import annotations

import math

import pytest

from visiai.audit import default_audit_result
from visiai.data_models import AuditResult
from visiai.fusion import WEIGHTS, build_record, compute_overall, fuse_scores


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)
    assert WEIGHTS == {
        "visual_clarity": 0.20,
        "accessibility": 0.30,
        "readability": 0.20,
        "performance": 0.15,
        "ux": 0.15,
    }


def test_uniform_input_is_a_fixed_point():
    assert compute_overall(80, 80, 80, 80, 80) == 80


@pytest.mark.parametrize(
    "dims, expected",
    [
        ((100, 0, 0, 0, 0), 20),
        ((0, 100, 0, 0, 0), 30),
        ((0, 0, 100, 0, 0), 20),
        ((0, 0, 0, 100, 0), 15),
        ((0, 0, 0, 0, 100), 15),
        ((70, 70, 70, 70, 70), 70),
        ((100, 100, 100, 100, 100), 100),
        ((90, 62, 48, 33, 81), 63),
    ],
)
def test_overall_is_rounded_weighted_sum(dims, expected):
    assert compute_overall(*dims) == expected


def test_overall_uses_unrounded_dimensions():
    scores = fuse_scores(0, 1.6, 0, 0, 0)
    assert scores.accessibility == 2
    # 1.6 * 0.3 = 0.48 -> 0, whereas the rounded dimension would give 0.6 -> 1
    assert scores.overall == 0


def test_out_of_range_and_non_finite_inputs_are_bounded():
    scores = fuse_scores(150, -20, math.nan, 50, 50)
    assert scores.visual_clarity == 100
    assert scores.accessibility == 0
    assert scores.readability == 0
    assert scores.overall == 35


def test_dimension_mapping():
    scores = fuse_scores(visual_clarity=61.5, accessibility=72, readability=44, performance=58, ux_score=91)
    assert scores.visual_clarity == 62
    assert scores.focus_accuracy == 58
    assert scores.reimagine_ux == 91
    assert 0 <= scores.overall <= 100


@pytest.mark.parametrize(
    "accessibility, aa, aaa, keyboard",
    [(70, False, False, False), (71, True, False, False), (76, True, False, True), (86, True, True, True)],
)
def test_wcag_flags_follow_accessibility(make_record, accessibility, aa, aaa, keyboard):
    base = make_record()
    record = build_record(
        url=base.url,
        screenshot=base.screenshot,
        audit=AuditResult(accessibility_score=accessibility),
        vision=base.vision,
        ux=base.ux,
        readability=base.readability,
        accessibility=base.accessibility,
        recommendations=[],
    )
    assert (record.pass_aa, record.pass_aaa, record.keyboard_nav) == (aa, aaa, keyboard)


def test_record_document_shape(make_record):
    record = make_record()
    doc = record.to_dict()
    assert set(doc["scores"]) == {"visualClarity", "accessibility", "readability", "reimagineUX", "focusAccuracy", "overall"}
    assert doc["scores"]["focusAccuracy"] == default_audit_result().performance_score
    assert doc["scores"]["visualClarity"] == 70
    assert doc["metrics"]["lighthouse"] == {"performance": 70, "accessibility": 70, "bestPractices": 70, "seo": 70}
    assert doc["metrics"]["textReadability"]["gradeLevel"] == "Insufficient Data"
    assert doc["heatmapData"]["maxIntensity"] == 1.0
    assert doc["heatmapData"]["zones"] == doc["aiAnalysis"]["attentionZones"]
    assert len(doc["aiAnalysis"]["attentionZones"]) == 4
    assert "colorConsistency" in doc["metrics"]["reimagineWeb"]
    for value in doc["scores"].values():
        assert isinstance(value, int) and 0 <= value <= 100

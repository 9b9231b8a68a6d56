from __future__ import annotations

import math

import pytest

from visiai.data_models import StructuralSummary
from visiai.errors import InvalidURLError
from visiai.utils import as_number, bounded_score, round_half_up, strip_data_uri, validate_url


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (62.49, 62), (-0.5, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_round_half_up_with_digits():
    assert round_half_up(80.25, 1) == 80.3


@pytest.mark.parametrize("value", [True, None, "12", math.nan, math.inf])
def test_as_number_rejects_non_numbers(value):
    assert as_number(value) is None


def test_bounded_score():
    assert bounded_score(140) == 100
    assert bounded_score(-1) == 0
    assert bounded_score(None, default=70) == 70


def test_strip_data_uri():
    assert strip_data_uri("data:image/jpeg;base64,QUJD") == "QUJD"
    assert strip_data_uri("QUJD") == "QUJD"
    assert strip_data_uri("") == ""


@pytest.mark.parametrize("url", ["https://example.com", "http://example.com/path?q=1", "  https://example.com  "])
def test_validate_url_accepts_http(url):
    assert validate_url(url) == url.strip()


@pytest.mark.parametrize("url, message", [("", "URL is required"), ("javascript:alert(1)", "Invalid URL format")])
def test_validate_url_rejects(url, message):
    with pytest.raises(InvalidURLError, match=message):
        validate_url(url)


def test_structural_summary_from_dom():
    summary = StructuralSummary.from_dom(
        {
            "images": [{"src": "a.png", "alt": "A", "hasAlt": True}, {"src": "b.png", "alt": "", "hasAlt": False}, "junk"],
            "headings": [{"tag": "h2", "text": "Intro"}],
            "buttons": "3",
            "forms": [{"inputs": 2, "labels": 1}],
        }
    )
    assert summary.missing_alt_count == 1
    assert summary.headings[0].tag == "H2"
    assert summary.buttons == 3
    assert summary.forms[0].inputs == 2


def test_structural_summary_from_empty_dom():
    summary = StructuralSummary.from_dom(None)
    assert summary.images == [] and summary.headings == [] and summary.buttons == 0

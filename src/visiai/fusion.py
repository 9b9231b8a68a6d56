import logging
from typing import Dict, List, Optional

from .data_models import (
    AccessibilityResult,
    AuditResult,
    DimensionScores,
    FusedScoreRecord,
    ReadabilityResult,
    UXSignalResult,
    VisionResult,
)
from .utils import bounded_score, round_half_up

logger = logging.getLogger(__name__)

# Weighted dimensions (sum to 1.0)
WEIGHTS = {
    "visual_clarity": 0.20,
    "accessibility": 0.30,
    "readability": 0.20,
    "performance": 0.15,
    "ux": 0.15,
}

PASS_AA_THRESHOLD = 70
PASS_AAA_THRESHOLD = 85
KEYBOARD_NAV_THRESHOLD = 75


def compute_overall(
    visual_clarity: float,
    accessibility: float,
    readability: float,
    performance: float,
    ux_score: float,
) -> int:
    """Weighted overall score in [0, 100], rounded once from the unrounded inputs."""
    dims = {
        "visual_clarity": bounded_score(visual_clarity),
        "accessibility": bounded_score(accessibility),
        "readability": bounded_score(readability),
        "performance": bounded_score(performance),
        "ux": bounded_score(ux_score),
    }
    total = sum(dims[k] * WEIGHTS[k] for k in WEIGHTS)
    return int(round_half_up(min(100.0, max(0.0, total))))


def fuse_scores(
    visual_clarity: float,
    accessibility: float,
    readability: float,
    performance: float,
    ux_score: float,
) -> DimensionScores:
    def dim(value: float) -> int:
        return int(round_half_up(bounded_score(value)))

    return DimensionScores(
        visual_clarity=dim(visual_clarity),
        accessibility=dim(accessibility),
        readability=dim(readability),
        reimagine_ux=dim(ux_score),
        focus_accuracy=dim(performance),
        overall=compute_overall(visual_clarity, accessibility, readability, performance, ux_score),
    )


def build_record(
    url: str,
    screenshot: str,
    audit: AuditResult,
    vision: VisionResult,
    ux: UXSignalResult,
    readability: ReadabilityResult,
    accessibility: AccessibilityResult,
    recommendations: List[str],
    fallbacks: Optional[Dict[str, str]] = None,
) -> FusedScoreRecord:
    access_score = bounded_score(audit.accessibility_score)
    scores = fuse_scores(
        visual_clarity=vision.clarity_score,
        accessibility=access_score,
        readability=readability.score,
        performance=audit.performance_score,
        ux_score=ux.score,
    )
    logger.info(
        f"Scores: visual={scores.visual_clarity} accessibility={scores.accessibility} "
        f"readability={scores.readability} performance={scores.focus_accuracy} "
        f"ux={scores.reimagine_ux} -> overall={scores.overall}"
    )
    return FusedScoreRecord(
        url=url,
        screenshot=screenshot,
        scores=scores,
        audit=audit,
        vision=vision,
        ux=ux,
        readability=readability,
        accessibility=accessibility,
        pass_aa=access_score > PASS_AA_THRESHOLD,
        pass_aaa=access_score > PASS_AAA_THRESHOLD,
        keyboard_nav=access_score > KEYBOARD_NAV_THRESHOLD,
        recommendations=list(recommendations),
        fallbacks=dict(fallbacks or {}),
    )

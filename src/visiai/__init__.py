"""
VisiAI - composite web page quality scoring

Merges a Lighthouse audit, a vision-model critique, UX signals and local
readability/accessibility heuristics into one bounded, explainable score
with a ranked recommendation list.
"""

__version__ = "1.0.0"

from .config import AnalyzerConfig
from .data_models import (
    AccessibilityResult,
    AdapterResult,
    AnalysisInput,
    AttentionZone,
    AuditResult,
    DimensionScores,
    FusedScoreRecord,
    ReadabilityResult,
    StructuralSummary,
    UXSignalResult,
    VisionResult,
)
from .errors import CaptureError, InvalidURLError, ScanError
from .pipeline import ScanPipeline

__all__ = [
    "AnalyzerConfig",
    "ScanPipeline",
    "AccessibilityResult",
    "AdapterResult",
    "AnalysisInput",
    "AttentionZone",
    "AuditResult",
    "DimensionScores",
    "FusedScoreRecord",
    "ReadabilityResult",
    "StructuralSummary",
    "UXSignalResult",
    "VisionResult",
    "CaptureError",
    "InvalidURLError",
    "ScanError",
]

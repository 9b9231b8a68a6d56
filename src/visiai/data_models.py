from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ImageInfo:
    src: str = ""
    alt: str = ""
    has_alt: bool = False


@dataclass(frozen=True)
class HeadingInfo:
    tag: str
    text: str = ""


@dataclass(frozen=True)
class FormInfo:
    inputs: int = 0
    labels: int = 0


@dataclass(frozen=True)
class StructuralSummary:
    images: List[ImageInfo] = field(default_factory=list)
    headings: List[HeadingInfo] = field(default_factory=list)
    buttons: int = 0
    forms: List[FormInfo] = field(default_factory=list)

    @property
    def missing_alt_count(self) -> int:
        return sum(1 for img in self.images if not img.has_alt)

    @classmethod
    def from_dom(cls, dom: Optional[Dict]) -> "StructuralSummary":
        """Build a summary from the dict produced by the in-page DOM probe."""
        dom = dom or {}
        images = [
            ImageInfo(
                src=str(img.get("src") or ""),
                alt=str(img.get("alt") or ""),
                has_alt=bool(img.get("hasAlt", img.get("alt"))),
            )
            for img in dom.get("images") or []
            if isinstance(img, dict)
        ]
        headings = [
            HeadingInfo(tag=str(h.get("tag") or "").upper(), text=str(h.get("text") or ""))
            for h in dom.get("headings") or []
            if isinstance(h, dict)
        ]
        forms = [
            FormInfo(inputs=int(f.get("inputs") or 0), labels=int(f.get("labels") or 0))
            for f in dom.get("forms") or []
            if isinstance(f, dict)
        ]
        try:
            buttons = int(dom.get("buttons") or 0)
        except (TypeError, ValueError):
            buttons = 0
        return cls(images=images, headings=headings, buttons=buttons, forms=forms)


@dataclass(frozen=True)
class AnalysisInput:
    url: str
    html: str
    text_content: str
    screenshot: str
    structure: StructuralSummary = field(default_factory=StructuralSummary)


@dataclass(frozen=True)
class ReadabilityResult:
    score: int
    flesch_score: float
    grade_level: str
    issues: List[str] = field(default_factory=list)
    word_count: int = 0
    sentence_count: int = 0
    avg_words_per_sentence: float = 0.0
    avg_syllables_per_word: float = 0.0
    passive_count: int = 0


@dataclass(frozen=True)
class AccessibilityResult:
    score: int
    missing_alt: int = 0
    aria_issues: int = 0
    unlabeled_inputs: int = 0
    generic_links: int = 0
    issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AuditResult:
    accessibility_score: int = 70
    performance_score: int = 70
    best_practices_score: int = 70
    seo_score: int = 70
    accessibility_issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AttentionZone:
    area: str
    intensity: float
    x: float
    y: float


@dataclass(frozen=True)
class VisionResult:
    visual_issues: List[str]
    layout_problems: List[str]
    attention_zones: List[AttentionZone]
    clarity_score: float
    provider: str = "Fallback"


@dataclass(frozen=True)
class UXMetrics:
    layout_score: int
    navigation_score: int
    visual_balance: int
    mobile_friendly: bool
    load_time: float
    responsiveness: int
    content_hierarchy: int
    color_consistency: Optional[int] = None
    typography_score: Optional[int] = None


@dataclass(frozen=True)
class UXSignalResult:
    score: int
    metrics: UXMetrics
    insights: List[str] = field(default_factory=list)
    synthetic: bool = False


@dataclass
class LLMMetrics:
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    response_time: float = 0.0
    analysis_type: str = ""
    timestamp: str = ""


@dataclass(frozen=True)
class AdapterResult(Generic[T]):
    """Outcome of one provider adapter: a live value or its documented default."""
    value: T
    is_default: bool = False
    reason: str = ""

    @classmethod
    def ok(cls, value: T) -> "AdapterResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> "AdapterResult[T]":
        return cls(value=value, is_default=True, reason=reason)


@dataclass(frozen=True)
class DimensionScores:
    visual_clarity: int
    accessibility: int
    readability: int
    reimagine_ux: int
    focus_accuracy: int
    overall: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "visualClarity": self.visual_clarity,
            "accessibility": self.accessibility,
            "readability": self.readability,
            "reimagineUX": self.reimagine_ux,
            "focusAccuracy": self.focus_accuracy,
            "overall": self.overall,
        }


@dataclass(frozen=True)
class FusedScoreRecord:
    url: str
    screenshot: str
    scores: DimensionScores
    audit: AuditResult
    vision: VisionResult
    ux: UXSignalResult
    readability: ReadabilityResult
    accessibility: AccessibilityResult
    pass_aa: bool
    pass_aaa: bool
    keyboard_nav: bool
    recommendations: List[str] = field(default_factory=list)
    fallbacks: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Persisted document shape (camelCase keys)."""
        zones = [
            {"area": z.area, "intensity": z.intensity, "x": z.x, "y": z.y}
            for z in self.vision.attention_zones
        ]
        ux_metrics = {
            "layoutScore": self.ux.metrics.layout_score,
            "navigationScore": self.ux.metrics.navigation_score,
            "visualBalance": self.ux.metrics.visual_balance,
            "mobileFriendly": self.ux.metrics.mobile_friendly,
            "loadTime": self.ux.metrics.load_time,
            "responsiveness": self.ux.metrics.responsiveness,
            "contentHierarchy": self.ux.metrics.content_hierarchy,
        }
        if self.ux.metrics.color_consistency is not None:
            ux_metrics["colorConsistency"] = self.ux.metrics.color_consistency
        if self.ux.metrics.typography_score is not None:
            ux_metrics["typographyScore"] = self.ux.metrics.typography_score
        return {
            "url": self.url,
            "screenshot": self.screenshot,
            "scores": self.scores.to_dict(),
            "metrics": {
                "colorContrast": {
                    "passAA": self.pass_aa,
                    "passAAA": self.pass_aaa,
                    "issues": list(self.audit.accessibility_issues),
                },
                "textReadability": {
                    "fleschScore": self.readability.flesch_score,
                    "gradeLevel": self.readability.grade_level,
                    "issues": list(self.readability.issues),
                },
                "accessibility": {
                    "missingAlt": self.accessibility.missing_alt,
                    "ariaIssues": self.accessibility.aria_issues,
                    "keyboardNav": self.keyboard_nav,
                    "heuristicScore": self.accessibility.score,
                    "issues": list(self.accessibility.issues),
                },
                "reimagineWeb": ux_metrics,
                "lighthouse": {
                    "performance": self.audit.performance_score,
                    "accessibility": self.audit.accessibility_score,
                    "bestPractices": self.audit.best_practices_score,
                    "seo": self.audit.seo_score,
                },
            },
            "aiAnalysis": {
                "visualIssues": list(self.vision.visual_issues),
                "layoutProblems": list(self.vision.layout_problems),
                "attentionZones": zones,
                "provider": self.vision.provider,
            },
            "recommendations": list(self.recommendations),
            "heatmapData": {"zones": zones, "maxIntensity": 1.0},
            "fallbacks": dict(self.fallbacks),
        }

from typing import List, Optional, Sequence

from .data_models import StructuralSummary
from .utils import bounded_score

MAX_RECOMMENDATIONS = 10

WCAG_REVIEW = "Review WCAG 2.1 accessibility guidelines"
DEEP_AUDIT = [
    "Conduct full accessibility audit with axe DevTools",
    "Test with screen readers (NVDA, JAWS)",
]
READABILITY_TIPS = [
    "Simplify complex sentences for better readability",
    "Break long paragraphs into shorter chunks (3-4 sentences)",
    "Use bullet points to improve content scanability",
]
REWRITE_TIP = "Consider rewriting content for a general audience"
VISUAL_TIPS = [
    "Increase contrast between text and background",
    "Ensure consistent spacing and alignment throughout",
    "Improve visual hierarchy with clear heading structure",
]
BEST_PRACTICES = [
    "Ensure all images have descriptive alt text",
    "Add skip navigation links for keyboard users",
    "Test with keyboard navigation only",
    "Validate HTML and CSS for errors",
    "Optimize images for faster loading",
    "Ensure CTA buttons are 44x44px minimum",
]


def generate_recommendations(
    accessibility_score: float,
    readability_score: float,
    visual_issues: Optional[Sequence[str]] = None,
    audit_issues: Optional[Sequence[str]] = None,
    structure: Optional[StructuralSummary] = None,
) -> List[str]:
    """
    Rule cascade, most severe advice first. The order of the rules decides
    which advice survives the cap, so do not reorder them.
    """
    # Unknown scores count as 0, so the advice errs on the side of more help
    accessibility_score = bounded_score(accessibility_score)
    readability_score = bounded_score(readability_score)
    visual_issues = list(visual_issues or [])
    audit_issues = list(audit_issues or [])
    tips: List[str] = []

    if accessibility_score < 80:
        tips.extend(audit_issues[:3])
        tips.append(WCAG_REVIEW)

    if accessibility_score < 60:
        tips.extend(DEEP_AUDIT)

    if readability_score < 60:
        tips.extend(READABILITY_TIPS)

    if readability_score < 40:
        tips.append(REWRITE_TIP)

    if visual_issues:
        tips.extend(VISUAL_TIPS)

    tips.extend(BEST_PRACTICES)
    return tips[:MAX_RECOMMENDATIONS]

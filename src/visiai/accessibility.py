import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from .data_models import AccessibilityResult, StructuralSummary

logger = logging.getLogger(__name__)

GENERIC_LINK_TEXT = {"click here", "read more", "here", "more"}


def analyze_accessibility(html: str, structure: Optional[StructuralSummary] = None) -> AccessibilityResult:
    """
    Heuristic WCAG-style checks against the captured markup.
    Starts at 100 and subtracts a capped penalty per failing rule; one issue per rule, in rule order.
    """
    structure = structure or StructuralSummary()
    soup = BeautifulSoup(html or "", "html.parser")
    issues: List[str] = []
    score = 100

    missing_alt = structure.missing_alt_count
    if missing_alt > 0:
        issues.append(f"{missing_alt} images missing alt text")
        score -= min(missing_alt * 5, 30)

    aria_issues = sum(1 for el in soup.select("[role]") if not el.get("aria-label"))
    if aria_issues > 0:
        issues.append(f"{aria_issues} elements with role but no aria-label")
        score -= min(aria_issues * 3, 20)

    inputs = sum(1 for el in soup.find_all("input") if (el.get("type") or "").strip().lower() != "hidden")
    labels = len(soup.find_all("label"))
    unlabeled = max(0, inputs - labels)
    if unlabeled > 0:
        issues.append(f"{unlabeled} form inputs without labels")
        score -= min(unlabeled * 4, 25)

    if not structure.headings:
        issues.append("No heading tags found - poor document structure")
        score -= 15

    skip_links = sum(
        1 for a in soup.select('a[href^="#"]')
        if "skip" in a.get_text().lower()
    )
    if skip_links == 0:
        issues.append("No skip navigation links found")
        score -= 5

    if soup.select_one("html[lang]") is None:
        issues.append("Missing lang attribute on html element")
        score -= 5

    generic_links = sum(
        1 for a in soup.find_all("a")
        if a.get_text().strip().lower() in GENERIC_LINK_TEXT
    )
    if generic_links > 0:
        issues.append(f"{generic_links} links with non-descriptive text")
        score -= min(generic_links * 2, 10)

    logger.debug(f"Accessibility heuristics: score={max(0, score)} issues={len(issues)}")
    return AccessibilityResult(
        score=max(0, score),
        missing_alt=missing_alt,
        aria_issues=aria_issues,
        unlabeled_inputs=unlabeled,
        generic_links=generic_links,
        issues=issues,
    )

import asyncio
import logging
import time
from typing import Dict, Optional, Protocol

from .accessibility import analyze_accessibility
from .audit import PageAuditor
from .config import AnalyzerConfig
from .data_models import AnalysisInput, FusedScoreRecord
from .fusion import build_record
from .readability import analyze_readability
from .recommendations import generate_recommendations
from .repository import ScanRepository
from .utils import validate_url
from .ux_signals import UXSignalAnalyzer
from .vision import VisionAnalyzer

logger = logging.getLogger(__name__)


class Capturer(Protocol):
    async def capture(self, url: str) -> AnalysisInput: ...


class ScanPipeline:
    """
    One scan request end to end:
    capture -> (audit, vision, UX concurrently) -> readability/accessibility -> fusion -> persistence.

    Adapters always resolve to a live or default record; only URL validation and
    capture failures abort the request.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        capturer: Optional[Capturer] = None,
        auditor: Optional[PageAuditor] = None,
        vision: Optional[VisionAnalyzer] = None,
        ux: Optional[UXSignalAnalyzer] = None,
        repository: Optional[ScanRepository] = None,
    ):
        self.config = config
        if capturer is None:
            from .capture import PageCapturer
            capturer = PageCapturer(config)
        self.capturer = capturer
        self.auditor = auditor or PageAuditor(config)
        self.vision = vision or VisionAnalyzer(config)
        self.ux = ux or UXSignalAnalyzer(config)
        self.repository = repository

    async def analyze(self, page: AnalysisInput) -> FusedScoreRecord:
        audit_res, vision_res, ux_res = await asyncio.gather(
            self.auditor.analyze(page.url),
            self.vision.analyze(page.screenshot),
            self.ux.analyze(page.url),
        )
        fallbacks: Dict[str, str] = {
            name: res.reason
            for name, res in (("audit", audit_res), ("vision", vision_res), ("ux", ux_res))
            if res.is_default
        }

        readability = analyze_readability(page.text_content)
        logger.info(f"Readability score: {readability.score} ({readability.grade_level})")
        accessibility = analyze_accessibility(page.html, page.structure)
        logger.info(f"Heuristic accessibility score: {accessibility.score}")

        audit = audit_res.value
        vision = vision_res.value
        recommendations = generate_recommendations(
            audit.accessibility_score,
            readability.score,
            vision.visual_issues,
            audit.accessibility_issues,
            page.structure,
        )
        logger.info(f"Generated {len(recommendations)} recommendations")

        return build_record(
            url=page.url,
            screenshot=page.screenshot,
            audit=audit,
            vision=vision,
            ux=ux_res.value,
            readability=readability,
            accessibility=accessibility,
            recommendations=recommendations,
            fallbacks=fallbacks,
        )

    async def run(self, url: str, save: bool = True) -> Dict:
        """Scan a URL and return the persisted document (with id/timestamp when saved)."""
        url = validate_url(url)
        started = time.time()
        logger.info(f"Scanning {url}")

        page = await self.capturer.capture(url)
        logger.info("Website captured")

        record = await self.analyze(page)
        logger.info(f"Overall score for {url}: {record.scores.overall}/100 ({time.time() - started:.1f}s)")
        if record.fallbacks:
            logger.warning(f"Providers using default records: {record.fallbacks}")

        if save and self.repository is not None:
            return self.repository.save(record)
        return record.to_dict()

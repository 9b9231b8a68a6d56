"""
Headless-browser page capture (Playwright Chromium).

Produces the immutable AnalysisInput the scorers work from: HTML, visible text,
a JPEG viewport screenshot as a data URI and a DOM structure summary.
"""

import asyncio
import base64
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from .config import AnalyzerConfig
from .data_models import AnalysisInput, StructuralSummary
from .errors import CaptureError

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1280, "height": 720}
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
]

TEXT_FALLBACK_JS = """() => {
  const texts = [];
  for (const el of document.querySelectorAll('body, body *')) {
    const text = (el.innerText || '').trim();
    if (text.length > 0) texts.push(text);
  }
  return texts.join(' ');
}"""

DOM_SUMMARY_JS = """() => ({
  images: Array.from(document.querySelectorAll('img')).map(img => ({
    src: img.src, alt: img.alt, hasAlt: !!img.alt
  })),
  headings: Array.from(document.querySelectorAll('h1, h2, h3, h4, h5, h6')).map(h => ({
    tag: h.tagName, text: (h.textContent || '').trim()
  })),
  buttons: document.querySelectorAll('button, a.btn, [role="button"]').length,
  forms: Array.from(document.querySelectorAll('form')).map(form => ({
    inputs: form.querySelectorAll('input').length,
    labels: form.querySelectorAll('label').length
  }))
})"""


class PageCapturer:
    def __init__(self, config: AnalyzerConfig, settle_seconds: float = 3.0):
        self.config = config
        self.settle_seconds = settle_seconds

    async def capture(self, url: str) -> AnalysisInput:
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True, args=LAUNCH_ARGS)
                try:
                    return await self._capture_page(browser, url)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise CaptureError(url, str(e)) from e

    async def _capture_page(self, browser, url: str) -> AnalysisInput:
        context = await browser.new_context(viewport=VIEWPORT, user_agent=USER_AGENT)
        page = await context.new_page()

        logger.info(f"Navigating to: {url}")
        await page.goto(url, wait_until="domcontentloaded", timeout=self.config.capture_timeout * 1000)
        try:
            await page.wait_for_load_state("networkidle", timeout=30000)
        except PlaywrightTimeoutError:
            logger.warning("Network idle timeout, continuing anyway")
        # Extra wait for client-side rendering
        await asyncio.sleep(self.settle_seconds)

        html = await page.content()
        logger.info(f"HTML extracted ({len(html)} characters)")

        text_content = await page.evaluate("() => document.body ? document.body.innerText || '' : ''")
        if len(text_content) < 50:
            logger.warning("Very little text found, trying alternative extraction...")
            text_content = await page.evaluate(TEXT_FALLBACK_JS)
        logger.info(f"Text content: {len(text_content)} characters")

        shot = await page.screenshot(full_page=False, type="jpeg", quality=80)
        screenshot = "data:image/jpeg;base64," + base64.b64encode(shot).decode("ascii")

        structure = StructuralSummary.from_dom(await page.evaluate(DOM_SUMMARY_JS))
        logger.info(
            f"DOM: {len(structure.images)} images, {len(structure.headings)} headings, {structure.buttons} buttons"
        )

        return AnalysisInput(
            url=url,
            html=html,
            text_content=text_content.strip(),
            screenshot=screenshot,
            structure=structure,
        )

import asyncio
import base64
import logging
import time
from datetime import datetime
from io import BytesIO
from typing import Dict, List, Optional, Tuple

import httpx
from PIL import Image, UnidentifiedImageError

from .config import OPENROUTER_BASE_URL
from .data_models import LLMMetrics

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 1024 * 1024


class OpenRouterClient:
    """Minimal OpenAI-compatible chat-completions client for vision prompts."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENROUTER_BASE_URL,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def optimize_image_data(self, image_data: str, orig_mime: str, max_size: int = MAX_IMAGE_BYTES) -> Tuple[str, str]:
        """Re-encode and/or downscale an oversized base64 image.
        Returns (base64_data, mime_type). Never returns invalid/truncated Base64:
        if optimization cannot be performed safely, the original is returned.
        """
        try:
            decoded = base64.b64decode(image_data, validate=True)
        except ValueError as e:
            logger.warning(f"Could not decode screenshot for optimization: {e}; using original")
            return image_data, orig_mime

        if len(decoded) <= max_size:
            return image_data, orig_mime

        logger.info(f"Optimizing large image ({len(decoded)} bytes -> target: {max_size} bytes)")
        try:
            im = Image.open(BytesIO(decoded))
            if im.mode not in ("RGB", "L"):
                im = im.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Image optimization failed: {e}; using original")
            return image_data, orig_mime

        quality = 85
        scale = 1.0
        data = decoded
        for _ in range(8):
            buf = BytesIO()
            target = im
            if scale < 1.0:
                target = im.resize((max(64, int(im.width * scale)), max(64, int(im.height * scale))), Image.LANCZOS)
            target.save(buf, format="JPEG", optimize=True, quality=quality)
            data = buf.getvalue()
            if len(data) <= max_size or (quality <= 50 and scale <= 0.6):
                break
            # First reduce quality down to 50, then start downscaling
            if quality > 50:
                quality -= 10
            else:
                scale *= 0.85

        return base64.b64encode(data).decode("utf-8"), "image/jpeg"

    async def get_completion(
        self,
        model: str,
        messages: List[Dict],
        max_tokens: int = 1000,
        analysis_type: str = "",
        temperature: float = 0.2,
        max_retries: int = 2,
    ) -> Tuple[Dict, LLMMetrics]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        payload = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        start_time = time.time()
        result: Dict = {}
        for attempt in range(max_retries):
            logger.info(f"LLM API attempt {attempt + 1}/{max_retries} for {analysis_type} | model={model}")
            try:
                async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                    response = await client.post(f"{self.base_url}/chat/completions", headers=headers, json=payload)
                    response.raise_for_status()
                    result = response.json()
                break
            except httpx.HTTPError as he:
                status = he.response.status_code if isinstance(he, httpx.HTTPStatusError) else None
                # Client errors will not get better on retry
                if status is not None and 400 <= status < 500 and status != 429:
                    raise RuntimeError(f"HTTP {status} from chat completions: {he.response.text[:400]}") from he
                if attempt < max_retries - 1:
                    logger.warning(f"HTTP error ({type(he).__name__}, status: {status}), retrying...")
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise RuntimeError(
                    f"HTTP error from chat completions after {max_retries} attempts ({type(he).__name__}): status={status}"
                ) from he

        usage = result.get("usage") if isinstance(result, dict) else None
        if not isinstance(usage, dict):
            usage = {}
        response_time = time.time() - start_time
        metrics = LLMMetrics(
            model=model,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
            response_time=response_time,
            analysis_type=analysis_type,
            timestamp=datetime.now().isoformat(),
        )
        logger.info(
            f"LLM response_time={response_time:.2f}s; tokens: prompt={metrics.prompt_tokens}, "
            f"completion={metrics.completion_tokens}"
        )
        return result, metrics

    @staticmethod
    def message_text(response: Dict) -> str:
        """Assistant text of the first choice, or "" when the reply has any other shape."""
        choices = response.get("choices") if isinstance(response, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        if isinstance(content, list):
            content = "".join(
                part["text"] for part in content if isinstance(part, dict) and isinstance(part.get("text"), str)
            )
        return content if isinstance(content, str) else ""

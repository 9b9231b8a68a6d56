"""
JSON extraction from free-form model output.
The model is asked for a bare JSON object but often wraps it in prose or code fences.
"""

import json
import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_object_re = re.compile(r"\{[\s\S]*\}")
_trailing_comma_re = re.compile(r",\s*(\}|\])")


def extract_first_json(text: str, context: str = "generic") -> Optional[Dict]:
    """
    Extract the first JSON object from a model response.

    Args:
        text: Raw response text
        context: Short label used in logs

    Returns:
        The parsed object, or None when no JSON object can be recovered.
    """
    if not text or not isinstance(text, str):
        logger.warning(f"[{context}] Empty or invalid text provided to extract_first_json")
        return None

    s = text.strip()

    # Strip markdown code fences if present
    if s.startswith("```"):
        parts = s.split("```")
        if len(parts) >= 2:
            s = parts[1]
            if s.startswith("json"):
                s = s[4:]
            s = s.strip()

    match = _object_re.search(s)
    if not match:
        logger.warning(f"[{context}] No JSON object found in response")
        return None
    candidate = match.group(0)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"[{context}] Direct JSON parse failed: {e}")
        # Models commonly leave a trailing comma before a closer
        try:
            parsed = json.loads(_trailing_comma_re.sub(r"\1", candidate))
        except json.JSONDecodeError as e2:
            logger.warning(f"[{context}] Failed to parse JSON: {e2}; preview: {candidate[:300]!r}")
            return None

    if not isinstance(parsed, dict):
        logger.warning(f"[{context}] JSON payload is a {type(parsed).__name__}, expected an object")
        return None
    return parsed

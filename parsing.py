import json
import logging
import re
from typing import Any, Dict, Optional

from errors import ParseError

logger = logging.getLogger(__name__)

# Greedy: first "{" to last "}"
JSON_SPAN_RE = re.compile(r"\{[\s\S]*\}")
FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")

SMART_QUOTES = {
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
}


def extract_json_candidate(response_text: str) -> Optional[str]:
    """
    Find the text most likely to hold the model's JSON object.

    The brace span is tried before the fenced block, so a reply that
    contains both is read from its outermost braces.
    """
    if not response_text:
        return None

    # Remove thinking tags and keep the final answer
    if "</think>" in response_text:
        response_text = response_text.split("</think>")[-1]

    span = JSON_SPAN_RE.search(response_text)
    if span:
        return span.group(0)

    fenced = FENCED_BLOCK_RE.search(response_text)
    if fenced and fenced.group(1):
        return fenced.group(1)

    return None


def repair_json(candidate: str) -> str:
    """Fix the mistakes models make most often: smart quotes and trailing commas."""
    for smart, plain in SMART_QUOTES.items():
        candidate = candidate.replace(smart, plain)
    return TRAILING_COMMA_RE.sub(r"\1", candidate)


def parse_model_json(response_text: str) -> Dict[str, Any]:
    """
    Extract a JSON object from free-form model output.
    Raises ParseError when nothing usable is found; the raw text is logged.
    """
    candidate = extract_json_candidate(response_text)
    if candidate is None:
        logger.error(f"Failed to extract JSON from model response: {response_text!r}")
        raise ParseError(detail=response_text)

    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        try:
            data = json.loads(repair_json(candidate))
        except (json.JSONDecodeError, RecursionError) as e:
            logger.error(f"JSON parse error: {e}. Response: {response_text!r}")
            raise ParseError("Failed to parse AI response as JSON", detail=response_text)

    if not isinstance(data, dict):
        logger.error(f"Model response is not a JSON object: {response_text!r}")
        raise ParseError("Failed to parse AI response as JSON", detail=response_text)

    return data

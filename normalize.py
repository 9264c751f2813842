"""
Map loosely-typed model JSON onto fully-populated result models.

Every field has a default, so a reply missing any key still produces a
complete result.
"""
import math
import re
from typing import Any, Dict, Optional

from models import DiagnosisResult, IdentificationResult

DEFAULT_CONFIDENCE = 85

SEVERITY_SYNONYMS = {
    "none": "None",
    "healthy": "None",
    "mild": "Mild",
    "low": "Mild",
    "moderate": "Moderate",
    "medium": "Moderate",
    "severe": "Severe",
    "high": "Severe",
}

NUMBER_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*%?\s*$")


def normalize_severity(value: Any) -> str:
    """Case-insensitive synonym lookup; anything unrecognised is 'None'."""
    if not isinstance(value, str):
        return "None"
    return SEVERITY_SYNONYMS.get(value.strip().lower(), "None")


def normalize_confidence(value: Any, default: int = DEFAULT_CONFIDENCE) -> int:
    """Coerce a model confidence (int, fraction, '92%') into an int 0..100."""
    if isinstance(value, bool) or value is None:
        return default

    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        match = NUMBER_RE.match(value)
        if not match:
            return default
        number = float(match.group(1))
    else:
        return default

    # json accepts NaN, Infinity and 1e999
    if not math.isfinite(number):
        return default

    # 0.92 means 92%
    if 0 < number < 1:
        number *= 100
    return max(0, min(100, int(round(number))))


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, list):
        value = "; ".join(str(item).strip() for item in value if item is not None and str(item).strip())
    elif not isinstance(value, str):
        value = str(value)
    return value if value.strip() else default


def _first(data: Dict[str, Any], *keys: str) -> Optional[Any]:
    """Return the first key whose value is not blank."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, (str, list)) and not _text(value, ""):
            continue
        return value
    return None


def normalize_diagnosis(data: Dict[str, Any]) -> DiagnosisResult:
    return DiagnosisResult(
        diseaseName=_text(data.get("diseaseName"), "Unknown"),
        plantName=_text(data.get("plantName"), "Unknown"),
        severity=normalize_severity(data.get("severity")),
        symptoms=_text(_first(data, "symptoms", "description"), "No symptoms provided"),
        treatment=_text(data.get("treatment"), "Treatment not specified"),
        prevention=_text(data.get("prevention"), "No prevention info provided"),
        confidence=normalize_confidence(data.get("confidence")),
    )


def normalize_identification(data: Dict[str, Any]) -> IdentificationResult:
    return IdentificationResult(
        plantName=_text(data.get("plantName"), "Unknown"),
        scientificName=_text(data.get("scientificName"), "Unknown"),
        plantType=_text(data.get("plantType"), "Unknown"),
        suitableEnvironment=_text(data.get("suitableEnvironment"), "Not specified"),
        careInstructions=_text(data.get("careInstructions"), "No care instructions provided"),
        confidence=normalize_confidence(data.get("confidence")),
    )

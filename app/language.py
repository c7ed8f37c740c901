# app/language.py
"""
Language detection for product records.

The detected code picks the instruction sentence of the analysis prompt, so
anything inconclusive degrades to English instead of failing the request.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from langdetect import DetectorFactory, LangDetectException, detect as _langdetect

from app.config import FALLBACK_LANGUAGE, get_logger

logger = get_logger(__name__)

# langdetect is probabilistic; a fixed seed keeps results reproducible
DetectorFactory.seed = 0

# Checked in this order; the first non-blank string wins
TEXT_FIELDS = ("description", "title", "name", "productName", "label")


@dataclass(frozen=True)
class DetectionResult:
    language: str
    fallback_reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None


def detect(text: str) -> DetectionResult:
    """Detect the language of `text`, reporting why the fallback was used if it was."""
    if not text or not text.strip():
        return DetectionResult(FALLBACK_LANGUAGE, "empty text")

    try:
        code = _langdetect(text)
    except LangDetectException as e:
        return DetectionResult(FALLBACK_LANGUAGE, f"detection failed: {e}")
    except Exception as e:
        return DetectionResult(FALLBACK_LANGUAGE, f"detection failed: {type(e).__name__}: {e}")

    if not code or code == "unknown":
        return DetectionResult(FALLBACK_LANGUAGE, "undetermined")

    # langdetect reports a few languages with a region (zh-cn, zh-tw)
    return DetectionResult(code.split("-")[0].lower())


def detect_language(text: str) -> str:
    result = detect(text)
    if result.is_fallback:
        logger.warning(f"Language detection fell back to '{result.language}': {result.fallback_reason}")
    return result.language


def resolve_language(record: Mapping[str, Any]) -> str:
    """
    Return the language of the first populated text field in `record`.

    Only the first qualifying field in TEXT_FIELDS is looked at. If none
    holds a non-blank string, the fallback language is returned without
    running detection at all.
    """
    for field in TEXT_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and value.strip():
            return detect_language(value)
    return FALLBACK_LANGUAGE

"""
User-facing advisories for scan outcomes.

Maps a FailureKind (never exception text) to the message shown in the UI, and
trims the OCR text shown verbatim when structuring failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config import API_KEY_ENV, RAW_TEXT_PREVIEW_CHARS
from domain.outcome import FailureKind, ScanOutcome
from extraction import has_meaningful_data


@dataclass(frozen=True)
class Advisory:
    level: str  # "info" | "warning" | "error"
    message: str
    code: Optional[str] = None


ADVISORY_MESSAGES = {
    FailureKind.AUTHENTICATION_FAILURE: (
        "Model API authentication failed. The API key may be invalid or expired."
    ),
    FailureKind.QUOTA_EXCEEDED: (
        "Model API quota exceeded. Please check your billing or try again later."
    ),
    FailureKind.SERVICE_UNAVAILABLE: (
        "Model not found. The model name may be incorrect, please check the model configuration."
    ),
    FailureKind.EMPTY_RESPONSE: "The model returned no content for this label.",
    FailureKind.PARSING_FAILED: "AI parsing failed. The model response could not be read.",
    FailureKind.UPSTREAM_ERROR: "AI parsing failed because the model service returned an error.",
}

NOTHING_FOUND_MESSAGE = "No product information could be identified on this label."
RAW_TEXT_SUFFIX = " Showing raw OCR text."


def raw_text_preview(text: Optional[str], limit: int = RAW_TEXT_PREVIEW_CHARS) -> Optional[str]:
    if not text or not text.strip():
        return None
    return text[:limit]


def not_configured_advisory(has_text: bool) -> Advisory:
    message = f"Model API key not configured. Add {API_KEY_ENV} for AI parsing."
    if has_text:
        return Advisory("warning", message + RAW_TEXT_SUFFIX, code="not_configured")
    return Advisory("error", message, code="not_configured")


def advisory_for(outcome: ScanOutcome) -> Optional[Advisory]:
    """Return the message for ``outcome``, or None when the record has data."""
    if outcome.failure is not None:
        message = ADVISORY_MESSAGES[outcome.failure]
        if raw_text_preview(outcome.source_text):
            message += RAW_TEXT_SUFFIX
        level = "warning" if outcome.failure is FailureKind.QUOTA_EXCEEDED else "error"
        return Advisory(level, message, code=outcome.failure.value)

    if not has_meaningful_data(outcome.record):
        return Advisory("info", NOTHING_FOUND_MESSAGE, code="no_data")

    return None

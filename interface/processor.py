"""
Scan processing for the UI.

Runs on-device OCR first and structures the text; when OCR yields nothing the
image goes to the vision call instead. Returns the outcome together with the
advisory to show, so the page only has to render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from domain.outcome import ScanOutcome
from extraction import ConfigurationError, scan_image, scan_text
from input_readers import OcrError, OcrWorker

from .advisory import Advisory, advisory_for, not_configured_advisory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanReport:
    outcome: Optional[ScanOutcome]
    advisory: Optional[Advisory]
    strategy: str  # "text" | "vision" | "none"


def _run_ocr(image_bytes: bytes, ocr_worker: Optional[OcrWorker]) -> Optional[str]:
    if ocr_worker is None:
        return None
    try:
        text = ocr_worker.extract_text(image_bytes)
    except OcrError as e:
        logger.warning("On-device OCR failed, falling back to vision: %s", e)
        return None
    return text or None


def process_label(
    image_bytes: bytes,
    mime_type: str,
    ocr_worker: Optional[OcrWorker] = None,
    api_key: Optional[str] = None,
) -> ScanReport:
    ocr_text = _run_ocr(image_bytes, ocr_worker)

    if ocr_text:
        try:
            outcome = scan_text(ocr_text, api_key=api_key)
        except ConfigurationError as e:
            logger.warning("%s", e)
            return ScanReport(
                ScanOutcome(source_text=ocr_text), not_configured_advisory(has_text=True), "none"
            )
        return ScanReport(outcome, advisory_for(outcome), "text")

    try:
        outcome = scan_image(image_bytes, mime_type, api_key=api_key)
    except ConfigurationError as e:
        logger.warning("%s", e)
        return ScanReport(None, not_configured_advisory(has_text=False), "none")
    return ScanReport(outcome, advisory_for(outcome), "vision")

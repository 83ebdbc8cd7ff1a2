"""
LLM-based extraction into the ProductRecord format.

This module provides a single normalized interface to convert a product label from:
- OCR text (extracted on-device)
- Images (vision input)

into a ScanOutcome (a ProductRecord plus an optional FailureKind).

Core responsibilities:
- Build the prompt and call the model gateway.
- Parse model output into JSON reliably (including markdown-wrapped JSON).
- Flatten grouped output and validate it into a ProductRecord.
- Turn every upstream or parsing failure into an all-empty record with its
  FailureKind. Only ConfigurationError propagates.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from config import DEFAULT_MODEL
from domain.outcome import FailureKind, ScanOutcome
from domain.product import ProductRecord

from .errors import ConfigurationError, GatewayError, MalformedJson
from .llm_client import GatewayMode, ModelGateway, resolve_api_key
from .prompts import build_image_messages, build_text_messages
from .shape import normalize_shape
from .validation import validate_record

logger = logging.getLogger(__name__)


def parse_llm_response(raw_response: str) -> Dict[str, Any]:
    """Parse model output into a JSON object, handling possible markdown code fences."""
    raw = (raw_response or "").strip()

    if raw.startswith("```"):
        match = re.search(r"```(?:json)?\s*(\{.*\})\s*```", raw, flags=re.DOTALL)
        if match:
            raw = match.group(1)
        else:
            raw = re.sub(r"```(?:json)?", "", raw).strip()

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        match = re.search(r"\{.*\}", raw, flags=re.DOTALL)
        if not match:
            raise MalformedJson(f"LLM did not return valid JSON. Error: {e}\nGot: {raw[:500]}") from e
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as inner:
            raise MalformedJson(f"LLM did not return valid JSON. Error: {inner}\nGot: {raw[:500]}") from inner

    if not isinstance(parsed, dict):
        raise MalformedJson(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def empty_outcome(failure: Optional[FailureKind] = None, source_text: Optional[str] = None) -> ScanOutcome:
    """All fields missing, tagged with why."""
    return ScanOutcome(record=ProductRecord(), failure=failure, source_text=source_text)


def has_meaningful_data(record: ProductRecord) -> bool:
    return not record.is_empty()


def _run_extraction(
    messages: List[Dict[str, Any]],
    mode: GatewayMode,
    gateway: ModelGateway,
    source_text: Optional[str] = None,
) -> ScanOutcome:
    try:
        raw_output = gateway.complete(messages, mode)
        parsed = parse_llm_response(raw_output)
        record = validate_record(normalize_shape(parsed))
    except ConfigurationError:
        raise
    except GatewayError as e:
        logger.error("Model call failed [%s]: %s", e.kind.value, e)
        return empty_outcome(e.kind, source_text)
    except MalformedJson as e:
        logger.error("Could not parse model output: %s", e)
        return empty_outcome(FailureKind.PARSING_FAILED, source_text)
    except Exception:
        logger.exception("Unexpected error during %s extraction", mode.value)
        return empty_outcome(FailureKind.UPSTREAM_ERROR, source_text)

    return ScanOutcome(record=record, source_text=source_text)


def extract_from_text(ocr_text: str, gateway: ModelGateway) -> ScanOutcome:
    """Structure OCR text into a ProductRecord. Blank text short-circuits without a model call."""
    if not ocr_text or not ocr_text.strip():
        logger.info("No OCR text to structure, skipping model call")
        return empty_outcome(source_text=ocr_text)

    return _run_extraction(build_text_messages(ocr_text), GatewayMode.TEXT, gateway, source_text=ocr_text)


def extract_from_image(image_bytes: bytes, mime_type: str, gateway: ModelGateway) -> ScanOutcome:
    """Structure a label image into a ProductRecord using the vision call."""
    if not image_bytes:
        logger.info("Empty image payload, skipping model call")
        return empty_outcome()

    return _run_extraction(build_image_messages(image_bytes, mime_type), GatewayMode.IMAGE, gateway)


def scan_text(
    ocr_text: str,
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    timeout: Optional[float] = None,
) -> ScanOutcome:
    """
    One-shot text scan with a gateway built from ``api_key`` or the environment.

    Raises:
        ConfigurationError: If no API key is available (checked before any network call)
    """
    with ModelGateway(resolve_api_key(api_key), model=model, timeout=timeout) as gateway:
        return extract_from_text(ocr_text, gateway)


def scan_image(
    image_bytes: bytes,
    mime_type: str,
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    timeout: Optional[float] = None,
) -> ScanOutcome:
    """
    One-shot image scan with a gateway built from ``api_key`` or the environment.

    Raises:
        ConfigurationError: If no API key is available (checked before any network call)
    """
    with ModelGateway(resolve_api_key(api_key), model=model, timeout=timeout) as gateway:
        return extract_from_image(image_bytes, mime_type, gateway)

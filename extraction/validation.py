"""
Validation of flattened model output into a ProductRecord.

Two phases, each usable on its own:
- strict_validate(): pydantic validation against the canonical schema. Reports
  issues instead of raising.
- best_effort_extract(): copies every field that has a plausible type and
  drops the rest. Never fails.

validate_record() chains them so a malformed response still yields a record.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from domain.product import (
    MAPPING_FIELDS,
    NESTED_FIELDS,
    SCALAR_FIELDS,
    SEQUENCE_FIELDS,
    ProductRecord,
    field_alias,
)

from .errors import SchemaValidationWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    record: Optional[ProductRecord] = None
    issues: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.record is not None


def _format_issue(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location or '<root>'}: {error.get('msg', 'invalid value')}"


def strict_validate(flat: Dict[str, Any]) -> ValidationResult:
    try:
        return ValidationResult(record=ProductRecord.model_validate(flat))
    except ValidationError as e:
        return ValidationResult(issues=tuple(_format_issue(err) for err in e.errors()))


def _lookup(data: Dict[str, Any], model: type, name: str) -> Any:
    alias = field_alias(model, name)
    if alias in data:
        return data[alias]
    return data.get(name)


def _plausible_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(value)
    return None


def _plausible_sequence(value: Any) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    items = [_plausible_str(item) for item in value]
    return [item for item in items if item is not None] or None


def _plausible_mapping(value: Any) -> Optional[Dict[str, str]]:
    if not isinstance(value, dict):
        return None
    mapping = {}
    for key, item in value.items():
        text = _plausible_str(item)
        if text is not None:
            mapping[str(key)] = text
    return mapping or None


def _plausible_nested(value: Any, model: type) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        return None
    return {name: _plausible_str(_lookup(value, model, name)) for name in model.model_fields}


def best_effort_extract(flat: Dict[str, Any]) -> ProductRecord:
    """Build a record from whatever fields in ``flat`` have a usable type."""
    values: Dict[str, Any] = {}

    for name in SCALAR_FIELDS:
        values[name] = _plausible_str(_lookup(flat, ProductRecord, name))
    for name in SEQUENCE_FIELDS:
        values[name] = _plausible_sequence(_lookup(flat, ProductRecord, name))
    for name, model in NESTED_FIELDS.items():
        values[name] = _plausible_nested(_lookup(flat, ProductRecord, name), model)
    for name in MAPPING_FIELDS:
        values[name] = _plausible_mapping(_lookup(flat, ProductRecord, name))

    return ProductRecord.model_validate(values)


def validate_record(flat: Dict[str, Any]) -> ProductRecord:
    """Strictly validate ``flat``; on issues log a warning and fall back to best effort."""
    result = strict_validate(flat)
    if result.ok:
        return result.record

    logger.warning(
        "%s: %d schema issue(s), using best-effort extraction: %s",
        SchemaValidationWarning.__name__,
        len(result.issues),
        "; ".join(result.issues),
    )
    return best_effort_extract(flat)

"""
Shape normalization for raw model output.

The model is asked for a flat object but sometimes mirrors the prompt's
section headings and returns the fields grouped under them. classify_shape()
tells the two apart and flatten_grouped() lifts the grouped fields back into
the flat layout the validator expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


class GroupKey(str, Enum):
    BASIC_INFORMATION = "Basic Information"
    DATES_AND_BATCH = "Dates & Batch"
    INGREDIENTS_AND_NUTRITION = "Ingredients & Nutrition"
    MANUFACTURING_AND_REGULATORY = "Manufacturing & Regulatory"
    CONTACT_INFORMATION = "Contact Information"
    OTHER_DETAILS = "Other Details"


@dataclass(frozen=True)
class FlatShape:
    data: Dict[str, Any]


@dataclass(frozen=True)
class GroupedShape:
    data: Dict[str, Any]


RawShape = Union[FlatShape, GroupedShape]


def is_flat(raw: Dict[str, Any]) -> bool:
    """True if the object already uses field names at the top level."""
    if raw.get("name") or raw.get("company"):
        return True
    return not raw.get(GroupKey.BASIC_INFORMATION.value) and not raw.get(GroupKey.DATES_AND_BATCH.value)


def classify_shape(raw: Dict[str, Any]) -> RawShape:
    return FlatShape(raw) if is_flat(raw) else GroupedShape(raw)


def _group(raw: Dict[str, Any], key: GroupKey) -> Dict[str, Any]:
    value = raw.get(key.value)
    return value if isinstance(value, dict) else {}


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _join_licenses(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_to_text(v) for v in value)
    return _to_text(value)


def flatten_grouped(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Lift fields out of the six category groups into one flat dict.

    Missing groups are skipped. Falsy values inside a group are treated as
    absent, so an empty string or 0 is dropped rather than copied.
    """
    flat: Dict[str, Any] = {}

    for key in (GroupKey.BASIC_INFORMATION, GroupKey.DATES_AND_BATCH):
        flat.update({name: value for name, value in _group(raw, key).items() if value})

    nutrition = _group(raw, GroupKey.INGREDIENTS_AND_NUTRITION)
    if nutrition.get("ingredients"):
        flat["ingredients"] = nutrition["ingredients"]
    if nutrition.get("nutritionalInfo"):
        flat["nutritionalInfo"] = nutrition["nutritionalInfo"]

    manufacturing = _group(raw, GroupKey.MANUFACTURING_AND_REGULATORY)
    if manufacturing.get("manufacturingAddresses"):
        flat["manufacturingAddresses"] = manufacturing["manufacturingAddresses"]
    if manufacturing.get("fssaiLicense"):
        flat["fssaiLicense"] = _join_licenses(manufacturing["fssaiLicense"])
    if manufacturing.get("vegetarian"):
        flat["vegetarian"] = _to_text(manufacturing["vegetarian"])

    contact = _group(raw, GroupKey.CONTACT_INFORMATION)
    if contact.get("consumerContact"):
        flat["consumerContact"] = contact["consumerContact"]

    other = _group(raw, GroupKey.OTHER_DETAILS)
    if other.get("otherDetails"):
        flat["otherDetails"] = other["otherDetails"]

    return flat


def normalize_shape(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return a flat dict; flat input is returned unchanged (same object)."""
    shape = classify_shape(raw)
    if isinstance(shape, GroupedShape):
        return flatten_grouped(shape.data)
    return shape.data

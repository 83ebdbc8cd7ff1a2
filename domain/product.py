"""
ProductRecord schema definition.

The canonical, flat product record every scan normalizes into, whether the
source was OCR text or a label image. Field names follow the camelCase names
the model is asked to return (``netWeight``, ``fssaiLicense``...) through
pydantic aliases; Python code uses the snake_case attributes.

Every field is optional and ``None`` is the only missing value: upstream
``null``, absent keys, blank strings, empty lists/objects and nested records
with nothing set all collapse to ``None``; blank items inside lists and
mappings are dropped first. Records are frozen and hashable, sequences are
stored as tuples and ``otherDetails`` as a read-only mapping.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


def _blank_to_none(value: Any) -> Any:
    if _is_blank(value):
        return None
    if isinstance(value, (list, tuple)):
        value = [item for item in value if not _is_blank(item)]
    elif isinstance(value, Mapping):
        value = {key: item for key, item in value.items() if not _is_blank(item)}
    else:
        return value
    return value or None


class CanonicalModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return all(getattr(self, name) is None for name in type(self).model_fields)

    def to_json_dict(self) -> Dict[str, Any]:
        """Camel-cased dict with missing fields left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class NutritionalInfo(CanonicalModel):
    energy: Optional[str] = None
    protein: Optional[str] = None
    total_carbohydrate: Optional[str] = None
    sugars: Optional[str] = None
    total_fat: Optional[str] = None
    saturated_fat: Optional[str] = None
    trans_fat: Optional[str] = None
    sodium: Optional[str] = None
    serving_size: Optional[str] = None


class ConsumerContact(CanonicalModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None


class ProductRecord(CanonicalModel):
    # Identity
    name: Optional[str] = None
    company: Optional[str] = None
    manufacturer: Optional[str] = None
    trademark: Optional[str] = None
    barcode: Optional[str] = None

    # Commerce (free-form, never parsed as numbers)
    net_weight: Optional[str] = None
    mrp: Optional[str] = None
    price: Optional[str] = None

    # Dates are opaque display strings
    expiry_date: Optional[str] = None
    best_before: Optional[str] = None
    manufacturing_date: Optional[str] = None
    batch_number: Optional[str] = None

    ingredients: Optional[Tuple[str, ...]] = None
    nutritional_info: Optional[NutritionalInfo] = None

    manufacturing_addresses: Optional[Tuple[str, ...]] = None
    fssai_license: Optional[str] = None
    vegetarian: Optional[str] = None

    consumer_contact: Optional[ConsumerContact] = None
    other_details: Optional[Mapping[str, str]] = None

    @field_validator("nutritional_info", "consumer_contact", mode="after")
    @classmethod
    def _collapse_empty_nested(cls, value: Optional[CanonicalModel]) -> Optional[CanonicalModel]:
        if value is not None and value.is_empty():
            return None
        return value

    @field_validator("other_details", mode="after")
    @classmethod
    def _freeze_details(cls, value: Optional[Mapping[str, str]]) -> Optional[Mapping[str, str]]:
        return MappingProxyType(dict(value)) if value is not None else None

    @field_serializer("other_details")
    def _serialize_details(self, value: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
        return dict(value) if value is not None else None

    def __hash__(self) -> int:
        values = tuple(
            tuple(sorted(value.items())) if isinstance(value, Mapping) else value
            for value in self.__dict__.values()
        )
        return hash((type(self), values))


SCALAR_FIELDS: Tuple[str, ...] = (
    "name",
    "company",
    "manufacturer",
    "trademark",
    "barcode",
    "net_weight",
    "mrp",
    "price",
    "expiry_date",
    "best_before",
    "manufacturing_date",
    "batch_number",
    "fssai_license",
    "vegetarian",
)
SEQUENCE_FIELDS: Tuple[str, ...] = ("ingredients", "manufacturing_addresses")
NESTED_FIELDS: Dict[str, type] = {
    "nutritional_info": NutritionalInfo,
    "consumer_contact": ConsumerContact,
}
MAPPING_FIELDS: Tuple[str, ...] = ("other_details",)


def field_alias(model: type, name: str) -> str:
    """Return the camelCase key used for ``name`` in model output."""
    return model.model_fields[name].alias or name
